"""User model."""

from sqlalchemy import Boolean, Column, String, DateTime, Enum as SQLEnum, Integer
import uuid

from ..database import Base
from ..utils import utcnow
from .enums import Role


class User(Base):
    """Exam participant or staff member. Doubles as the OTP credential record."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=True)
    role = Column(SQLEnum(Role), nullable=False, default=Role.STUDENT)
    active = Column(Boolean, nullable=False, default=True)
    otp = Column(String(255), nullable=True)
    otp_expires_at = Column(DateTime, nullable=True)
    failed_otp_attempts = Column(Integer, nullable=False, default=0)
    locked_until = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"

    def is_locked(self, now=None) -> bool:
        """Check if the user account is locked."""
        now = now or utcnow()
        return self.locked_until is not None and self.locked_until > now

    def clear_otp(self) -> None:
        self.otp = None
        self.otp_expires_at = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_supervisor(self) -> bool:
        return self.role == Role.SUPERVISOR

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT
