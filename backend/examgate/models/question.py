"""Question bank model."""

from sqlalchemy import Column, String, Text, DateTime, Enum as SQLEnum
import uuid

from ..database import Base
from ..utils import utcnow
from .enums import Step, Level


class Question(Base):
    """Question model."""
    __tablename__ = "questions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    question = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    step = Column(SQLEnum(Step), nullable=False, index=True)
    level = Column(SQLEnum(Level), nullable=False)
    competency = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Question(id={self.id}, step={self.step})>"
