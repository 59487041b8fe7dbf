"""Submission model."""

from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SQLEnum, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from ..database import Base
from ..utils import utcnow
from .enums import Step, Level


class Submission(Base):
    """One evaluation attempt for one (student, step) pair."""
    __tablename__ = "submissions"
    __table_args__ = (
        UniqueConstraint("submitted_by_id", "step", name="uq_submissions_submitted_by_step"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    submitted_by_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    step = Column(SQLEnum(Step), nullable=False)
    # [{"question": str, "image_url": str | None, "answer": str, "correct": bool | None}, ...]
    questions_and_answers = Column(JSON, nullable=False, default=list)
    level = Column(SQLEnum(Level), nullable=True)
    examined_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    submitted_by = relationship("User", foreign_keys=[submitted_by_id])
    examined_by = relationship("User", foreign_keys=[examined_by_id])

    def __repr__(self):
        return f"<Submission(id={self.id}, step={self.step}, level={self.level})>"

    @property
    def is_graded(self) -> bool:
        return self.level is not None

    @property
    def is_passing(self) -> bool:
        return self.level is not None and self.level != Level.FAIL

    @property
    def answer_count(self) -> int:
        return len(self.questions_and_answers or [])
