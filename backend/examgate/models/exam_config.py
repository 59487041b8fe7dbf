"""Exam configuration singleton."""

from sqlalchemy import Column, Integer, DateTime, CheckConstraint

from ..config import DEFAULT_EXAM_LENGTH_MINUTES
from ..database import Base
from ..utils import utcnow


class ExamConfig(Base):
    """Exactly one row exists; it is created by the seed routine and only ever updated."""
    __tablename__ = "exam_config"
    __table_args__ = (
        CheckConstraint("exam_length_in_minutes > 0", name="ck_exam_config_length_positive"),
    )

    id = Column(Integer, primary_key=True)
    exam_length_in_minutes = Column(Integer, nullable=False, default=DEFAULT_EXAM_LENGTH_MINUTES)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<ExamConfig(exam_length_in_minutes={self.exam_length_in_minutes})>"
