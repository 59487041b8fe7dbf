"""SQLAlchemy models for the exam backend."""

from .enums import Role, Step, Level, ALL_ROLES
from .user import User
from .submission import Submission
from .exam_config import ExamConfig
from .question import Question

__all__ = [
    "Role",
    "Step",
    "Level",
    "ALL_ROLES",
    "User",
    "Submission",
    "ExamConfig",
    "Question",
]
