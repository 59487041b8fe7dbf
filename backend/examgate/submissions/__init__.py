"""Submission lifecycle package."""
from .grading import compute_level, percentage
from .deadline import is_expired
from .service import SubmissionService
from .router import router as submissions_router

__all__ = [
    "compute_level",
    "percentage",
    "is_expired",
    "SubmissionService",
    "submissions_router",
]
