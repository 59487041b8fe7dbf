"""Exam configuration singleton."""
from .service import ExamConfigService
from .router import router as config_router

__all__ = ["ExamConfigService", "config_router"]
