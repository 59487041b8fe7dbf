from .service import QuestionService
from .router import router as questions_router

__all__ = ["QuestionService", "questions_router"]
