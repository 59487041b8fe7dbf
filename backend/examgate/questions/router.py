from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.service import any_role, admin_only
from ..database import get_db
from ..models import User, Step
from .schemas import QuestionCreate, QuestionUpdate, QuestionResponse
from .service import QuestionService

router = APIRouter(prefix="/questions", tags=["Questions"])


def get_question_service(db: Session = Depends(get_db)) -> QuestionService:
    return QuestionService(db)


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    data: QuestionCreate,
    current_user: User = Depends(admin_only),
    service: QuestionService = Depends(get_question_service),
):
    return service.create_question(data)


@router.get("", response_model=list[QuestionResponse])
async def list_questions(
    step: Optional[Step] = None,
    current_user: User = Depends(any_role),
    service: QuestionService = Depends(get_question_service),
):
    return service.list_questions(step=step)


@router.patch("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: str,
    data: QuestionUpdate,
    current_user: User = Depends(admin_only),
    service: QuestionService = Depends(get_question_service),
):
    return service.update_question(question_id, data)


@router.delete("/{question_id}")
async def delete_question(
    question_id: str,
    current_user: User = Depends(admin_only),
    service: QuestionService = Depends(get_question_service),
):
    service.delete_question(question_id)
    return {"message": "Question deleted successfully"}
