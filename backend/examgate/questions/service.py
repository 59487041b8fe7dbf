"""Question bank, capped per step."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..config import QUESTIONS_PER_STEP
from ..database import atomic
from ..errors import BadRequestError, NotFoundError
from ..models import Question, Step
from .schemas import QuestionCreate, QuestionUpdate

logger = logging.getLogger(__name__)


class QuestionService:
    def __init__(self, db: Session):
        self.db = db

    def get_question(self, question_id: str) -> Question:
        question = self.db.get(Question, question_id)
        if question is None:
            raise NotFoundError("Question not found")
        return question

    def list_questions(self, step: Optional[Step] = None) -> list[Question]:
        query = self.db.query(Question)
        if step is not None:
            query = query.filter(Question.step == step)
        return query.order_by(Question.created_at).all()

    def count_for_step(self, step: Step) -> int:
        return self.db.query(Question).filter(Question.step == step).count()

    def create_question(self, data: QuestionCreate) -> Question:
        self._ensure_room(data.step)
        with atomic(self.db):
            question = Question(**data.model_dump())
            self.db.add(question)
        return question

    def update_question(self, question_id: str, data: QuestionUpdate) -> Question:
        question = self.get_question(question_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("step") is not None and changes["step"] != question.step:
            self._ensure_room(changes["step"])
        with atomic(self.db):
            for field, value in changes.items():
                if value is None and field != "image_url":
                    continue
                setattr(question, field, value)
        return question

    def delete_question(self, question_id: str) -> None:
        with atomic(self.db):
            self.db.delete(self.get_question(question_id))

    def _ensure_room(self, step: Step) -> None:
        if self.count_for_step(step) >= QUESTIONS_PER_STEP:
            raise BadRequestError(
                f"You can only create a maximum of {QUESTIONS_PER_STEP} questions for each step."
            )
