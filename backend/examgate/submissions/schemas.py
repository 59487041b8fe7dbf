from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import Step, Level


class QuestionAnswer(BaseModel):
    model_config = ConfigDict(extra="forbid")

    question: str
    image_url: Optional[str] = None
    answer: str
    correct: Optional[bool] = None


class SubmissionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    step: Step
    questions_and_answers: list[QuestionAnswer] = Field(..., min_length=1)


class SubmissionUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    questions_and_answers: Optional[list[QuestionAnswer]] = Field(None, min_length=1)


class SubmissionResponse(BaseModel):
    id: str
    submitted_by_id: str
    step: Step
    questions_and_answers: list[QuestionAnswer]
    level: Optional[Level]
    examined_by_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
