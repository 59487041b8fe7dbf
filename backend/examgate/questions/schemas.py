from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import Step, Level


class QuestionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    question: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    step: Step
    level: Level
    competency: str = Field(..., min_length=1, max_length=100)


class QuestionUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    question: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None
    step: Optional[Step] = None
    level: Optional[Level] = None
    competency: Optional[str] = Field(None, min_length=1, max_length=100)


class QuestionResponse(BaseModel):
    id: str
    question: str
    image_url: Optional[str]
    step: Step
    level: Level
    competency: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
