from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExamConfigResponse(BaseModel):
    exam_length_in_minutes: int

    model_config = ConfigDict(from_attributes=True)


class ExamConfigUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    exam_length_in_minutes: Optional[int] = Field(None, gt=0)
