from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from ..models.enums import Role
from ..utils import normalize_email


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    name: Optional[str] = None
    role: Role

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, v):
        return normalize_email(v) if isinstance(v, str) else v


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: Optional[EmailStr] = None
    name: Optional[str] = None
    role: Optional[Role] = None
    active: Optional[bool] = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, v):
        return normalize_email(v) if isinstance(v, str) else v
