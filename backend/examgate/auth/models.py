"""Request/response schemas for authentication."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..models.enums import Role
from ..utils import normalize_email


class OtpResponse(BaseModel):
    message: str
    # Only populated when OTP_IN_RESPONSE is enabled
    otp: Optional[str] = None


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    otp: str = Field(..., min_length=5, max_length=5)

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("otp")
    @classmethod
    def digits_only(cls, v: str) -> str:
        if not v.isdigit():
            raise ValueError("OTP must be numeric")
        return v


class UserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str]
    role: Role
    active: bool

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
