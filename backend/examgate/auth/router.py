"""Authentication router: OTP request, login, logout, profile."""
import logging

from fastapi import APIRouter, Depends, Query, Response
from pydantic import EmailStr
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..models import User
from ..notifications import EmailNotifier, get_notifier
from ..utils import normalize_email
from .models import OtpResponse, LoginRequest, LoginResponse, UserResponse
from .service import AuthService, any_role
from .tokens import TokenIssuer, set_refresh_cookie, clear_refresh_cookie

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency to get an instance of AuthService."""
    return AuthService(db)


@router.get("/generate-otp", response_model=OtpResponse)
async def generate_otp(
    email: EmailStr = Query(...),
    service: AuthService = Depends(get_auth_service),
    notifier: EmailNotifier = Depends(get_notifier),
):
    """Issue a one-time passcode, registering the email as a student if it is new."""
    otp = service.request_otp(email)
    if config.OTP_IN_RESPONSE:
        return OtpResponse(message="OTP generated successfully", otp=otp)
    notifier.send_otp(normalize_email(email), otp)
    return OtpResponse(message="OTP sent to your email")


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    """Exchange an OTP for an access token; the refresh token travels as a cookie."""
    user = service.verify_otp_and_login(credentials.email, credentials.otp)
    tokens = TokenIssuer().issue_session_tokens(user.id)
    set_refresh_cookie(response, tokens.refresh_token)
    return LoginResponse(access_token=tokens.access_token, user=UserResponse.model_validate(user))


@router.post("/logout")
async def logout(response: Response):
    """Drop the refresh cookie. Tokens are not revoked server-side."""
    clear_refresh_cookie(response)
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
async def read_users_me(current_user: User = Depends(any_role)):
    """Get the current user's profile."""
    return current_user
