"""Authentication service: OTP login with lockout, token verification and rotation."""
import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Optional

import bcrypt
from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..config import (
    BCRYPT_SALT_ROUNDS, OTP_EXPIRE_MINUTES, MAX_FAILED_OTP_ATTEMPTS,
    OTP_LOCKOUT_MINUTES, REFRESHED_ACCESS_TOKEN_EXPIRE_MINUTES,
    REFRESH_COOKIE_NAME, NEW_ACCESS_TOKEN_HEADER,
)
from ..database import get_db, atomic
from ..errors import (
    NotFoundError, ForbiddenError, UnauthorizedError, LockedOutError,
    InvalidCredentialsError, OtpExpiredError,
)
from ..models import User, Role, ALL_ROLES
from ..utils import utcnow, normalize_email
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    user: User
    # Set when the request was authenticated through the refresh token
    new_access_token: Optional[str] = None


def generate_otp() -> str:
    """Generate a 5-digit numeric one-time passcode."""
    return str(10000 + secrets.randbelow(90000))


def hash_otp(otp: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_SALT_ROUNDS)
    return bcrypt.hashpw(otp.encode("utf-8"), salt).decode("utf-8")


def verify_otp(otp: str, hashed_otp: Optional[str]) -> bool:
    if not hashed_otp:
        return False
    return bcrypt.checkpw(otp.encode("utf-8"), hashed_otp.encode("utf-8"))


class AuthService:
    def __init__(self, db: Session, issuer: Optional[TokenIssuer] = None):
        self.db = db
        self.issuer = issuer or TokenIssuer()

    def request_otp(self, email: str) -> str:
        """Issue a fresh OTP for the email, registering a student on first contact.

        Returns the plaintext OTP; only its hash is stored.
        """
        email = normalize_email(email)
        otp = generate_otp()
        with atomic(self.db):
            user = self.db.query(User).filter(User.email == email).with_for_update().first()
            if user is None:
                user = User(email=email, role=Role.STUDENT)
                self.db.add(user)
                logger.info(f"Registered new student {email}")
            user.otp = hash_otp(otp)
            user.otp_expires_at = utcnow() + timedelta(minutes=OTP_EXPIRE_MINUTES)
        logger.info(f"OTP issued for {email}")
        return otp

    def verify_otp_and_login(self, email: str, otp: str) -> User:
        """Check an OTP against the stored hash, enforcing expiry and lockout.

        The whole read-modify-write runs in one transaction on a row lock, so
        concurrent attempts cannot lose failure increments. Failed attempts are
        committed before the error is raised.
        """
        email = normalize_email(email)
        now = utcnow()
        error = None
        with atomic(self.db):
            user = (
                self.db.query(User)
                .filter(User.email == email, User.active.is_(True))
                .with_for_update()
                .first()
            )
            if user is None:
                raise NotFoundError("User not found")
            if user.is_locked(now):
                raise LockedOutError()

            # An expired lock opens a fresh window; otherwise failures keep accumulating
            previous_failures = 0 if user.locked_until is not None else (user.failed_otp_attempts or 0)
            user.failed_otp_attempts = 0
            user.locked_until = None

            if user.otp_expires_at is not None and now > user.otp_expires_at:
                error = OtpExpiredError()
            elif not verify_otp(otp, user.otp):
                user.failed_otp_attempts = previous_failures + 1
                if user.failed_otp_attempts >= MAX_FAILED_OTP_ATTEMPTS:
                    user.locked_until = now + timedelta(minutes=OTP_LOCKOUT_MINUTES)
                    logger.warning(f"Locked {email} until {user.locked_until} after {user.failed_otp_attempts} failed OTP attempts")
                error = InvalidCredentialsError()
            else:
                user.clear_otp()

        if error is not None:
            logger.warning(f"Rejected login for {email}: {error.message}")
            raise error
        logger.info(f"User {user.id} logged in")
        return user

    def authenticate(self, access_token: Optional[str], roles: Iterable[Role]) -> User:
        """Resolve the user behind an access token and check their role."""
        if not access_token:
            raise UnauthorizedError("Access token is required")
        user_id = self.issuer.decode_access_token(access_token)
        return self._resolve_user(user_id, roles)

    def authenticate_or_refresh(
        self,
        access_token: Optional[str],
        refresh_token: Optional[str],
        roles: Iterable[Role],
    ) -> AuthContext:
        """Authenticate with the access token, or fall back to the refresh token.

        The fallback only applies when no access token was sent at all; it mints a
        short-lived access token for the caller to pick up from this response.
        """
        if access_token:
            return AuthContext(user=self.authenticate(access_token, roles))
        if not refresh_token:
            raise UnauthorizedError("Refresh token is required")
        user_id = self.issuer.decode_refresh_token(refresh_token)
        user = self._resolve_user(user_id, roles)
        new_access_token = self.issuer.create_access_token(
            user.id, expires_delta=timedelta(minutes=REFRESHED_ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        return AuthContext(user=user, new_access_token=new_access_token)

    def _resolve_user(self, user_id: str, roles: Iterable[Role]) -> User:
        user = self.db.get(User, user_id)
        if user is None or not user.active:
            raise NotFoundError("User not found")
        if user.role not in set(roles):
            raise ForbiddenError("You do not have permission to access this resource")
        return user


class RoleChecker:
    """Authorization dependency: the caller must hold one of the given roles."""

    def __init__(self, *roles: Role):
        self.roles = frozenset(roles or ALL_ROLES)

    def __call__(
        self,
        request: Request,
        response: Response,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        db: Session = Depends(get_db),
    ) -> User:
        access_token = credentials.credentials if credentials else None
        refresh_token = request.cookies.get(REFRESH_COOKIE_NAME)
        context = AuthService(db).authenticate_or_refresh(access_token, refresh_token, self.roles)
        if context.new_access_token:
            response.headers[NEW_ACCESS_TOKEN_HEADER] = context.new_access_token
        return context.user


# Pre-configured role dependencies
any_role = RoleChecker(*ALL_ROLES)
admin_only = RoleChecker(Role.ADMIN)
student_only = RoleChecker(Role.STUDENT)
