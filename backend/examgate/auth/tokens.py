"""Signed access/refresh token handling."""
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Optional

from fastapi import Response
from jose import JWTError, jwt

from ..config import (
    ACCESS_TOKEN_SECRET, REFRESH_TOKEN_SECRET, ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES, REFRESH_TOKEN_EXPIRE_DAYS,
    REFRESH_COOKIE_NAME, COOKIE_SECURE,
)
from ..errors import UnauthorizedError

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class SessionTokens:
    access_token: str
    refresh_token: str


class TokenIssuer:
    """Mints and verifies JWTs bound to a user id.

    Access and refresh tokens are signed with different secrets, so one can
    never be replayed as the other.
    """

    def __init__(
        self,
        access_secret: str = ACCESS_TOKEN_SECRET,
        refresh_secret: str = REFRESH_TOKEN_SECRET,
        algorithm: str = ALGORITHM,
    ):
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.algorithm = algorithm

    def create_access_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a new access token."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
        return self._encode(user_id, ACCESS, self.access_secret, expires_delta)

    def create_refresh_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a new refresh token."""
        if expires_delta is None:
            expires_delta = timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)
        return self._encode(user_id, REFRESH, self.refresh_secret, expires_delta)

    def issue_session_tokens(self, user_id: str) -> SessionTokens:
        return SessionTokens(
            access_token=self.create_access_token(user_id),
            refresh_token=self.create_refresh_token(user_id),
        )

    def decode_access_token(self, token: str) -> str:
        """Return the user id bound to a valid access token."""
        return self._decode(token, ACCESS, self.access_secret, "Invalid or expired access token")

    def decode_refresh_token(self, token: str) -> str:
        """Return the user id bound to a valid refresh token."""
        return self._decode(token, REFRESH, self.refresh_secret, "Invalid refresh token, re-authenticate")

    def _encode(self, user_id: str, token_type: str, secret: str, expires_delta: timedelta) -> str:
        expire = datetime.now(UTC) + expires_delta
        # JWT exp claim must be a Unix timestamp (integer)
        to_encode = {"sub": str(user_id), "type": token_type, "exp": int(expire.timestamp())}
        return jwt.encode(to_encode, secret, algorithm=self.algorithm)

    def _decode(self, token: str, token_type: str, secret: str, message: str) -> str:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError:
            raise UnauthorizedError(message)
        user_id = payload.get("sub")
        if user_id is None or payload.get("type") != token_type:
            raise UnauthorizedError(message)
        return user_id


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    """Deliver the refresh token as an http-only, cross-site capable cookie."""
    response.set_cookie(
        REFRESH_COOKIE_NAME,
        refresh_token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="none",
        max_age=REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path="/",
    )


def clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        REFRESH_COOKIE_NAME,
        path="/",
        secure=COOKIE_SECURE,
        httponly=True,
        samesite="none",
    )
