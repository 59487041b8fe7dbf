"""Test cases for access/refresh token handling."""
from datetime import timedelta

import pytest
from fastapi import Response
from jose import jwt

from examgate.auth.tokens import TokenIssuer, set_refresh_cookie, clear_refresh_cookie
from examgate.errors import UnauthorizedError


@pytest.fixture
def issuer():
    return TokenIssuer(access_secret="access-secret", refresh_secret="refresh-secret")


class TestTokenIssuer:

    def test_access_token_roundtrip(self, issuer):
        token = issuer.create_access_token("user-1")
        assert issuer.decode_access_token(token) == "user-1"

    def test_access_token_claims(self, issuer):
        token = issuer.create_access_token("user-1")
        payload = jwt.decode(token, "access-secret", algorithms=["HS256"])
        assert payload["sub"] == "user-1"
        assert payload["type"] == "access"
        assert isinstance(payload["exp"], int)

    def test_refresh_token_cannot_be_used_as_access_token(self, issuer):
        refresh_token = issuer.create_refresh_token("user-1")
        with pytest.raises(UnauthorizedError) as exc_info:
            issuer.decode_access_token(refresh_token)
        assert exc_info.value.message == "Invalid or expired access token"

    def test_access_token_cannot_be_used_as_refresh_token(self, issuer):
        access_token = issuer.create_access_token("user-1")
        with pytest.raises(UnauthorizedError) as exc_info:
            issuer.decode_refresh_token(access_token)
        assert exc_info.value.message == "Invalid refresh token, re-authenticate"

    def test_expired_access_token(self, issuer):
        token = issuer.create_access_token("user-1", expires_delta=timedelta(seconds=-5))
        with pytest.raises(UnauthorizedError):
            issuer.decode_access_token(token)

    def test_wrong_type_claim_with_right_secret(self, issuer):
        token = jwt.encode({"sub": "user-1", "type": "refresh"}, "access-secret", algorithm="HS256")
        with pytest.raises(UnauthorizedError):
            issuer.decode_access_token(token)

    def test_missing_subject(self, issuer):
        token = jwt.encode({"type": "access"}, "access-secret", algorithm="HS256")
        with pytest.raises(UnauthorizedError):
            issuer.decode_access_token(token)

    def test_garbage_token(self, issuer):
        with pytest.raises(UnauthorizedError):
            issuer.decode_access_token("not.a.jwt")

    def test_issue_session_tokens(self, issuer):
        tokens = issuer.issue_session_tokens("user-2")
        assert issuer.decode_access_token(tokens.access_token) == "user-2"
        assert issuer.decode_refresh_token(tokens.refresh_token) == "user-2"


class TestRefreshCookie:

    def test_set_refresh_cookie(self):
        response = Response()
        set_refresh_cookie(response, "token-value")

        cookie = response.headers["set-cookie"]
        assert cookie.startswith("refreshToken=token-value")
        assert "HttpOnly" in cookie
        assert "SameSite=none" in cookie
        assert "Path=/" in cookie

    def test_clear_refresh_cookie(self):
        response = Response()
        clear_refresh_cookie(response)

        cookie = response.headers["set-cookie"]
        assert cookie.startswith("refreshToken=")
        assert "Max-Age=0" in cookie
