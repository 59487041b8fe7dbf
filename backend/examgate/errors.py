"""Typed errors raised by the services and mapped to HTTP statuses in main.py."""
from fastapi import status


class ExamGateError(Exception):
    """Base exception for every rejected operation."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class BadRequestError(ExamGateError):
    """Eligibility or validation violation the caller can correct."""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ExamGateError):
    """Missing, invalid or expired credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ExamGateError):
    """Role, ownership or deadline mismatch."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ExamGateError):
    status_code = status.HTTP_404_NOT_FOUND


class LockedOutError(ForbiddenError):
    """Raised while an account is locked after repeated OTP failures."""

    def __init__(self, message: str = "Too many failed attempts. Try again later."):
        super().__init__(message)


class InvalidCredentialsError(UnauthorizedError):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class OtpExpiredError(UnauthorizedError):
    def __init__(self, message: str = "OTP expired"):
        super().__init__(message)


class NotificationError(ExamGateError):
    """Outbound delivery failed."""
    status_code = status.HTTP_502_BAD_GATEWAY
