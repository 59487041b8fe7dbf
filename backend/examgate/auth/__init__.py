"""Authentication package for the application."""
from .service import AuthService, AuthContext, RoleChecker, any_role, admin_only, student_only
from .tokens import TokenIssuer, SessionTokens
from .router import router as auth_router

__all__ = [
    'AuthService',
    'AuthContext',
    'RoleChecker',
    'any_role',
    'admin_only',
    'student_only',
    'TokenIssuer',
    'SessionTokens',
    'auth_router'
]
