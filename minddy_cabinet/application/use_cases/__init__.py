"""Application use cases module."""

from .auth_flow import AuthFlow, AuthState, AUTH_ERROR_MESSAGE

__all__ = [
    "AuthFlow",
    "AuthState",
    "AUTH_ERROR_MESSAGE",
]
