"""Domain exceptions."""

from typing import Optional


class CabinetException(Exception):
    """Base exception for the psychologist cabinet."""
    
    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code
        super().__init__(message)


class RequestFailedError(CabinetException):
    """Backend request failed (non-2xx status or transport error)."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(
            message=message,
            code="REQUEST_FAILED"
        )


class NotAuthenticatedError(CabinetException):
    """Action requires an authenticated session with a loaded profile."""
    
    def __init__(self, action: str = None):
        message = "Not authenticated"
        if action:
            message += f": cannot {action}"
        
        super().__init__(
            message=message,
            code="NOT_AUTHENTICATED"
        )


class LoginChannelClosedError(CabinetException):
    """Identity assertion emitted while no login view is listening."""
    
    def __init__(self):
        super().__init__(
            message="Login channel is not open",
            code="LOGIN_CHANNEL_CLOSED"
        )


class ValidationError(CabinetException):
    """Domain validation error."""
    
    def __init__(self, field: str, value: str, reason: str = None):
        message = f"Invalid {field}: {value}"
        if reason:
            message += f" - {reason}"
        
        super().__init__(
            message=message,
            code="VALIDATION_ERROR"
        )
