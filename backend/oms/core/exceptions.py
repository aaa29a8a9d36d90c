"""
Centralized Exception Handling Module
=====================================

Defines custom exception classes for the application.

Benefits:
- Consistent error responses
- Proper HTTP status codes
- Structured error messages

Usage:
    raise InvalidCredentialsError()
    raise InvalidFilterError("orderId", "abc", "integer")
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class OMSException(Exception):
    """
    Base exception class for the order management backend.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ==========================
# Authentication Exceptions
# ==========================

class AuthenticationError(OMSException):
    """Raised when authentication fails."""

    def __init__(
        self,
        message: str = "Could not validate credentials",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid."""

    def __init__(self):
        super().__init__(message="Invalid username or password")


class TokenExpiredError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, token_type: str = "access"):
        super().__init__(
            message=f"{token_type.capitalize()} token has expired",
            details={"token_type": token_type}
        )


class TokenInvalidError(AuthenticationError):
    """Raised when a JWT token is invalid."""

    def __init__(self, reason: str = "Invalid token"):
        super().__init__(
            message="Invalid token",
            details={"reason": reason}
        )


# ==========================
# Account Status Exceptions
# ==========================

class AccountDisabledError(OMSException):
    """Raised when account is disabled."""

    def __init__(self):
        super().__init__(
            message="Account has been disabled. Please contact your administrator.",
            status_code=status.HTTP_403_FORBIDDEN,
        )


# ==========================
# Validation Exceptions
# ==========================

class ValidationError(OMSException):
    """Raised when validation fails."""

    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=422,
            details=details,
        )


class InvalidFilterError(ValidationError):
    """Raised when an order listing filter value cannot be interpreted."""

    def __init__(self, name: str, value: Any, expected: str):
        super().__init__(
            message=f"Invalid value for filter '{name}'",
            details={"filter": name, "value": str(value), "expected": expected}
        )


# ==========================
# Helper Functions
# ==========================

def exception_to_http_exception(exc: OMSException) -> HTTPException:
    """
    Convert an OMSException to FastAPI HTTPException.

    Args:
        exc: OMSException instance

    Returns:
        HTTPException with appropriate status code and detail
    """
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(
        status_code=exc.status_code,
        detail={
            "message": exc.message,
            "details": exc.details,
        },
        headers=headers,
    )
