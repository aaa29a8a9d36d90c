"""
Authentication Schemas Module
=============================

Pydantic models for authentication request/response validation.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from oms.models.role_enum import Role


# ==========================
# Login Schemas
# ==========================

class LoginRequest(BaseModel):
    """Login request schema."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=150,
        description="Account username",
        examples=["jane.fitter"]
    )
    password: str = Field(
        ...,
        min_length=1,
        description="Account password",
        examples=["SecureP@ss123"]
    )

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username must not be blank")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "jane.fitter",
                "password": "SecureP@ss123"
            }
        }
    )


class TokenResponse(BaseModel):
    """Token response schema for login."""

    access_token: str = Field(
        ...,
        description="JWT access token"
    )
    token_type: str = Field(
        default="bearer",
        description="Token type"
    )
    expires_in: Optional[int] = Field(
        default=None,
        description="Access token expiration in seconds"
    )
    role: Role = Field(
        ...,
        description="Role assigned for this session"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 3600,
                "role": "FITTER"
            }
        }
    )


# ==========================
# Error Schemas
# ==========================

class ErrorResponse(BaseModel):
    """Standard error response schema."""

    message: Optional[str] = None
    detail: Optional[Any] = None
    details: Dict[str, Any] = Field(default_factory=dict)
