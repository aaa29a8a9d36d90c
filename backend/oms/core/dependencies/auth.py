"""
Authentication Dependencies Module
==================================

FastAPI dependencies for authentication and principal extraction.

Features:
- JWT token validation
- Principal (id, username, role) extracted from token claims

Usage:
    @router.get("/protected")
    def protected_route(user: CurrentUser = Depends(get_current_user)):
        return {"user": user.username}
"""

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer

from oms.core.exceptions import TokenExpiredError, TokenInvalidError
from oms.core.logging import get_logger, security_logger, user_id_context
from oms.schemas.user import CurrentUser
from oms.services.auth_service import AuthService

# Initialize logger
logger = get_logger(__name__)


# =====================================
# OAuth2 Scheme
# =====================================

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/auth/login",
    auto_error=True,
    description="OAuth2 token for authentication",
)


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _bind_user(request: Request, user: CurrentUser) -> None:
    """Expose the principal on request state and the log context."""
    request.state.user_id = str(user.id)
    request.state.role = user.role.value
    user_id_context.set(str(user.id))


# =====================================
# Get Current User
# =====================================

def get_current_user(
    request: Request,
    token: str = Depends(oauth2_scheme),
) -> CurrentUser:
    """
    Validate JWT and return the current principal.

    Security checks performed:
    - Token signature validation
    - Token expiration check
    - Issuer and audience validation
    - Token type validation (must be access token)
    - A recognised role claim must be present

    Args:
        request: FastAPI request object
        token: JWT token from Authorization header

    Returns:
        CurrentUser instance

    Raises:
        HTTPException: If authentication fails
    """
    try:
        user = AuthService.user_from_token(token)

    except TokenExpiredError:
        security_logger.log_token_invalid(
            reason="token_expired",
            ip_address=_client_ip(request),
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )

    except TokenInvalidError as e:
        security_logger.log_token_invalid(
            reason=e.details.get("reason", "invalid"),
            ip_address=_client_ip(request),
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    _bind_user(request, user)
    return user
