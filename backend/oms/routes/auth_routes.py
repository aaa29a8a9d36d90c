"""
Authentication Routes Module
============================

Handles:
- User login with server-side role assignment
- Current user profile with role flags

Security Features:
- Role resolved from account data, never from the request
- All login attempts are logged
"""

from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from oms.db.session import get_db
from oms.services.auth_service import AuthService
from oms.core.dependencies.auth import get_current_user
from oms.core.dependencies.rbac import RoleFlags
from oms.core.exceptions import InvalidCredentialsError, AccountDisabledError
from oms.core.logging import get_logger
from oms.models.role_enum import get_role_display_name
from oms.schemas import (
    CurrentUser,
    CurrentUserResponse,
    ErrorResponse,
    LoginRequest,
    RoleFlagsResponse,
    TokenResponse,
)

# Initialize logger
logger = get_logger(__name__)


# =====================================
# Router Setup
# =====================================

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"model": ErrorResponse, "description": "Authentication failed"},
        403: {"model": ErrorResponse, "description": "Access forbidden"},
    },
)


# =====================================
# Login Endpoint
# =====================================

@router.post(
    "/login",
    response_model=TokenResponse,
    summary="User Login",
    description="""
    Authenticate with username and password.

    Returns a JWT access token carrying the role assigned for this session.
    """,
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "Account disabled"},
    },
)
def login(
    request: Request,
    login_data: LoginRequest,
    db: Session = Depends(get_db),
) -> dict:
    """
    Authenticate user and return an access token.

    Args:
        request: FastAPI request object
        login_data: Login credentials
        db: Database session

    Returns:
        Token response with access token and role

    Raises:
        HTTPException: On authentication failure
    """
    auth_service = AuthService(db)
    client_ip = request.client.host if request.client else "unknown"

    try:
        user, tokens = auth_service.authenticate_user(
            username=login_data.username,
            password=login_data.password,
            ip_address=client_ip,
        )

    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    except AccountDisabledError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account has been disabled. Please contact your administrator.",
        )

    logger.info("user_logged_in", user_id=user.id, role=user.role.value)
    return tokens


# =====================================
# Current User Endpoint
# =====================================

@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Current User",
    description="Returns the authenticated user, role and role flags.",
)
def me(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUserResponse:
    flags = RoleFlags.from_role(current_user.role)
    return CurrentUserResponse(
        id=current_user.id,
        username=current_user.username,
        role=current_user.role,
        role_display_name=get_role_display_name(current_user.role),
        flags=RoleFlagsResponse(
            is_admin=flags.is_admin,
            is_supervisor=flags.is_supervisor,
            is_fitter=flags.is_fitter,
            is_supplier=flags.is_supplier,
            is_user=flags.is_user,
        ),
    )
