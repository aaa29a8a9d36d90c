"""
Authentication Service Module
=============================

Consolidated authentication service handling:
- Password hashing using Argon2
- Login-time role resolution
- JWT access token creation carrying the role claim
- Token decoding and principal extraction

Security Features:
- Argon2id password hashing (memory-hard, resistant to GPU attacks)
- Token type discrimination
- Issuer and audience validation
- Role assigned server-side, never taken from the client
"""

from datetime import datetime, timedelta, UTC
from typing import Optional, Tuple

from sqlalchemy.orm import Session
from jose import jwt, JWTError
from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, Argon2Error, InvalidHashError

from oms.models.user import User
from oms.models.role_enum import Role
from oms.core.config import settings
from oms.core.exceptions import (
    AccountDisabledError,
    InvalidCredentialsError,
    TokenExpiredError,
    TokenInvalidError,
)
from oms.core.logging import get_logger, security_logger
from oms.schemas.user import CurrentUser
from oms.services.role_service import recognised_roles, primary_role, resolve_role

# Initialize logger
logger = get_logger(__name__)


# ==========================
# Password Hasher Configuration
# ==========================

ph = PasswordHasher(
    time_cost=3,        # Number of passes
    memory_cost=65536,  # 64 MB memory
    parallelism=4,      # 4 parallel threads
    hash_len=32,        # 32-byte hash
    salt_len=16,        # 16-byte salt
)


# ==========================
# Token Types
# ==========================

class TokenType:
    """Token type constants for discrimination."""
    ACCESS = "access"


# ==========================
# Auth Service Class
# ==========================

class AuthService:
    """
    Authentication service handling all auth-related operations.

    Usage:
        auth_service = AuthService(db)
        user, tokens = auth_service.authenticate_user(username, password)
    """

    def __init__(self, db: Session):
        """
        Initialize auth service with database session.

        Args:
            db: SQLAlchemy session
        """
        self.db = db

    # --------------------------
    # Password Utilities
    # --------------------------

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash a password using Argon2id.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        return ph.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Args:
            plain_password: Password to verify
            hashed_password: Stored hash from database

        Returns:
            True if password matches, False otherwise
        """
        try:
            ph.verify(hashed_password, plain_password)
            return True
        except VerifyMismatchError:
            return False
        except (Argon2Error, InvalidHashError) as e:
            logger.warning("password_verification_error", error=str(e))
            return False

    # --------------------------
    # Role Resolution
    # --------------------------

    @staticmethod
    def resolve_user_role(user: User) -> Role:
        """
        Resolve the session role for an account.

        Args:
            user: User model instance

        Returns:
            Role for this session
        """
        return resolve_role(
            user_type=user.user_type,
            is_supervisor=user.is_supervisor,
            has_fitter_profile=user.has_fitter_profile,
        )

    # --------------------------
    # Token Creation
    # --------------------------

    @staticmethod
    def create_access_token(
        user_id: int,
        username: Optional[str],
        role: Role,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a JWT access token.

        Args:
            user_id: Account id
            username: Account username
            role: Session role
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT access token
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        now = datetime.now(UTC)
        expire = now + expires_delta

        payload = {
            "sub": str(user_id),
            "username": username,
            "roles": [role.claim],
            "type": TokenType.ACCESS,
            "exp": expire,
            "iat": now,
            "iss": settings.ISSUER,
            "aud": settings.AUDIENCE,
        }

        return jwt.encode(
            payload,
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM
        )

    def get_tokens_for_user(self, user: User, role: Role) -> dict:
        """
        Generate the login response for a user.

        Args:
            user: User model instance
            role: Resolved session role

        Returns:
            Dictionary with access_token, token_type, expires_in and role
        """
        return {
            "access_token": self.create_access_token(
                user_id=user.id,
                username=user.username,
                role=role,
            ),
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "role": role,
        }

    # --------------------------
    # Token Decoding & Validation
    # --------------------------

    @staticmethod
    def decode_token(token: str, expected_type: Optional[str] = None) -> dict:
        """
        Decode and validate a JWT token.

        Args:
            token: JWT token string
            expected_type: Expected token type

        Returns:
            Decoded token payload

        Raises:
            TokenExpiredError: If token has expired
            TokenInvalidError: If token is invalid
        """
        try:
            payload = jwt.decode(
                token,
                settings.SECRET_KEY,
                algorithms=[settings.ALGORITHM],
                issuer=settings.ISSUER,
                audience=settings.AUDIENCE,
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError(token_type=expected_type or "unknown")
        except JWTError as e:
            logger.warning("token_decode_error", error=str(e))
            raise TokenInvalidError(reason=str(e))

        if expected_type and payload.get("type") != expected_type:
            raise TokenInvalidError(
                reason=f"Expected {expected_type} token, got {payload.get('type')}"
            )

        return payload

    @classmethod
    def user_from_token(cls, token: str) -> CurrentUser:
        """
        Build the authenticated principal from an access token.

        The token is trusted as issued; no database lookup is made.

        Args:
            token: Access token

        Returns:
            CurrentUser with id, username and role

        Raises:
            TokenExpiredError: If token has expired
            TokenInvalidError: If token is invalid or carries no known role
        """
        payload = cls.decode_token(token, expected_type=TokenType.ACCESS)

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise TokenInvalidError(reason="Invalid subject")

        claims = payload.get("roles")
        if not recognised_roles(claims):
            raise TokenInvalidError(reason="No recognised role claim")

        username = payload.get("username")
        if not isinstance(username, str):
            username = None

        return CurrentUser(id=user_id, username=username, role=primary_role(claims))

    # --------------------------
    # Authentication Methods
    # --------------------------

    def authenticate_user(
        self,
        username: str,
        password: str,
        ip_address: Optional[str] = None,
    ) -> Tuple[CurrentUser, dict]:
        """
        Authenticate a user with username and password.

        Args:
            username: Account username
            password: Account password
            ip_address: Client IP for logging

        Returns:
            Tuple of (CurrentUser, tokens dict)

        Raises:
            InvalidCredentialsError: If credentials are invalid
            AccountDisabledError: If account is disabled
        """
        ip_address = ip_address or "unknown"
        user = self.db.query(User).filter(User.username == username).first()

        if not user:
            security_logger.log_login_failure(
                username=username,
                ip_address=ip_address,
                reason="user_not_found"
            )
            raise InvalidCredentialsError()

        if not self.verify_password(password, user.hashed_password):
            security_logger.log_login_failure(
                username=username,
                ip_address=ip_address,
                reason="invalid_password"
            )
            raise InvalidCredentialsError()

        if not user.is_active:
            security_logger.log_login_failure(
                username=username,
                ip_address=ip_address,
                reason="account_disabled"
            )
            raise AccountDisabledError()

        role = self.resolve_user_role(user)
        tokens = self.get_tokens_for_user(user, role)

        security_logger.log_login_success(
            user_id=str(user.id),
            username=user.username,
            role=role.value,
            ip_address=ip_address,
        )

        return CurrentUser(id=user.id, username=user.username, role=role), tokens
