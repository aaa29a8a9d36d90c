"""
Saddle OMS - Logging Infrastructure

This module provides structured logging with support for:
- JSON formatted logs for production
- Console formatted logs for development
- Request id binding for tracing
- A dedicated security event logger
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

from oms.core.config import get_settings

# Context variables for request tracing
request_id_context: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
user_id_context: ContextVar[Optional[str]] = ContextVar("user_id", default=None)


def add_context_variables(
    logger: logging.Logger,
    method_name: str,
    event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Add request_id and user_id from context variables to every log entry.
    """
    request_id = request_id_context.get()
    if request_id:
        event_dict["request_id"] = request_id

    user_id = user_id_context.get()
    if user_id:
        event_dict["user_id"] = user_id

    return event_dict


def get_log_level(settings: Any) -> int:
    """Convert string log level to logging constant."""
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(settings.LOG_LEVEL.upper(), logging.INFO)


def get_processors(settings: Any) -> list[Processor]:
    """Get structlog processors based on settings."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_context_variables,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def configure_logging() -> None:
    """
    Configure structured logging for the application.

    This should be called once at application startup.
    """
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=get_log_level(settings),
    )

    structlog.configure(
        processors=get_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A structlog BoundLogger instance.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("fitter_filter_applied", username="jane.fitter")
    """
    return structlog.get_logger(name)


class SecurityLogger:
    """
    Specialized logger for authentication and authorization events.

    Every event is emitted under the ``security`` logger name so it can be
    routed separately from application logs.
    """

    def __init__(self, name: str = "security"):
        self.log = get_logger(name)

    def log_login_success(
        self,
        user_id: str,
        username: str,
        role: Optional[str],
        ip_address: str,
    ) -> None:
        """Log a successful login."""
        self.log.info(
            "login_succeeded",
            user_id=user_id,
            username=username,
            role=role,
            ip_address=ip_address,
        )

    def log_login_failure(self, username: str, ip_address: str, reason: str) -> None:
        """Log a failed login attempt."""
        self.log.warning(
            "login_failed",
            username=username,
            ip_address=ip_address,
            reason=reason,
        )

    def log_token_invalid(self, reason: str, ip_address: str) -> None:
        """Log an invalid or expired token."""
        self.log.warning(
            "token_rejected",
            reason=reason,
            ip_address=ip_address,
        )

    def log_permission_denied(
        self,
        user_id: Optional[str],
        role: Optional[str],
        resource: str,
        action: str,
        required: Optional[list] = None,
    ) -> None:
        """Log a denied screen or role check."""
        self.log.warning(
            "permission_denied",
            user_id=user_id,
            role=role,
            resource=resource,
            action=action,
            required=required or [],
        )


security_logger = SecurityLogger()
