"""
Request Middleware Module
=========================

Starlette middleware for request processing.

Features:
- Request ID generation for tracing
- Request timing
- Security headers on every response

Note:
    Authentication is done in the dependency layer, not here.
"""

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from oms.core.config import settings
from oms.core.logging import get_logger, request_id_context, user_id_context

# Initialize logger
logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Request tracing middleware.

    Responsibilities:
    - Reuse the caller's X-Request-ID or generate a new one
    - Bind the request id to the log context
    - Add X-Request-ID and X-Process-Time response headers
    - Log each completed request
    """

    _QUIET_PATHS = {"/", "/health"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_token = request_id_context.set(request_id)
        user_token = user_id_context.set(None)

        request.state.request_id = request_id
        request.state.user_id = None

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                error=str(e),
                path=request.url.path,
                method=request.method,
            )
            raise
        else:
            process_time = time.perf_counter() - start_time
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"
            self._log_request(request, response, process_time)
            return response
        finally:
            user_id_context.reset(user_token)
            request_id_context.reset(request_token)

    def _log_request(
        self,
        request: Request,
        response: Response,
        process_time: float,
    ) -> None:
        """
        Log completed request.

        Args:
            request: HTTP request
            response: HTTP response
            process_time: Request processing time
        """
        if request.url.path in self._QUIET_PATHS:
            return

        log_data = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
            "user_id": getattr(request.state, "user_id", None),
            "ip_address": request.client.host if request.client else None,
        }

        if response.status_code >= 500:
            logger.error("request_completed", **log_data)
        elif response.status_code >= 400:
            logger.warning("request_completed", **log_data)
        else:
            logger.info("request_completed", **log_data)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.

    Headers added:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: DENY
    - Referrer-Policy
    - Strict-Transport-Security (in production)
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if settings.is_production:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response
