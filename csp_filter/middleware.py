# csp_filter/middleware.py

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from csp_filter.core.policy import build_policy, header_name
from csp_filter.schemas import PolicyConfig

logger = logging.getLogger(__name__)
_request_logger = logging.getLogger("csp_filter.requests")


class ContentSecurityPolicyMiddleware(BaseHTTPMiddleware):
    """Add the Content-Security-Policy (or -Report-Only) header to every response.

    The header is appended, so a policy already set further down the stack is
    kept and the browser enforces both.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: Optional[PolicyConfig] = None,
        options: Optional[Mapping[str, Optional[str]]] = None,
    ) -> None:
        super().__init__(app)
        if config is None:
            config = PolicyConfig.from_options(options or {})
        self.config = config
        self.header_name = header_name(config)
        self.policy = build_policy(config)

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        logger.debug("Adding Header %s = %s", self.header_name, self.policy)
        response.headers.append(self.header_name, self.policy)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with status code and latency; log 5xx with full context."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()
        client = request.client.host if request.client else "unknown"
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.monotonic() - start) * 1000
            _request_logger.exception(
                "UNHANDLED_EXCEPTION method=%s path=%s client=%s elapsed_ms=%.1f",
                request.method,
                request.url.path,
                client,
                elapsed_ms,
            )
            raise

        elapsed_ms = (time.monotonic() - start) * 1000
        if response.status_code >= 500:
            _request_logger.error(
                "SERVER_ERROR status=%d method=%s path=%s client=%s elapsed_ms=%.1f",
                response.status_code,
                request.method,
                request.url.path,
                client,
                elapsed_ms,
            )
        elif response.status_code >= 400:
            _request_logger.warning(
                "CLIENT_ERROR status=%d method=%s path=%s client=%s elapsed_ms=%.1f",
                response.status_code,
                request.method,
                request.url.path,
                client,
                elapsed_ms,
            )
        else:
            _request_logger.debug(
                "OK status=%d method=%s path=%s elapsed_ms=%.1f",
                response.status_code,
                request.method,
                request.url.path,
                elapsed_ms,
            )
        return response
