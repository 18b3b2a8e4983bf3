# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Request correlation IDs.

One inventory request fans out into many concurrent collector tasks. The
ID lives in a contextvar, which asyncio copies into every task, so the log
lines of all collectors of one request carry the same ID.
"""

import contextvars
import logging
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"

_current_correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "cloudy_correlation_id", default=""
)


def generate_correlation_id() -> str:
    """Return a fresh UUID4 string."""
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str) -> contextvars.Token:
    """Bind ``correlation_id`` to the current context and return the reset token."""
    return _current_correlation_id.set(correlation_id)


def get_correlation_id() -> str:
    """Correlation ID of the current context, "" outside a request."""
    return _current_correlation_id.get()


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds ``correlation_id`` to every record.

    Records logged outside a request get "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Tags each HTTP request with a correlation ID.

    A client-supplied ``X-Correlation-ID`` header is reused, otherwise a new
    ID is generated. The ID is echoed back in the response header and is
    unbound again once the response is produced.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        token = set_correlation_id(correlation_id)
        try:
            logger.debug(f"{request.method} {request.url.path} started")
            response = await call_next(request)
            logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
        finally:
            _current_correlation_id.reset(token)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
