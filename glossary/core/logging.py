"""
Logging configuration

Standard library logging with request ID propagation.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from glossary.core.config import settings

REQUEST_ID_HEADER = "X-Request-ID"

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"


class RequestIDFilter(logging.Filter):
    """Attach the current request ID (or '-') to every log record"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger.
    Safe to call more than once; the handler is replaced, not duplicated.
    """
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())

    for handler in list(root.handlers):
        if getattr(handler, "_glossary_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIDFilter())
    handler._glossary_handler = True
    root.addHandler(handler)

    # Quiet noisy libraries unless debugging
    if not settings.debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger"""
    return logging.getLogger(name)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Read or generate X-Request-ID and expose it to log records"""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
