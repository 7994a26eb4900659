"""Logging configuration for the WhaleScope server."""

import logging
import sys
import time
import uuid
from typing import Optional

import structlog

# Default log format for stdlib loggers
DEFAULT_LOG_FORMAT = "%(message)s"

REQUEST_ID_HEADER = b"x-request-id"


def configure_logging(log_level: str = "INFO", log_format: Optional[str] = None) -> None:
    """
    Configure structured logging for the application

    Args:
        log_level: The log level to use (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format string for stdlib log records
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format=log_format or DEFAULT_LOG_FORMAT,
        stream=sys.stdout,
        level=numeric_level,
    )

    # Set log level for third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.WARNING)

    logger = structlog.get_logger("whalescope")
    logger.info("Logging configured", log_level=log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger with the specified name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class RequestIdMiddleware:
    """ASGI middleware that tags each request with an ``X-Request-ID``.

    An incoming request id header is reused; otherwise a new one is generated.
    The id is echoed on the response, and each response is logged together
    with its status code and duration when ``log_requests`` is set.
    """

    def __init__(self, app, log_requests: bool = True):
        """Initialize middleware.

        Args:
            app: ASGI application
            log_requests: Whether to log every response
        """
        self.app = app
        self.log_requests = log_requests
        self.logger = get_logger("whalescope.requests")

    async def __call__(self, scope, receive, send):
        """Process request with added request ID.

        Args:
            scope: ASGI scope
            receive: ASGI receive function
            send: ASGI send function
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = None
        for name, value in scope.get("headers", []):
            if name == REQUEST_ID_HEADER:
                request_id = value.decode("latin-1")
                break
        if not request_id:
            request_id = f"req_{uuid.uuid4().hex[:16]}"

        scope.setdefault("state", {})["request_id"] = request_id

        path = scope.get("path", "unknown")
        method = scope.get("method", "unknown")
        start_time = time.perf_counter()

        async def wrapped_send(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                message["headers"] = headers

                if self.log_requests:
                    duration = (time.perf_counter() - start_time) * 1000
                    self.logger.info(
                        "request completed",
                        request_id=request_id,
                        method=method,
                        path=path,
                        status=message.get("status", 0),
                        duration_ms=round(duration, 2)
                    )

            await send(message)

        await self.app(scope, receive, wrapped_send)
