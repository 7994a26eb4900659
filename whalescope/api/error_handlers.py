"""
Error handlers for the API
"""
from http import HTTPStatus

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from whalescope.utils.error_handling import ErrorCode, WhaleScopeError

# Setup logger
logger = structlog.get_logger("whalescope.api.errors")


def error_body(error: str, message: str, status_code: int, details=None) -> dict:
    """Build the JSON error body shared by every error response."""
    body = {"error": error, "message": message, "statusCode": status_code}
    if details:
        body["details"] = details
    return body


def register_error_handlers(app: FastAPI, is_production: bool = False) -> None:
    """Register global error handlers for the application"""

    @app.exception_handler(WhaleScopeError)
    async def whalescope_exception_handler(request: Request, exc: WhaleScopeError):
        """Handle application errors"""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Request failed",
            error=exc.error_code.name,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions, including unknown routes"""
        logger.warning(
            "HTTP exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path
        )
        try:
            error = HTTPStatus(exc.status_code).name
        except ValueError:
            error = "HTTP_ERROR"

        message = str(exc.detail)
        if exc.status_code == 404 and exc.detail == HTTPStatus.NOT_FOUND.phrase:
            message = f"Route {request.method} {request.url.path} not found"

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(error, message, exc.status_code),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle invalid query or path parameters"""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        logger.warning("Validation error", errors=errors, path=request.url.path)

        message = "; ".join(f"{e['field']}: {e['message']}" for e in errors) or "Invalid request"
        return JSONResponse(
            status_code=400,
            content=error_body(ErrorCode.VALIDATION_ERROR.name, message, 400, {"errors": errors})
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all uncaught exceptions"""
        logger.exception(
            "Uncaught exception",
            exc_info=exc,
            path=request.url.path,
            method=request.method
        )
        return JSONResponse(
            status_code=500,
            content=error_body(
                "INTERNAL_SERVER_ERROR",
                "An unexpected error occurred" if is_production else str(exc),
                500
            )
        )
