from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from interviewiq.core.exceptions import InterviewIQError

logger = logging.getLogger("interviewiq.error_handler")


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    """Build the uniform failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


async def interviewiq_exception_handler(request: Request, exc: InterviewIQError) -> JSONResponse:
    """Render an InterviewIQError as the failure envelope."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"{exc.code}: {exc.message}")

    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are reported as 400 with the first problem found."""
    errors = exc.errors()
    if not errors:
        return error_response(400, "Invalid request")

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    logger.warning(f"VALIDATION_ERROR: {message}")
    return error_response(400, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-raised HTTP errors (unknown route, wrong method) in envelope form."""
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, never leak it."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(500, "Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every envelope handler to ``app``."""
    app.add_exception_handler(InterviewIQError, interviewiq_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
