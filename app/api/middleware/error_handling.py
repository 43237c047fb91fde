# 📄 File: app/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation): 
# This file catches any errors that happen in our app and turns them into the same friendly error box
# every time, so apps always know where to find the status and the message.
# 🧪 Purpose (Technical Summary): 
# Error adapters for the failure envelope: exception handlers for ApiError, request validation
# errors and framework HTTP errors, plus an outermost middleware that converts any other
# exception into a logged 500 response.
# 🔗 Dependencies: 
# FastAPI, starlette, app.shared.core.exceptions, logging, traceback
# 🔄 Connected Modules / Calls From: 
# app.api.pipeline (middleware stage), app.main.py (exception handler registration)

import logging
import traceback
from datetime import datetime
from http import HTTPStatus
from typing import Any, Dict, List

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.config.settings import Settings, get_settings
from app.shared.core.exceptions import ApiError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Something went wrong"


def _failure_body(status_code: int, message: str, errors: List[Any] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "statusCode": status_code,
        "data": None,
        "message": message,
        "success": False,
    }
    if errors:
        body["errors"] = errors
    return body


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Outermost error boundary for the VideoTube API

    Anything that escapes the exception handlers (i.e. not an ApiError or a
    framework HTTP error) is logged with its traceback and answered with a
    500 failure envelope.
    """
    
    def __init__(self, app: ASGIApp, settings: Settings = None):
        super().__init__(app)
        self.settings = settings or get_settings()
    
    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = datetime.now()
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc, start_time)
    
    def _handle_exception(self, request: Request, exc: Exception, start_time: datetime) -> JSONResponse:
        request_id = getattr(request.state, "request_id", None)
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        
        if isinstance(exc, ApiError):
            status_code, body = exc.status_code, exc.to_dict()
        else:
            status_code = 500
            body = _failure_body(status_code, INTERNAL_ERROR_MESSAGE)
        
        # Add debug information in development
        if self.settings.DEBUG and not self.settings.is_production:
            body["debug"] = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
            }
        
        response = JSONResponse(status_code=status_code, content=body)
        if request_id:
            response.headers["X-Request-ID"] = request_id
        processing_time = (datetime.now() - start_time).total_seconds()
        response.headers["X-Response-Time"] = f"{processing_time:.3f}s"
        return response


# =========================================================================
# EXCEPTION HANDLERS
# =========================================================================

async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ApiError as the failure envelope."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}", exc_info=exc)
    else:
        logger.info(f"{exc.error_code} ({exc.status_code}) on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Framework validation failures become 400 with an errors list."""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    logger.info(f"Request validation failed on {request.method} {request.url.path}: {len(errors)} error(s)")
    return JSONResponse(status_code=400, content=_failure_body(400, "Validation failed", errors))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, wrong methods and other framework errors keep their status."""
    if isinstance(exc.detail, str) and exc.detail:
        message = exc.detail
    else:
        message = HTTPStatus(exc.status_code).phrase
    return JSONResponse(
        status_code=exc.status_code,
        content=_failure_body(exc.status_code, message),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
