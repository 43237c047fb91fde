# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation): 
# This file keeps a diary of every request made to the VideoTube API, recording what was asked for,
# how long it took to respond, and if there were any problems.
# 🧪 Purpose (Technical Summary): 
# Request logging middleware: request ID correlation (X-Request-ID, generated when absent,
# stored in a ContextVar for every log record), timing, slow-request warnings, and sensitive
# header filtering. Cookies and authorization headers are never logged.
# 🔗 Dependencies: 
# FastAPI, starlette, logging, uuid, app.shared.utils.logging
# 🔄 Connected Modules / Calls From: 
# app.api.pipeline (middleware stage)

import logging
import time
import uuid
from typing import Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware for API monitoring
    
    Features:
    - Request/response timing
    - Request ID correlation
    - Security-aware header filtering
    - Slow request warnings
    """
    
    def __init__(
        self,
        app: ASGIApp,
        slow_request_threshold: float = 2.0,
        very_slow_request_threshold: float = 5.0
    ):
        super().__init__(app)
        
        # Sensitive headers that should not be logged
        self.sensitive_headers = {
            "authorization",
            "cookie",
            "set-cookie",
            "x-api-key",
            "x-access-token",
            "x-refresh-token",
        }
        
        # Performance thresholds for warnings
        self.slow_request_threshold = slow_request_threshold
        self.very_slow_request_threshold = very_slow_request_threshold
    
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)
        request_token = request_id_var.set(request_id)
        start_time = time.perf_counter()
        
        logger.debug(
            f"--> {request.method} {request.url.path}",
            extra={"headers": self._filter_sensitive_headers(dict(request.headers))},
        )
        
        try:
            response = await call_next(request)
        except Exception as e:
            processing_time = time.perf_counter() - start_time
            logger.error(
                f"<-- {request.method} {request.url.path} raised {type(e).__name__} "
                f"after {processing_time * 1000:.2f}ms"
            )
            raise
        else:
            processing_time = time.perf_counter() - start_time
            self._log_response(request, response.status_code, processing_time)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(request_token)
    
    def _get_or_create_request_id(self, request: Request) -> str:
        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id
    
    def _filter_sensitive_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        return {
            key: ("[FILTERED]" if key.lower() in self.sensitive_headers else value)
            for key, value in headers.items()
        }
    
    def _log_response(self, request: Request, status_code: int, processing_time: float) -> None:
        message = (
            f"<-- {request.method} {request.url.path} {status_code} "
            f"{processing_time * 1000:.2f}ms"
        )
        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "processing_time_ms": round(processing_time * 1000, 2),
        }
        user = getattr(request.state, "user", None)
        if user is not None:
            extra["user_id"] = user.id
        
        if processing_time >= self.very_slow_request_threshold:
            logger.warning(f"Very slow request: {message}", extra=extra)
        elif processing_time >= self.slow_request_threshold:
            logger.warning(f"Slow request: {message}", extra=extra)
        elif status_code >= 500:
            logger.error(message, extra=extra)
        elif status_code >= 400:
            logger.warning(message, extra=extra)
        else:
            logger.info(message, extra=extra)
