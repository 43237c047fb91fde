# 📄 File: app/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation): 
# This file organizes the middleware components that act like helpers for our API,
# catching errors, keeping a request diary and turning away oversized requests.
# 🧪 Purpose (Technical Summary): 
# Package initialization for API middleware components. The order they run in is
# declared in app.api.pipeline.
# 🔗 Dependencies: 
# FastAPI middleware components, app.shared.core
# 🔄 Connected Modules / Calls From: 
# app.api.pipeline, app.main.py

from .body_limit import BodySizeLimitMiddleware
from .error_handling import ErrorHandlingMiddleware, register_exception_handlers
from .logging import RequestLoggingMiddleware

__all__ = [
    "BodySizeLimitMiddleware",
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "register_exception_handlers",
]
