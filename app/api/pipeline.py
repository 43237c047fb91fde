# 📄 File: app/api/pipeline.py
# 🧭 Purpose (Layman Explanation):
# Lists, in order, the checkpoints every request passes through before reaching the users API:
# the error catcher, the request diary, the cross-site access rules and the size check.
# 🧪 Purpose (Technical Summary):
# Ordered middleware pipeline. Stages are declared outermost first and installed on the
# FastAPI app at startup; each stage either passes the request on or short-circuits with a
# failure envelope.
# 🔗 Dependencies:
# FastAPI/starlette middleware, app.api.middleware, app.shared.config.settings
# 🔄 Connected Modules / Calls From:
# app.main.create_application

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.middleware import (
    BodySizeLimitMiddleware,
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
)
from app.shared.config.settings import Settings

logger = logging.getLogger(__name__)

# Multipart bodies carry up to two files plus the text fields
MULTIPART_OVERHEAD = 64 * 1024


@dataclass
class MiddlewareStage:
    """One pipeline stage: a middleware class and how to build its options from settings."""

    name: str
    middleware: type
    options: Callable[[Settings], Dict[str, Any]] = field(default=lambda settings: {})


def build_pipeline() -> List[MiddlewareStage]:
    """Stages in request order, outermost first."""
    return [
        MiddlewareStage(
            "error_handling",
            ErrorHandlingMiddleware,
            lambda settings: {"settings": settings},
        ),
        MiddlewareStage("request_logging", RequestLoggingMiddleware),
        MiddlewareStage(
            "cors",
            CORSMiddleware,
            lambda settings: {
                "allow_origins": settings.cors_origins_list,
                "allow_credentials": settings.CORS_ALLOW_CREDENTIALS,
                "allow_methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
                "allow_headers": ["*"],
                "expose_headers": ["X-Request-ID"],
            },
        ),
        MiddlewareStage(
            "body_limit",
            BodySizeLimitMiddleware,
            lambda settings: {
                "json_limit": settings.JSON_BODY_LIMIT,
                "multipart_limit": settings.MAX_UPLOAD_SIZE * 2 + MULTIPART_OVERHEAD,
            },
        ),
    ]


def apply_pipeline(app: FastAPI, settings: Settings, stages: List[MiddlewareStage] = None) -> None:
    """
    Install the stages on the app.

    Starlette wraps the most recently added middleware around the others, so
    stages are added innermost first.
    """
    stages = stages if stages is not None else build_pipeline()
    for stage in reversed(stages):
        app.add_middleware(stage.middleware, **stage.options(settings))
    logger.debug(f"Middleware pipeline: {' -> '.join(stage.name for stage in stages)}")
