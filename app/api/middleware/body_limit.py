# 📄 File: app/api/middleware/body_limit.py
# 🧭 Purpose (Layman Explanation):
# Turns away requests that are too big, whether they announce their size up front
# or stream it in pieces.
# 🧪 Purpose (Technical Summary):
# ASGI body size guard: JSON and urlencoded bodies are capped by JSON_BODY_LIMIT,
# multipart uploads by a limit derived from MAX_UPLOAD_SIZE. A declared Content-Length
# over the limit is rejected before reading; otherwise the received bytes are counted
# and the request is cut off with a 413 failure envelope once they pass the limit.
# 🔗 Dependencies:
# starlette, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# app.api.pipeline (middleware stage)

import logging

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.shared.core.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """Reject requests whose body exceeds the limit for their content type."""

    def __init__(self, app: ASGIApp, json_limit: int, multipart_limit: int):
        self.app = app
        self.json_limit = json_limit
        self.multipart_limit = multipart_limit

    def _limit_for(self, content_type: str) -> int:
        if content_type.startswith("multipart/"):
            return self.multipart_limit
        return self.json_limit

    async def _reject(self, scope: Scope, receive: Receive, send: Send, limit: int, size: str) -> None:
        logger.warning(
            f"Rejected {scope.get('method')} {scope.get('path')}: body of {size} bytes exceeds {limit}"
        )
        error = PayloadTooLargeError(limit=limit)
        response = JSONResponse(status_code=error.status_code, content=error.to_dict())
        await response(scope, receive, send)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        limit = self._limit_for(headers.get("content-type", "").lower())

        content_length = headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > limit:
            await self._reject(scope, receive, send, limit, content_length)
            return

        received = 0
        exceeded = False
        response_started = False

        async def counting_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    exceeded = True
                    raise PayloadTooLargeError(limit=limit)
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            # Whatever the app made of the aborted read is replaced by the 413 below
            if exceeded and not response_started:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, counting_receive, guarded_send)
        except PayloadTooLargeError:
            if response_started:
                raise

        if exceeded and not response_started:
            await self._reject(scope, receive, send, limit, str(received))
