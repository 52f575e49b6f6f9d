"""
Middleware that injects a request ID into every incoming request.

Unexpected exceptions are turned into the generic 500 response here, so that
response also carries the X-Request-ID header.
"""

import re
import uuid

from fastapi import Request

from freshness.logging import bind_context

from ..error_handlers import internal_error_response

# Inbound IDs are echoed back in a header, so only accept a safe charset
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        request_id = request.headers.get("X-Request-ID", "")
        if not _VALID_REQUEST_ID.match(request_id):
            request_id = str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        # Bind request ID to logging context
        bind_context(request_id=request_id)

        response_started = False

        async def send_wrapper(response):
            nonlocal response_started
            if response["type"] == "http.response.start":
                response_started = True
                headers = response.setdefault("headers", [])
                headers.append((b"x-request-id", request_id.encode()))
            await send(response)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            # Too late for a clean error response once headers went out
            if response_started:
                raise
            error_response = internal_error_response(exc, request_id)
            await error_response(scope, receive, send_wrapper)
