"""JSON:API error handling middleware."""

import logging
from typing import Any

from jsonapi_payload.core.errors import JSONAPIError, JSONAPIErrorBuilder
from jsonapi_payload.responses import JSONAPIResponse

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents."""

    def __init__(self, app: Any) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.error_builder = JSONAPIErrorBuilder()

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return
        try:
            await self.app(scope, receive, send)
        except JSONAPIError as exc:
            logger.exception("Failed to build JSON:API document")
            error = exc.to_error_object()
            response = JSONAPIResponse(
                self.error_builder.error_document([error]),
                status_code=int(error.get("status", 500)),
            )
            await response(scope, receive, send)
        except Exception:
            logger.exception("Unhandled error while serving %s", scope.get("path"))
            error = self.error_builder.error_object(
                status="500", title="Internal Server Error"
            )
            response = JSONAPIResponse(
                self.error_builder.error_document([error]), status_code=500
            )
            await response(scope, receive, send)
