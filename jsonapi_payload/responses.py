"""JSON:API response classes."""

from __future__ import annotations

from typing import Any

from starlette.responses import JSONResponse

from jsonapi_payload.schemas.document import Payload


class JSONAPIResponse(JSONResponse):
    """JSON response with the JSON:API media type.

    Payload models are rendered to their wire representation.
    """

    media_type = "application/vnd.api+json"

    def render(self, content: Any) -> bytes:
        if isinstance(content, Payload):
            content = content.to_document()
        return super().render(content)
