"""JSON:API exceptions and error object templates."""

from typing import Any


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object."""
        error: dict[str, Any] = {}
        if status is not None:
            error["status"] = status
        if code is not None:
            error["code"] = code
        if title is not None:
            error["title"] = title
        if detail is not None:
            error["detail"] = detail
        if source is not None:
            error["source"] = source
        if meta is not None:
            error["meta"] = meta
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error

    def error_document(self, errors: list[dict[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API document with an errors array."""
        return {"errors": errors}


class JSONAPIError(Exception):
    """Base class for errors raised while building JSON:API documents."""

    status = "500"
    title = "Internal Server Error"

    def to_error_object(self) -> dict[str, Any]:
        """Return a JSON:API error object describing this exception."""
        return JSONAPIErrorBuilder().error_object(
            status=self.status, title=self.title, detail=str(self)
        )


class JSONAPIValidationError(JSONAPIError, ValueError):
    """A links or meta member does not have a valid shape."""

    title = "Invalid Document Structure"
    member = ""

    def __init__(self, message: str, *, key: str, pointer: str | None = None) -> None:
        super().__init__(message)
        self.key = key
        self.pointer = pointer or f"/{self.member}/{key}".rstrip("/")

    def to_error_object(self) -> dict[str, Any]:
        return JSONAPIErrorBuilder().error_object(
            status=self.status,
            code=f"invalid_{self.member}",
            title=self.title,
            detail=str(self),
            source={"pointer": self.pointer},
        )


class LinksValidationError(JSONAPIValidationError):
    """A links member is neither a URL string nor a link object."""

    member = "links"


class MetaValidationError(JSONAPIValidationError):
    """A meta member is not an object."""

    member = "meta"
