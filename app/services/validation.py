"""Request validation for book payloads."""
from typing import Any, Mapping

from app.services.exceptions import BookValidationError


def _is_blank(value: Any) -> bool:
    """Anything but a string with visible characters counts as blank."""
    if not isinstance(value, str):
        return True
    return value.strip() == ""


def validate_book(payload: Mapping[str, Any]) -> None:
    """Check a full book body (create and replace). Both fields are required."""
    if _is_blank(payload.get("title")):
        raise BookValidationError("Title is required")
    if _is_blank(payload.get("author")):
        raise BookValidationError("Author is required")


def validate_book_patch(changes: Mapping[str, Any]) -> None:
    """Check a partial update. A field is only checked when its key was sent."""
    if "title" in changes and _is_blank(changes["title"]):
        raise BookValidationError("Title cannot be empty")
    if "author" in changes and _is_blank(changes["author"]):
        raise BookValidationError("Author cannot be empty")


def validate_search_query(query: Any) -> None:
    if _is_blank(query):
        raise BookValidationError("Search query is required")
