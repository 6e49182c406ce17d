"""Exceptions raised by the book services.

The API layer maps each class to a status code:
BookValidationError -> 400, BookNotFoundError -> 404, InternalFault -> 500.
"""


class BookServiceError(Exception):
    """Base exception for book catalog operations."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookValidationError(BookServiceError):
    """Raised when a request body or search query fails validation."""

    status_code = 400


class BookNotFoundError(BookServiceError):
    """Raised when an operation addresses an id that is not stored."""

    status_code = 404

    def __init__(self, book_id: str):
        super().__init__("Book not found")
        self.book_id = book_id


class InternalFault(BookServiceError):
    """Unexpected failure. The message is safe to show to clients."""

    status_code = 500


__all__ = ["BookServiceError", "BookValidationError", "BookNotFoundError", "InternalFault"]
