"""Services package."""
from .book_store import BookStore
from .exceptions import BookNotFoundError, BookServiceError, BookValidationError, InternalFault

__all__ = [
    "BookStore",
    "BookServiceError",
    "BookValidationError",
    "BookNotFoundError",
    "InternalFault",
]
