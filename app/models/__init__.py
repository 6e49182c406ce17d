"""Pydantic models for API requests and responses."""
from .book_model import (
    Book,
    BookCreate,
    BookListResponse,
    BookMessageResponse,
    BookPatch,
    BookResponse,
    BookSearchResponse,
    ErrorResponse,
    MessageResponse,
)
