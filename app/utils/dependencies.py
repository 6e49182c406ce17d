"""FastAPI dependencies."""
from fastapi import Request

from app.services.book_store import BookStore


def get_book_store(request: Request) -> BookStore:
    """Return the store the application was built with."""
    return request.app.state.book_store
