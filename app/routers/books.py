"""Book endpoints."""
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, status

from app.models.book_model import (
    BookCreate,
    BookListResponse,
    BookMessageResponse,
    BookPatch,
    BookResponse,
    BookSearchResponse,
    MessageResponse,
)
from app.services.book_store import BookStore
from app.services.exceptions import BookServiceError, BookValidationError, InternalFault
from app.services.validation import validate_book
from app.utils.dependencies import get_book_store
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@contextmanager
def guard(failure_message: str) -> Iterator[None]:
    """Let service errors through and turn anything else into an opaque fault."""
    try:
        yield
    except BookServiceError:
        raise
    except Exception as exc:
        # Full traceback stays in the server log, the client only sees the message
        logger.exception(failure_message)
        raise InternalFault(failure_message) from exc


@router.get("", response_model=BookListResponse)
async def list_books(store: BookStore = Depends(get_book_store)):
    """Get all books in insertion order."""
    with guard("Failed to retrieve books"):
        books = store.list()
        return BookListResponse(data=books, count=len(books))


@router.get("/search", response_model=BookSearchResponse, include_in_schema=False)
async def search_books_without_query():
    raise BookValidationError("Search query is required")


@router.get("/search/{query:path}", response_model=BookSearchResponse)
async def search_books(query: str, store: BookStore = Depends(get_book_store)):
    """Search books by title or author (case-insensitive)."""
    with guard("Failed to search books"):
        books = store.search(query)
        return BookSearchResponse(data=books, count=len(books), search_term=query)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: str, store: BookStore = Depends(get_book_store)):
    """Get a book by ID."""
    with guard("Failed to retrieve book"):
        return BookResponse(data=store.get(book_id))


@router.post("", response_model=BookMessageResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: Optional[BookCreate] = None,
    store: BookStore = Depends(get_book_store),
):
    """Create a new book. The id and timestamps are assigned here."""
    fields = payload.model_dump() if payload is not None else {}
    validate_book(fields)
    with guard("Failed to create book"):
        book = store.insert(fields)
        return BookMessageResponse(data=book, message="Book created successfully")


@router.put("/{book_id}", response_model=BookMessageResponse)
async def replace_book(
    book_id: str,
    payload: Optional[BookCreate] = None,
    store: BookStore = Depends(get_book_store),
):
    """Replace a book completely.

    Both title and author are re-validated; optional fields left out of the
    body are cleared.
    """
    fields = payload.model_dump() if payload is not None else {}
    validate_book(fields)
    with guard("Failed to update book"):
        book = store.replace(book_id, fields)
        return BookMessageResponse(data=book, message="Book updated successfully")


@router.patch("/{book_id}", response_model=BookMessageResponse)
async def update_book(
    book_id: str,
    payload: Optional[BookPatch] = None,
    store: BookStore = Depends(get_book_store),
):
    """Partially update a book. Only the fields sent are changed."""
    with guard("Failed to update book"):
        changes = payload.changes() if payload is not None else {}
        book = store.merge(book_id, changes)
        return BookMessageResponse(data=book, message="Book updated successfully")


@router.delete("/{book_id}", response_model=BookMessageResponse)
async def delete_book(book_id: str, store: BookStore = Depends(get_book_store)):
    """Delete a book and return what was deleted."""
    with guard("Failed to delete book"):
        book = store.delete(book_id)
        return BookMessageResponse(data=book, message="Book deleted successfully")


@router.delete("", response_model=MessageResponse)
async def delete_all_books(store: BookStore = Depends(get_book_store)):
    """Delete every book."""
    with guard("Failed to delete books"):
        removed = store.clear()
        return MessageResponse(message=f"All {removed} books deleted successfully")
