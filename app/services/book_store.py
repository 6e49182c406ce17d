"""In-memory book store."""
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

from app.models.book_model import SETTABLE_FIELDS, Book
from app.services.exceptions import BookNotFoundError
from app.services.validation import validate_book_patch, validate_search_query
from app.utils.id_generator import IdGenerator
from app.utils.logger import get_logger

logger = get_logger(__name__)

_OPTIONAL_FIELDS = ("isbn", "published_year", "genre", "description")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _full_record_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Settable attributes for insert/replace. Absent or falsy optionals become None."""
    values = {
        "title": fields["title"].strip(),
        "author": fields["author"].strip(),
    }
    for name in _OPTIONAL_FIELDS:
        values[name] = fields.get(name) or None
    return values


class BookStore:
    """Insertion-ordered mapping of id to Book.

    Every operation runs under one re-entrant lock, so a reader never sees a
    record halfway through an update. Records handed out are copies; the store
    is the only owner of what it holds.

    Title and author are expected to be validated by the caller before
    ``insert`` and ``replace``. ``merge`` and ``search`` validate their own
    input.
    """

    def __init__(
        self,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._books: Dict[str, Book] = {}
        self._lock = threading.RLock()
        self._id_generator = id_generator or IdGenerator()
        self._clock = clock or utc_now

    def __len__(self) -> int:
        return self.count()

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    def _refreshed_timestamp(self, previous: datetime) -> datetime:
        # updated_at must move forward even if the clock has not
        now = self._clock()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def _require(self, book_id: str) -> Book:
        book = self._books.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def insert(self, fields: Mapping[str, Any]) -> Book:
        values = _full_record_fields(fields)
        with self._lock:
            book_id = self._id_generator.generate()
            while book_id in self._books:
                book_id = self._id_generator.generate()
            now = self._clock()
            book = Book(id=book_id, created_at=now, updated_at=now, **values)
            self._books[book_id] = book
        logger.info(f"Created book {book_id}")
        return book.model_copy(deep=True)

    def get(self, book_id: str) -> Book:
        with self._lock:
            return self._require(book_id).model_copy(deep=True)

    def list(self) -> List[Book]:
        with self._lock:
            return [book.model_copy(deep=True) for book in self._books.values()]

    def replace(self, book_id: str, fields: Mapping[str, Any]) -> Book:
        """Overwrite every settable attribute. Omitted optionals are cleared."""
        with self._lock:
            existing = self._require(book_id)
            values = _full_record_fields(fields)
            book = Book(
                id=existing.id,
                created_at=existing.created_at,
                updated_at=self._refreshed_timestamp(existing.updated_at),
                **values,
            )
            self._books[book_id] = book
        logger.info(f"Replaced book {book_id}")
        return book.model_copy(deep=True)

    def merge(self, book_id: str, changes: Mapping[str, Any]) -> Book:
        """Overwrite only the attributes present in ``changes``.

        Keys outside the settable fields (``id``, ``created_at`` and anything
        unknown) are ignored.
        """
        with self._lock:
            existing = self._require(book_id)
            validate_book_patch(changes)

            values = existing.model_dump()
            for name in SETTABLE_FIELDS:
                if name in changes:
                    values[name] = changes[name]
            for name in ("title", "author"):
                values[name] = values[name].strip()
            values["id"] = existing.id
            values["created_at"] = existing.created_at
            values["updated_at"] = self._refreshed_timestamp(existing.updated_at)

            book = Book(**values)
            self._books[book_id] = book
        logger.info(f"Updated book {book_id} fields={sorted(k for k in changes if k in SETTABLE_FIELDS)}")
        return book.model_copy(deep=True)

    def delete(self, book_id: str) -> Book:
        """Remove a book and return it as it was before removal."""
        with self._lock:
            book = self._require(book_id)
            del self._books[book_id]
        logger.info(f"Deleted book {book_id}")
        return book

    def clear(self) -> int:
        with self._lock:
            removed = len(self._books)
            self._books.clear()
        logger.info(f"Deleted all books count={removed}")
        return removed

    def search(self, query: str) -> List[Book]:
        """Case-insensitive substring match on title or author, in insertion order."""
        validate_search_query(query)
        term = query.lower()
        with self._lock:
            return [
                book.model_copy(deep=True)
                for book in self._books.values()
                if term in book.title.lower() or term in book.author.lower()
            ]
