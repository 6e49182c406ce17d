"""Book models."""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Fields a client may set. Anything else in a request body is ignored.
SETTABLE_FIELDS = ("title", "author", "isbn", "published_year", "genre", "description")


class CamelModel(BaseModel):
    """Serialises to camelCase JSON and accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Book(CamelModel):
    id: str
    title: str
    author: str
    isbn: Optional[Any] = None
    published_year: Optional[Any] = None  # stored as given, never validated
    genre: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BookCreate(CamelModel):
    """Body of POST and PUT.

    title and author are optional here so that a missing value is reported
    with the same message as an empty one instead of a schema error.
    """

    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[Any] = None
    published_year: Optional[Any] = None
    genre: Optional[str] = None
    description: Optional[str] = None


class BookPatch(BookCreate):
    """Body of PATCH. Only the keys the client actually sent are applied."""

    def changes(self) -> dict:
        return self.model_dump(include=set(SETTABLE_FIELDS), exclude_unset=True)


class BookResponse(BaseModel):
    success: bool = True
    data: Book


class BookMessageResponse(BookResponse):
    message: str


class BookListResponse(BaseModel):
    success: bool = True
    data: List[Book]
    count: int


class BookSearchResponse(CamelModel):
    success: bool = True
    data: List[Book]
    count: int
    search_term: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: Optional[str] = None
