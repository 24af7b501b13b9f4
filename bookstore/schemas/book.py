"""
Book Pydantic Schemas

- BookCreate: full payload for POST /books (JSON or multipart)
- BookUpdate: partial payload for PUT /books/{book_id}
- BookResponse: a book as returned to clients
- BookListResponse: one page of the filtered catalog
"""

import base64
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

MAX_PRICE = Decimal("99999999.99")

# Columns that may be omitted from an update but never set to null
NON_NULLABLE_FIELDS = ("title", "authors", "publisher", "published", "genre", "price")


def _coerce_published(value: Any) -> Any:
    """
    Accept full ISO timestamps for the publication date.

    Clients commonly send JavaScript Date strings such as
    2019-03-01T10:22:31.000Z; only the calendar date is kept.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and ("T" in value or " " in value.strip()):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError:
            return value
    return value


class BookCreate(BaseModel):
    """
    Schema for creating a book.

    Example request body:
    {
        "title": "1984",
        "authors": ["George Orwell"],
        "publisher": "Secker & Warburg",
        "published": "1949-06-08",
        "genre": ["Dystopian"],
        "price": "12.99"
    }
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=500, examples=["1984"])
    authors: list[str] = Field(..., examples=[["George Orwell"]])
    publisher: str = Field(..., min_length=1, max_length=255)
    published: date = Field(..., examples=["1949-06-08"])
    genre: list[str] = Field(..., examples=[["Dystopian", "Classic"]])
    summary: str | None = Field(default=None, max_length=5000)
    price: Decimal = Field(..., gt=0, le=MAX_PRICE, examples=["12.99"])
    cover_image: bytes | None = Field(
        default=None,
        description="Only settable through a multipart upload",
    )

    @field_validator("published", mode="before")
    @classmethod
    def published_accepts_timestamps(cls, v: Any) -> Any:
        return _coerce_published(v)


class BookUpdate(BaseModel):
    """
    Schema for updating a book.

    All fields are optional; only the fields a client actually sends are
    merged over the stored record (model_dump(exclude_unset=True)).
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=500)
    authors: list[str] | None = None
    publisher: str | None = Field(default=None, min_length=1, max_length=255)
    published: date | None = None
    genre: list[str] | None = None
    summary: str | None = Field(default=None, max_length=5000)
    price: Decimal | None = Field(default=None, gt=0, le=MAX_PRICE)
    cover_image: bytes | None = None

    @field_validator("published", mode="before")
    @classmethod
    def published_accepts_timestamps(cls, v: Any) -> Any:
        return _coerce_published(v)

    @model_validator(mode="after")
    def required_columns_not_null(self) -> "BookUpdate":
        for name in NON_NULLABLE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class BookResponse(BaseModel):
    """
    A book as returned by the API.

    The primary key is exposed as book_id; the cover image, when present,
    is base64 encoded.
    """

    book_id: uuid.UUID = Field(..., validation_alias="id")
    title: str
    authors: list[str]
    publisher: str
    published: date
    genre: list[str]
    summary: str | None = None
    cover_image: bytes | None = None
    price: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_serializer("cover_image", when_used="json")
    def encode_cover_image(self, value: bytes | None) -> str | None:
        if value is None:
            return None
        return base64.b64encode(value).decode("ascii")


class BookListResponse(BaseModel):
    """
    One page of the filtered catalog.

    - items: books in [offset, offset + limit)
    - total: size of the filtered set (not of the whole table)
    """

    items: list[BookResponse]
    total: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)
    offset: int = Field(..., ge=0)

    model_config = ConfigDict(from_attributes=True)
