"""
Book Payload Parsing

POST /books and PUT /books/{book_id} accept two content types:

multipart/form-data (or a url-encoded form)
    Scalar fields come from form fields. List fields accept repeated
    `authors` / `authors[]` and `genre` / `genre[]` entries. An optional
    `cover_image` file part must be an image no larger than
    settings.max_cover_image_bytes.

anything else
    A JSON object body. cover_image cannot be sent this way.

The parsed dict is validated with BookCreate or BookUpdate; validation
failures surface as 400 through the handlers in main.py.
"""

import json
import logging
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel
from starlette.datastructures import FormData, UploadFile

from bookstore.config import get_settings
from bookstore.exceptions import BadRequestError
from bookstore.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)
settings = get_settings()

ModelT = TypeVar("ModelT", bound=BaseModel)

LIST_FIELDS = ("authors", "genre")
SCALAR_FIELDS = ("title", "publisher", "published", "summary", "price")
COVER_IMAGE_FIELD = "cover_image"
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _is_form(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.lower().startswith(FORM_CONTENT_TYPES)


async def read_cover_image(upload: UploadFile) -> bytes:
    """
    Read an uploaded cover image into memory.

    Raises:
        BadRequestError: not an image, or larger than the configured limit
    """
    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        logger.warning(f"Rejected cover upload with content type {content_type!r}")
        raise BadRequestError("only image files are allowed")

    limit = settings.max_cover_image_bytes
    data = await upload.read(limit + 1)
    if len(data) > limit:
        raise BadRequestError(f"File upload error: file exceeds {limit} bytes")

    return data


async def _form_fields(form: FormData) -> dict[str, Any]:
    fields: dict[str, Any] = {}

    for name in LIST_FIELDS:
        values = [
            value
            for value in form.getlist(name) + form.getlist(f"{name}[]")
            if isinstance(value, str)
        ]
        if values:
            fields[name] = values

    for name in SCALAR_FIELDS:
        value = form.get(name)
        if isinstance(value, str):
            fields[name] = value

    uploads = form.getlist(COVER_IMAGE_FIELD)
    if any(not isinstance(item, UploadFile) for item in uploads):
        raise BadRequestError(f"File upload error: {COVER_IMAGE_FIELD} must be a file")
    if len(uploads) > 1:
        raise BadRequestError("File upload error: only one cover_image file is allowed")
    if uploads:
        fields[COVER_IMAGE_FIELD] = await read_cover_image(uploads[0])

    return fields


async def _json_fields(request: Request) -> dict[str, Any]:
    body = await request.body()
    if not body:
        return {}

    try:
        payload = json.loads(body)
    except ValueError:
        raise BadRequestError("Request body must be valid JSON")

    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object")

    if COVER_IMAGE_FIELD in payload:
        raise BadRequestError("Content-Type must be multipart/form-data")

    return payload


async def parse_book_payload(request: Request, model: type[ModelT]) -> ModelT:
    """
    Read a book payload from JSON or multipart and validate it.

    Raises:
        BadRequestError: malformed body, bad upload, cover image sent as JSON
        pydantic.ValidationError: fields fail the model's rules
    """
    if _is_form(request):
        async with request.form() as form:
            fields = await _form_fields(form)
    else:
        fields = await _json_fields(request)

    return model.model_validate(fields)


async def book_create_payload(request: Request) -> BookCreate:
    return await parse_book_payload(request, BookCreate)


async def book_update_payload(request: Request) -> BookUpdate:
    return await parse_book_payload(request, BookUpdate)
