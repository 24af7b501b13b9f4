"""
Response Envelope Schemas

Every successful response is wrapped the same way:

    {
        "status": "success",
        "statuscode": 200,
        "message": "Book Fetched Successfully",
        "data": {...}
    }

Errors use ErrorResponse instead (see bookstore.main for the handlers).
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Uniform wrapper for successful API responses."""

    status: str = Field(default="success", examples=["success"])
    statuscode: int = Field(..., description="HTTP status code, repeated in the body")
    message: str = Field(..., examples=["Book Created Successfully"])
    data: DataT | None = None


def envelope(message: str, statuscode: int, data: Any = None) -> dict[str, Any]:
    """Build the envelope payload for a route's response_model to validate."""
    return {
        "status": "success",
        "statuscode": statuscode,
        "message": message,
        "data": data,
    }


class ErrorResponse(BaseModel):
    """Shape of every error response, documented in OpenAPI."""

    status: str | bool = Field(default="error", examples=["error"])
    message: str = Field(..., examples=["Book not found"])
    errors: Any = None
