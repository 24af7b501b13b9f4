"""
Pydantic Schemas Package

Schemas validate request bodies and shape responses:
- common.py: success envelope and error response
- user.py: credentials and public identity
- book.py: book create/update/response/list
- purchase.py: purchase request, gateway payload, purchase history
"""

from bookstore.schemas.book import (
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
)
from bookstore.schemas.common import Envelope, ErrorResponse, envelope
from bookstore.schemas.purchase import (
    PaymentInitialization,
    PurchaseRecord,
    PurchaseRequest,
)
from bookstore.schemas.user import (
    LoginCredentials,
    LoginResponse,
    PublicUser,
    UserCredentials,
)

__all__ = [
    "BookCreate",
    "BookListResponse",
    "BookResponse",
    "BookUpdate",
    "Envelope",
    "ErrorResponse",
    "envelope",
    "PaymentInitialization",
    "PurchaseRecord",
    "PurchaseRequest",
    "LoginCredentials",
    "LoginResponse",
    "PublicUser",
    "UserCredentials",
]
