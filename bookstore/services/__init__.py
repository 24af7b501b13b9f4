"""
Services Package

Business logic sits here, between the routers and the repositories:
- security: password hashing and JWT tokens
- auth: registration, lookup and credential checks
- books: catalog operations and purchases
- payments: the external payment gateway
"""

from bookstore.services.auth import AuthService
from bookstore.services.books import BookPage, BookService, calculate_total_price
from bookstore.services.payments import (
    PaymentGateway,
    PaystackGateway,
    StubPaymentGateway,
    build_payment_gateway,
)

__all__ = [
    "AuthService",
    "BookPage",
    "BookService",
    "calculate_total_price",
    "PaymentGateway",
    "PaystackGateway",
    "StubPaymentGateway",
    "build_payment_gateway",
]
