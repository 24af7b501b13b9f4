"""
Purchase Pydantic Schemas

- PurchaseRequest: body of POST /books/buy/{book_id}
- PaymentInitialization: what the payment gateway hands back
- PurchaseRecord: flat purchase history row (purchase + book title + username)
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


MAX_QUANTITY = 1000


class PurchaseRequest(BaseModel):
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY, examples=[2])


class PaymentInitialization(BaseModel):
    """
    Gateway response to a transaction initialization.

    The client redirects the buyer to authorization_url; reference is
    stored with the purchase for later verification.
    """

    authorization_url: str
    access_code: str
    reference: str

    model_config = ConfigDict(extra="ignore")


class PurchaseRecord(BaseModel):
    id: uuid.UUID
    payment_reference: str
    status: str
    purchase_date: datetime | None = None
    quantity: int
    total_price: int = Field(..., description="Minor currency units")
    book_title: str
    user_name: str

    model_config = ConfigDict(from_attributes=True)
