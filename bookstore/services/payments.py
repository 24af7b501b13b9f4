"""
Payment Gateway Service

Talks to a Paystack-style payment API:

    POST {base}/transaction/initialize   -> authorization_url, access_code, reference
    GET  {base}/transaction/verify/{ref} -> transaction status

Both calls carry "Authorization: Bearer <secret key>".

The gateway is an abstract interface with two implementations:
- PaystackGateway: real HTTP calls through a shared httpx.Client
- StubPaymentGateway: fixed values, used when ENVIRONMENT=test

There is no retry logic: a failed call surfaces as a 500 to the caller.
"""

import logging
from abc import ABC, abstractmethod

import httpx

from bookstore.config import Settings
from bookstore.exceptions import InternalServerError
from bookstore.schemas.purchase import PaymentInitialization

logger = logging.getLogger(__name__)

PROVIDER_ERROR = "payment provider error"


class PaymentGateway(ABC):
    """Contract for the external payment provider."""

    @abstractmethod
    def initialize(self, user_id: str, amount: str) -> PaymentInitialization:
        """
        Start a transaction.

        Args:
            user_id: Buyer id, sent as metadata
            amount: Total in minor currency units, as a string

        Returns:
            Where to send the buyer, plus the reference for verification
        """
        ...

    @abstractmethod
    def verify_payment(self, reference: str) -> str:
        """Return the provider's status string for a transaction reference."""
        ...

    def close(self) -> None:
        """Release network resources; called at application shutdown."""


class PaystackGateway(PaymentGateway):
    """
    Paystack implementation.

    Args:
        client: httpx.Client created with the API base URL and the bearer
            Authorization header (see build_payment_gateway)
        customer_email: Email sent with every initialization
    """

    def __init__(self, client: httpx.Client, customer_email: str) -> None:
        self.client = client
        self.customer_email = customer_email

    def _data(self, response: httpx.Response) -> dict:
        payload = response.json().get("data")
        if not payload:
            raise ValueError("response has no data object")
        return payload

    def initialize(self, user_id: str, amount: str) -> PaymentInitialization:
        try:
            response = self.client.post(
                "/transaction/initialize",
                json={
                    "email": self.customer_email,
                    "amount": amount,
                    "metadata": {"userId": user_id},
                },
            )
            response.raise_for_status()
            initialization = PaymentInitialization.model_validate(self._data(response))
        except httpx.HTTPError as e:
            logger.error(f"Payment initialization failed for user {user_id}: {e}")
            raise InternalServerError(PROVIDER_ERROR) from e
        except ValueError as e:
            logger.error(f"Unexpected payment initialization response: {e}")
            raise InternalServerError(PROVIDER_ERROR) from e

        logger.info(f"Payment initialized: reference={initialization.reference} amount={amount}")
        return initialization

    def verify_payment(self, reference: str) -> str:
        try:
            response = self.client.get(f"/transaction/verify/{reference}")
            response.raise_for_status()
            return str(self._data(response)["status"])
        except httpx.HTTPError as e:
            logger.error(f"Payment verification failed for {reference}: {e}")
            raise InternalServerError(PROVIDER_ERROR) from e
        except (ValueError, KeyError) as e:
            logger.error(f"Unexpected payment verification response: {e}")
            raise InternalServerError(PROVIDER_ERROR) from e

    def close(self) -> None:
        self.client.close()


class StubPaymentGateway(PaymentGateway):
    """Deterministic gateway for the test environment; makes no network calls."""

    AUTHORIZATION_URL = "https://test.authorization.url"
    ACCESS_CODE = "test-access-code"
    REFERENCE = "test-reference"

    def initialize(self, user_id: str, amount: str) -> PaymentInitialization:
        return PaymentInitialization(
            authorization_url=self.AUTHORIZATION_URL,
            access_code=self.ACCESS_CODE,
            reference=self.REFERENCE,
        )

    def verify_payment(self, reference: str) -> str:
        return "success"


def build_payment_gateway(settings: Settings) -> PaymentGateway:
    """
    Create the gateway for the configured environment.

    Called once from the application lifespan; the result lives on
    app.state for the life of the process.
    """
    if settings.is_test:
        logger.info("Using stub payment gateway (test environment)")
        return StubPaymentGateway()

    if not settings.paystack_key:
        logger.warning("PAYSTACK_KEY is not set - payment calls will be rejected by the provider")

    client = httpx.Client(
        base_url=settings.paystack_url,
        headers={"Authorization": f"Bearer {settings.paystack_key}"},
        timeout=settings.payment_timeout_seconds,
    )
    return PaystackGateway(client, settings.paystack_customer_email)
