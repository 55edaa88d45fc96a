"""Checkout session — the shopper's side of idempotent order submission.

A session owns the cart and the idempotency token for the current checkout
attempt. The token survives failed and retried submissions and is replaced
only once an order is confirmed, so a retry after a lost response can never
create a second order.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.cart.store import CartStore
from ordering.checkout.validation import validate_checkout
from ordering.config import get_settings
from ordering.order.placement import PlaceOrder
from ordering.pricing.rules import CartQuote, quote_lines

logger = structlog.get_logger(__name__)

RETRY_MESSAGE = "Something went wrong. Please check your connection and try again."


class OutcomeKind(Enum):
    PLACED = "placed"
    INVALID = "invalid"
    RETRYABLE = "retryable"


@dataclass(frozen=True)
class CheckoutOutcome:
    kind: OutcomeKind
    order_id: str | None = None
    duplicate: bool = False
    errors: dict = field(default_factory=dict)
    message: str | None = None


def mint_idempotency_token() -> str:
    return str(uuid4())


def _process(command):
    return current_domain.process(command, asynchronous=False)


class CheckoutSession:
    def __init__(self, cart: CartStore, submitter=None, settings=None):
        self.cart = cart
        self._submit = submitter or _process
        self._settings = settings
        self.idempotency_token = mint_idempotency_token()

    @property
    def settings(self):
        return self._settings or get_settings()

    def quote(self, delivery_type: str) -> CartQuote:
        return quote_lines(self.cart.items, delivery_type, self.settings.delivery_policy)

    def submit(self, customer_name, mobile, delivery_type, address=None, delivery_slot=None) -> CheckoutOutcome:
        lines = self.cart.items
        errors = validate_checkout(
            customer_name=customer_name,
            mobile=mobile,
            delivery_type=delivery_type,
            address=address,
            delivery_slot=delivery_slot,
            lines=lines,
            settings=self.settings,
        )
        if errors:
            return CheckoutOutcome(kind=OutcomeKind.INVALID, errors=errors)

        quote = self.quote(delivery_type)
        command = PlaceOrder(
            idempotency_token=self.idempotency_token,
            customer_name=customer_name.strip(),
            mobile=mobile,
            delivery_type=delivery_type,
            address=address,
            delivery_slot=delivery_slot,
            items=json.dumps([line.to_dict() for line in lines]),
            subtotal=quote.subtotal,
            delivery_charge=quote.delivery_charge,
            total_amount=quote.total,
        )

        try:
            result = self._submit(command)
        except ValidationError as exc:
            return CheckoutOutcome(kind=OutcomeKind.INVALID, errors=exc.messages)
        except OSError as exc:
            # Connection errors and timeouts. Keep the cart and the token for the retry.
            logger.warning("Order submission failed, keeping cart for retry", error=str(exc))
            return CheckoutOutcome(kind=OutcomeKind.RETRYABLE, message=RETRY_MESSAGE)

        self.cart.clear()
        self.idempotency_token = mint_idempotency_token()
        return CheckoutOutcome(kind=OutcomeKind.PLACED, order_id=result.order_id, duplicate=not result.created)
