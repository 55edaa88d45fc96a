"""PlaceOrder — idempotent order submission.

The shopper's device mints one idempotency token per checkout attempt and
sends it with every retry of that attempt. The handler validates the
checkout, then returns the existing order when the token has been seen
before; only an unseen token creates a new order.
"""

import json
from dataclasses import dataclass

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from ordering.cart.lines import line_from_dict
from ordering.checkout.validation import validate_checkout
from ordering.config import get_settings
from ordering.domain import ordering
from ordering.order.order import Order
from ordering.pricing.rules import quote_lines

logger = structlog.get_logger(__name__)

# Client and server round independently; anything above a paisa is a real mismatch.
_TOTAL_TOLERANCE = 0.01


@dataclass(frozen=True)
class PlacementResult:
    order_id: str
    created: bool


@ordering.command(part_of="Order")
class PlaceOrder:
    idempotency_token = String(required=True, max_length=64)
    customer_name = String(max_length=100)
    mobile = String(max_length=20)
    delivery_type = String(max_length=20)
    address = Text()
    delivery_slot = String(max_length=50)
    items = Text()  # JSON: list of cart line dicts
    subtotal = Float()
    delivery_charge = Float()
    total_amount = Float()


def _parse_lines(raw):
    data = json.loads(raw) if isinstance(raw, str) else raw
    if not data:
        return []
    if not isinstance(data, list):
        raise ValueError("items must be a list of cart lines")
    return [line_from_dict(entry) for entry in data]


def _check_client_totals(command, quote) -> dict:
    errors = {}
    client_values = {
        "subtotal": (command.subtotal, quote.subtotal),
        "delivery_charge": (command.delivery_charge, quote.delivery_charge),
        "total_amount": (command.total_amount, quote.total),
    }
    for key, (client, server) in client_values.items():
        if client is not None and abs(client - server) > _TOTAL_TOLERANCE:
            errors["total_amount"] = [
                f"Order total has changed: {key} was {client:.2f}, expected {server:.2f}. Please review your cart."
            ]
            break
    return errors


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        settings = get_settings()

        try:
            lines = _parse_lines(command.items)
        except (ValueError, KeyError, TypeError) as exc:
            logger.info("Rejected checkout with unreadable items", error=str(exc))
            raise ValidationError({"items": ["Cart items could not be read"]}) from None

        errors = validate_checkout(
            customer_name=command.customer_name,
            mobile=command.mobile,
            delivery_type=command.delivery_type,
            address=command.address,
            delivery_slot=command.delivery_slot,
            lines=lines,
            settings=settings,
        )
        quote = None
        if not errors:
            quote = quote_lines(lines, command.delivery_type, settings.delivery_policy)
            errors = _check_client_totals(command, quote)
        if errors:
            logger.info("Rejected invalid checkout", fields=sorted(errors))
            raise ValidationError(errors)

        repo = current_domain.repository_for(Order)

        existing = repo.find_by_idempotency_token(command.idempotency_token)
        if existing is not None:
            logger.info("Duplicate order submission", order_id=str(existing.id))
            return PlacementResult(order_id=str(existing.id), created=False)

        order = Order.place(
            customer_name=command.customer_name,
            mobile=command.mobile,
            delivery_type=command.delivery_type,
            address=command.address,
            delivery_slot=command.delivery_slot,
            lines=lines,
            delivery_charge=quote.delivery_charge,
            idempotency_token=command.idempotency_token,
            initial_status=settings.lifecycle.initial,
        )

        try:
            repo.add(order)
        except ValidationError as exc:
            # Another submission with this token was stored after our lookup.
            if "idempotency_token" not in exc.messages:
                raise
            winner = repo.find_by_idempotency_token(command.idempotency_token)
            if winner is None:
                raise
            logger.info("Duplicate order submission resolved at write", order_id=str(winner.id))
            return PlacementResult(order_id=str(winner.id), created=False)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            total_amount=order.total_amount,
            item_count=order.item_count,
        )
        return PlacementResult(order_id=str(order.id), created=True)
