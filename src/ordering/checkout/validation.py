"""Checkout input validation.

``validate_checkout`` returns a field -> messages map; an empty map means the
checkout may be placed. The same rules run on the shopper's device before
submission and inside the PlaceOrder handler.
"""

import re

from ordering.cart.lines import CUTTING_OPTIONS
from ordering.pricing.rules import (
    DeliveryType,
    PricingUnit,
    format_currency,
    is_below_minimum_order,
    line_subtotal,
    round_money,
    validate_line_quantity,
)

_MOBILE_PATTERN = re.compile(r"[6-9][0-9]{9}")


def validate_mobile(mobile) -> str | None:
    if not mobile or not str(mobile).strip():
        return "Mobile number is required"
    if not _MOBILE_PATTERN.fullmatch(str(mobile)):
        return "Enter a valid 10-digit mobile number"
    return None


def is_valid_mobile(mobile) -> bool:
    return validate_mobile(mobile) is None


def validate_customer_name(name) -> str | None:
    if not name or not str(name).strip():
        return "Name is required"
    if len(str(name).strip()) < 2:
        return "Name is too short"
    return None


def _validate_lines(lines) -> list[str]:
    if not lines:
        return ["Your cart is empty"]

    messages = []
    seen = set()
    for line in lines:
        error = validate_line_quantity(line.unit, line.quantity)
        if error:
            messages.append(f"{line.name}: {error}")
        if line.cutting_preference:
            if line.unit != PricingUnit.PIECE.value:
                messages.append(f"{line.name}: cutting preference applies to piece-priced products only")
            elif line.cutting_preference not in CUTTING_OPTIONS:
                messages.append(f"{line.name}: unknown cutting preference {line.cutting_preference!r}")
        if line.product_id in seen:
            messages.append(f"{line.name}: appears more than once")
        seen.add(line.product_id)
    return messages


def validate_checkout(customer_name, mobile, delivery_type, address, delivery_slot, lines, settings) -> dict:
    """Collect every problem with a checkout, keyed by field."""
    errors = {}

    name_error = validate_customer_name(customer_name)
    if name_error:
        errors["customer_name"] = [name_error]

    mobile_error = validate_mobile(mobile)
    if mobile_error:
        errors["mobile"] = [mobile_error]

    delivery_types = [member.value for member in DeliveryType]
    if delivery_type not in delivery_types:
        errors["delivery_type"] = [f"Choose one of {', '.join(delivery_types)}"]
    elif delivery_type == DeliveryType.DELIVERY.value:
        if not address or not str(address).strip():
            errors["address"] = ["Address is required for delivery"]
        if delivery_slot and delivery_slot not in settings.delivery_slots:
            errors["delivery_slot"] = [f"Unknown delivery slot {delivery_slot!r}"]
    elif delivery_slot:
        errors["delivery_slot"] = ["Delivery slots apply to delivery orders only"]

    line_errors = _validate_lines(lines)
    if line_errors:
        errors["items"] = line_errors
    else:
        subtotal = round_money(sum(round_money(line_subtotal(line)) for line in lines))
        if is_below_minimum_order(subtotal, settings.minimum_order_amount):
            errors["subtotal"] = [
                f"Minimum order amount is "
                f"{format_currency(settings.minimum_order_amount, settings.currency_symbol)}"
            ]

    return errors
