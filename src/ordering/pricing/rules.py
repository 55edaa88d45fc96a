"""Pricing and quantity rules.

Pure functions over cart lines and configuration values. Nothing here reads
storage or global settings; callers pass the delivery policy and minimum order
amount in.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

MIN_KG = 0.5
MAX_KG = 50.0
KG_STEP = 0.25
MIN_PIECES = 1

CURRENCY_SYMBOL = "₹"


class PricingUnit(Enum):
    KG = "kg"
    PIECE = "piece"


class DeliveryType(Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class DeliveryPolicyKind(Enum):
    FREE = "free"
    FLAT = "flat"


@dataclass(frozen=True)
class DeliveryPolicy:
    """How the delivery charge is computed.

    ``free`` never charges. ``flat`` charges ``fee`` unless ``free_above`` is
    set and the subtotal reaches it.
    """

    kind: str = DeliveryPolicyKind.FREE.value
    fee: float = 0.0
    free_above: float | None = None

    def __post_init__(self):
        DeliveryPolicyKind(self.kind)
        if self.fee < 0:
            raise ValueError(f"Delivery fee cannot be negative: {self.fee}")
        if self.free_above is not None and self.free_above < 0:
            raise ValueError(f"Free delivery threshold cannot be negative: {self.free_above}")


@dataclass(frozen=True)
class CartQuote:
    """Totals for a set of cart lines, rounded the way an order stores them."""

    subtotal: float
    delivery_charge: float
    total: float


def round_money(amount: float) -> float:
    """Round half-up to 2 decimal places."""
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_currency(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    return f"{symbol}{amount:.2f}"


def line_subtotal(line) -> float:
    """Quantity times the locked unit price. Unrounded; cart display may show it as is."""
    return line.quantity * line.unit_price


def validate_quantity(kg) -> str | None:
    """Return a user-facing message when ``kg`` is not an orderable weight."""
    if kg is None or isinstance(kg, bool) or not isinstance(kg, int | float):
        return "Enter a quantity in kg"
    if kg < MIN_KG:
        return f"Minimum quantity is {MIN_KG:g} kg"
    if kg > MAX_KG:
        return f"Maximum quantity is {MAX_KG:g} kg"
    if (kg * 4) % 1 != 0:
        return f"Quantity must be in steps of {KG_STEP:g} kg"
    return None


def is_valid_quantity(kg) -> bool:
    return validate_quantity(kg) is None


def validate_piece_count(pieces) -> str | None:
    """Return a user-facing message when ``pieces`` is not a whole count of at least one."""
    if pieces is None or isinstance(pieces, bool) or not isinstance(pieces, int | float):
        return "Enter the number of pieces"
    if isinstance(pieces, float) and not pieces.is_integer():
        return "Pieces must be a whole number"
    if pieces < MIN_PIECES:
        return f"Minimum {MIN_PIECES} piece"
    return None


def is_valid_piece_count(pieces) -> bool:
    return validate_piece_count(pieces) is None


def validate_line_quantity(unit: str, quantity) -> str | None:
    if unit == PricingUnit.KG.value:
        return validate_quantity(quantity)
    if unit == PricingUnit.PIECE.value:
        return validate_piece_count(quantity)
    return f"Unknown pricing unit: {unit}"


def compute_delivery_charge(subtotal: float, policy: DeliveryPolicy) -> float:
    if policy.kind == DeliveryPolicyKind.FREE.value:
        return 0.0
    if policy.free_above is not None and subtotal >= policy.free_above:
        return 0.0
    return round_money(policy.fee)


def delivery_charge_for(delivery_type: str, subtotal: float, policy: DeliveryPolicy) -> float:
    """Pickup orders never pay for delivery."""
    if delivery_type != DeliveryType.DELIVERY.value:
        return 0.0
    return compute_delivery_charge(subtotal, policy)


def is_below_minimum_order(subtotal: float, minimum: float) -> bool:
    return subtotal < minimum


def compute_order_total(subtotal: float, delivery_charge: float) -> float:
    return round_money(subtotal + delivery_charge)


def quote_lines(lines, delivery_type: str, policy: DeliveryPolicy) -> CartQuote:
    """Price a cart exactly as order placement will persist it.

    Each line is rounded to 2 decimals first and the subtotal is the sum of
    the rounded lines.
    """
    subtotal = round_money(sum(round_money(line_subtotal(line)) for line in lines))
    delivery_charge = delivery_charge_for(delivery_type, subtotal, policy)
    return CartQuote(
        subtotal=subtotal,
        delivery_charge=delivery_charge,
        total=compute_order_total(subtotal, delivery_charge),
    )
