"""Cart lines — a price-locked snapshot of a product and the quantity wanted.

A line is one of two shapes depending on how the product is priced:
``KgLine`` for weight-priced cuts and ``PieceLine`` for count-priced birds.
Both expose ``quantity`` and ``unit_price`` so pricing can treat them alike.
"""

from dataclasses import dataclass, replace
from typing import ClassVar

from ordering.pricing.rules import PricingUnit, validate_line_quantity

CUTTING_OPTIONS = ("Whole (cleaned)", "Curry cut")


@dataclass(frozen=True)
class KgLine:
    unit: ClassVar[str] = PricingUnit.KG.value

    product_id: str
    name: str
    kg: float
    price_per_kg: float
    image_url: str = ""

    @property
    def quantity(self) -> float:
        return self.kg

    @property
    def unit_price(self) -> float:
        return self.price_per_kg

    @property
    def cutting_preference(self) -> None:
        return None

    def with_quantity(self, quantity: float) -> "KgLine":
        return replace(self, kg=quantity)

    def to_dict(self) -> dict:
        return {
            "unit": self.unit,
            "product_id": self.product_id,
            "name": self.name,
            "kg": self.kg,
            "price_per_kg": self.price_per_kg,
            "image_url": self.image_url,
        }


@dataclass(frozen=True)
class PieceLine:
    unit: ClassVar[str] = PricingUnit.PIECE.value

    product_id: str
    name: str
    pieces: int
    price_per_piece: float
    image_url: str = ""
    cutting_preference: str | None = None

    @property
    def quantity(self) -> int:
        return self.pieces

    @property
    def unit_price(self) -> float:
        return self.price_per_piece

    def with_quantity(self, quantity: int) -> "PieceLine":
        return replace(self, pieces=quantity)

    def to_dict(self) -> dict:
        return {
            "unit": self.unit,
            "product_id": self.product_id,
            "name": self.name,
            "pieces": self.pieces,
            "price_per_piece": self.price_per_piece,
            "image_url": self.image_url,
            "cutting_preference": self.cutting_preference,
        }


CartLine = KgLine | PieceLine


def _whole(quantity):
    if isinstance(quantity, float) and quantity.is_integer():
        return int(quantity)
    return quantity


def make_line(unit, product_id, name, quantity, unit_price, image_url="", cutting_preference=None) -> CartLine:
    """Build the variant matching ``unit`` from uniform fields. Does not validate quantities."""
    if unit == PricingUnit.KG.value:
        if cutting_preference:
            raise ValueError("Cutting preference applies to piece-priced products only")
        return KgLine(
            product_id=str(product_id),
            name=name,
            kg=quantity,
            price_per_kg=unit_price,
            image_url=image_url or "",
        )
    if unit == PricingUnit.PIECE.value:
        return PieceLine(
            product_id=str(product_id),
            name=name,
            pieces=_whole(quantity),
            price_per_piece=unit_price,
            image_url=image_url or "",
            cutting_preference=cutting_preference or None,
        )
    raise ValueError(f"Unknown pricing unit: {unit!r}")


def _number(data, key):
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Cart line field {key!r} must be a number, got {value!r}")
    return value


def line_from_dict(data) -> CartLine:
    """Rebuild a line from its ``to_dict`` form. Non-numeric quantities or prices raise ValueError."""
    if not isinstance(data, dict):
        raise ValueError(f"Cart line must be a mapping, got {type(data).__name__}")

    unit = data.get("unit")
    if unit == PricingUnit.KG.value:
        return make_line(
            unit,
            data["product_id"],
            data["name"],
            _number(data, "kg"),
            _number(data, "price_per_kg"),
            data.get("image_url", ""),
        )
    if unit == PricingUnit.PIECE.value:
        return make_line(
            unit,
            data["product_id"],
            data["name"],
            _number(data, "pieces"),
            _number(data, "price_per_piece"),
            data.get("image_url", ""),
            data.get("cutting_preference"),
        )
    raise ValueError(f"Unknown pricing unit: {unit!r}")


def line_from_product(product, quantity, cutting_preference=None) -> CartLine:
    """Lock the product's current price into a new cart line.

    ``product`` is anything carrying the catalogue fields (``id``, ``name``,
    ``unit``, ``price_per_kg``/``price_per_piece``, ``image_url``).
    """
    error = validate_line_quantity(product.unit, quantity)
    if error:
        raise ValueError(error)
    if cutting_preference and cutting_preference not in CUTTING_OPTIONS:
        raise ValueError(f"Unknown cutting preference: {cutting_preference!r}")

    price = product.price_per_kg if product.unit == PricingUnit.KG.value else product.price_per_piece
    return make_line(
        product.unit,
        product.id,
        product.name,
        quantity,
        price,
        getattr(product, "image_url", "") or "",
        cutting_preference,
    )
