"""Product aggregate — a meat product priced either per kg or per piece."""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String, Text

from catalogue.domain import catalogue

CATEGORIES = (
    {"id": "chicken", "name": "Chicken", "description": "Fresh broiler chicken cuts"},
    {"id": "kadai", "name": "Quail", "description": "Fresh quail (kaadai)"},
)


class ProductUnit(Enum):
    KG = "kg"
    PIECE = "piece"


_PRICE_FIELDS = {
    ProductUnit.KG.value: "price_per_kg",
    ProductUnit.PIECE.value: "price_per_piece",
}


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=150)
    description: Text()
    category: String(required=True, max_length=50)
    is_active: Boolean(default=True)
    unit: String(required=True, choices=ProductUnit, default=ProductUnit.KG.value)
    price_per_kg: Float()
    price_per_piece: Float()
    image_url: String(max_length=500)
    today_available: Boolean(default=False)
    updated_at: DateTime()

    @invariant.post
    def exactly_one_price_matching_unit(self):
        expected = _PRICE_FIELDS.get(self.unit)
        if expected is None:
            return
        other = _PRICE_FIELDS[ProductUnit.PIECE.value if expected == "price_per_kg" else ProductUnit.KG.value]

        price = getattr(self, expected)
        if price is None:
            raise ValidationError({expected: [f"A {self.unit}-priced product needs {expected}"]})
        if price <= 0:
            raise ValidationError({expected: ["Price must be greater than zero"]})
        if getattr(self, other) is not None:
            raise ValidationError({other: [f"A {self.unit}-priced product cannot carry {other}"]})

    @property
    def price(self) -> float:
        return getattr(self, _PRICE_FIELDS[self.unit])

    @classmethod
    def create(cls, name, category, unit, price, description=None, image_url=None, is_active=True):
        from catalogue.product.events import ProductAdded

        if unit not in _PRICE_FIELDS:
            raise ValidationError({"unit": [f"Unit must be one of {', '.join(_PRICE_FIELDS)}"]})

        now = datetime.now(UTC)
        product = cls(
            name=name,
            category=category,
            unit=unit,
            description=description,
            image_url=image_url,
            is_active=is_active,
            updated_at=now,
            **{_PRICE_FIELDS[unit]: price},
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                category=category,
                unit=unit,
                price=price,
                added_at=now,
            )
        )
        return product

    def change_price(self, unit, price):
        """Set a new price, switching the pricing unit if ``unit`` differs."""
        from catalogue.product.events import ProductPriceChanged

        if unit not in _PRICE_FIELDS:
            raise ValidationError({"unit": [f"Unit must be one of {', '.join(_PRICE_FIELDS)}"]})
        if price is None or price <= 0:
            raise ValidationError({_PRICE_FIELDS[unit]: ["Price must be greater than zero"]})

        previous_unit, previous_price = self.unit, self.price
        with atomic_change(self):
            self.unit = unit
            self.price_per_kg = price if unit == ProductUnit.KG.value else None
            self.price_per_piece = price if unit == ProductUnit.PIECE.value else None
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductPriceChanged(
                product_id=self.id,
                previous_unit=previous_unit,
                previous_price=previous_price,
                unit=unit,
                price=price,
            )
        )

    def deactivate(self):
        from catalogue.product.events import ProductDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})

        self.is_active = False
        self.today_available = False
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDeactivated(product_id=self.id, deactivated_at=self.updated_at))

    def mark_today_available(self, available=True):
        if available and not self.is_active:
            raise ValidationError({"today_available": ["Inactive products cannot be offered today"]})
        self.today_available = available
        self.updated_at = datetime.now(UTC)
