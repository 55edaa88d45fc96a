"""Tests for the Product aggregate: unit pricing, repricing and availability."""

import pytest
from catalogue.product.events import ProductAdded, ProductDeactivated, ProductPriceChanged
from catalogue.product.product import Product
from protean.exceptions import ValidationError


def _kg_product(**overrides):
    defaults = {"name": "Chicken Curry Cut", "category": "chicken", "unit": "kg", "price": 220.0}
    defaults.update(overrides)
    return Product.create(**defaults)


def _piece_product():
    return Product.create(name="Quail", category="kadai", unit="piece", price=120.0)


class TestProductCreation:
    def test_kg_product_carries_only_kg_price(self):
        product = _kg_product()
        assert product.price_per_kg == 220.0
        assert product.price_per_piece is None
        assert product.price == 220.0

    def test_piece_product_carries_only_piece_price(self):
        product = _piece_product()
        assert product.price_per_piece == 120.0
        assert product.price_per_kg is None

    def test_defaults(self):
        product = _kg_product()
        assert product.is_active is True
        assert product.today_available is False
        assert product.updated_at is not None

    def test_raises_product_added(self):
        product = _kg_product()
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.unit == "kg"
        assert event.price == 220.0

    def test_unknown_unit(self):
        with pytest.raises(ValidationError) as exc:
            _kg_product(unit="dozen")
        assert "unit" in exc.value.messages

    @pytest.mark.parametrize("price", [0, -10.0])
    def test_price_must_be_positive(self, price):
        with pytest.raises(ValidationError) as exc:
            _kg_product(price=price)
        assert "price_per_kg" in exc.value.messages


class TestPriceInvariant:
    def test_both_prices_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Product(name="Breast", category="chicken", unit="kg", price_per_kg=280.0, price_per_piece=90.0)
        assert "price_per_piece" in exc.value.messages

    def test_missing_price_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Product(name="Quail", category="kadai", unit="piece")
        assert "price_per_piece" in exc.value.messages


class TestChangePrice:
    def test_same_unit(self):
        product = _kg_product()
        product._events.clear()

        product.change_price("kg", 240.0)

        assert product.price_per_kg == 240.0
        event = product._events[0]
        assert isinstance(event, ProductPriceChanged)
        assert (event.previous_price, event.price) == (220.0, 240.0)

    def test_switch_unit_clears_other_price(self):
        product = _kg_product()
        product.change_price("piece", 95.0)

        assert product.unit == "piece"
        assert product.price_per_piece == 95.0
        assert product.price_per_kg is None

    def test_invalid_price_leaves_product_unchanged(self):
        product = _kg_product()
        with pytest.raises(ValidationError):
            product.change_price("kg", 0)
        assert product.price_per_kg == 220.0


class TestAvailability:
    def test_deactivate(self):
        product = _kg_product()
        product.mark_today_available()
        product._events.clear()

        product.deactivate()

        assert product.is_active is False
        assert product.today_available is False
        assert isinstance(product._events[0], ProductDeactivated)

    def test_deactivate_twice(self):
        product = _kg_product()
        product.deactivate()
        with pytest.raises(ValidationError):
            product.deactivate()

    def test_mark_today_available(self):
        product = _kg_product()
        product.mark_today_available()
        assert product.today_available is True
        product.mark_today_available(False)
        assert product.today_available is False

    def test_inactive_product_cannot_be_offered_today(self):
        product = _kg_product()
        product.deactivate()
        with pytest.raises(ValidationError):
            product.mark_today_available()
