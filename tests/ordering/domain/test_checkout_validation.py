"""Tests for checkout validation rules."""

import pytest
from ordering.cart.lines import KgLine, PieceLine
from ordering.checkout.validation import is_valid_mobile, validate_checkout, validate_customer_name, validate_mobile
from ordering.config import ShopSettings

SETTINGS = ShopSettings()


def _validate(**overrides):
    defaults = {
        "customer_name": "Asha",
        "mobile": "9876543210",
        "delivery_type": "delivery",
        "address": "12 Market Road",
        "delivery_slot": SETTINGS.delivery_slots[0],
        "lines": [KgLine("p1", "Chicken Breast", 1, 280.0)],
        "settings": SETTINGS,
    }
    defaults.update(overrides)
    return validate_checkout(**defaults)


class TestMobile:
    @pytest.mark.parametrize("mobile", ["9876543210", "6000000000", "7123456789"])
    def test_valid(self, mobile):
        assert is_valid_mobile(mobile)

    @pytest.mark.parametrize("mobile", ["5555555555", "987654321", "98765432100", "98765-4321", "+919876543210"])
    def test_invalid(self, mobile):
        assert validate_mobile(mobile) == "Enter a valid 10-digit mobile number"

    def test_required(self):
        assert validate_mobile("") == "Mobile number is required"
        assert validate_mobile(None) == "Mobile number is required"


class TestName:
    def test_required(self):
        assert validate_customer_name("  ") == "Name is required"

    def test_too_short(self):
        assert validate_customer_name("A") == "Name is too short"

    def test_valid(self):
        assert validate_customer_name("Asha") is None


class TestCheckout:
    def test_valid_delivery_checkout(self):
        assert _validate() == {}

    def test_valid_pickup_checkout(self):
        assert _validate(delivery_type="pickup", address=None, delivery_slot=None) == {}

    def test_delivery_needs_address(self):
        assert _validate(address="")["address"] == ["Address is required for delivery"]

    def test_unknown_slot(self):
        assert "delivery_slot" in _validate(delivery_slot="Midnight")

    def test_slot_is_optional_for_delivery(self):
        assert _validate(delivery_slot=None) == {}

    def test_pickup_rejects_slot(self):
        errors = _validate(delivery_type="pickup", address=None)
        assert errors["delivery_slot"] == ["Delivery slots apply to delivery orders only"]

    def test_unknown_delivery_type(self):
        assert "delivery_type" in _validate(delivery_type="courier")

    def test_empty_cart(self):
        assert _validate(lines=[])["items"] == ["Your cart is empty"]

    def test_invalid_quantity_is_reported_per_line(self):
        errors = _validate(lines=[KgLine("p1", "Chicken Breast", 60, 280.0)])
        assert errors["items"] == ["Chicken Breast: Maximum quantity is 50 kg"]

    def test_duplicate_products(self):
        line = KgLine("p1", "Chicken Breast", 1, 280.0)
        assert "Chicken Breast: appears more than once" in _validate(lines=[line, line])["items"]

    def test_unknown_cutting_preference(self):
        errors = _validate(lines=[PieceLine("p2", "Quail", 2, 120.0, cutting_preference="Boneless")])
        assert "items" in errors

    def test_minimum_order_amount(self):
        errors = _validate(lines=[KgLine("p1", "Chicken Breast", 0.5, 180.0)])
        assert errors["subtotal"] == ["Minimum order amount is ₹100.00"]

    def test_collects_every_field(self):
        errors = _validate(customer_name="", mobile="5555555555", address="")
        assert {"customer_name", "mobile", "address"} <= set(errors)
