"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.product.events import ProductAdded, ProductDeactivated, ProductPriceChanged
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_PRODUCT_EVENT_CLASSES = {
    "ProductAdded": ProductAdded,
    "ProductPriceChanged": ProductPriceChanged,
    "ProductDeactivated": ProductDeactivated,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a product sold per kg at {price:g}"), target_fixture="product")
def kg_product(price):
    product = Product.create(name="Chicken Curry Cut", category="chicken", unit="kg", price=price)
    product._events.clear()
    return product


@given(parsers.cfparse("a product sold per piece at {price:g}"), target_fixture="product")
def piece_product(price):
    product = Product.create(name="Quail", category="kadai", unit="piece", price=price)
    product._events.clear()
    return product


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} product event is raised"))
def product_event_raised(product, event_type):
    event_cls = _PRODUCT_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in product._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in product._events]}"
