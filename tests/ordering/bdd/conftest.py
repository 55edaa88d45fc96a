"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.lines import KgLine, PieceLine
from ordering.config import get_settings
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "OrderStatusChanged": OrderStatusChanged,
}


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def lifecycle():
    return get_settings().lifecycle


def _placed_order():
    return Order.place(
        customer_name="Asha",
        mobile="9876543210",
        delivery_type="delivery",
        address="12 Market Road",
        delivery_slot=None,
        lines=[
            KgLine("prod-001", "Chicken Curry Cut", 1.5, 280.0),
            PieceLine("prod-002", "Quail", 2, 120.0, cutting_preference="Whole (cleaned)"),
        ],
        delivery_charge=0.0,
        idempotency_token="bdd-token-001",
        initial_status=get_settings().lifecycle.initial,
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending order", target_fixture="order")
def pending_order():
    return _placed_order()


@given("an accepted order", target_fixture="order")
def accepted_order(lifecycle):
    order = _placed_order()
    order.transition_to("accepted", lifecycle)
    return order


@given("a delivered order", target_fixture="order")
def delivered_order(lifecycle):
    order = _placed_order()
    order.transition_to("accepted", lifecycle)
    order.transition_to("delivered", lifecycle)
    return order


@given("a cancelled order", target_fixture="order")
def cancelled_order(lifecycle):
    order = _placed_order()
    order.transition_to("cancelled", lifecycle)
    return order


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shop moves the order to "{status}"'))
def move_order(order, lifecycle, error, status):
    order._events.clear()
    try:
        order.transition_to(status, lifecycle)
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
    assert "status" in error["exc"].messages


@then("no order event is raised")
def no_order_event(order):
    assert order._events == []


@then(parsers.cfparse("an {event_type} order event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"
