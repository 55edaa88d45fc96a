"""Application tests for shop-driven status changes."""

import json

import pytest
from ordering.cart.lines import KgLine
from ordering.config import ShopSettings, use_settings
from ordering.order.lifecycle import WITH_CONFIRMATION, OrderLifecycle
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.status import UpdateOrderStatus
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _place_order(token="tok-status"):
    command = PlaceOrder(
        idempotency_token=token,
        customer_name="Ravi",
        mobile="9123456780",
        delivery_type="pickup",
        items=json.dumps([KgLine("prod-001", "Chicken Breast", 1, 280.0).to_dict()]),
    )
    return current_domain.process(command, asynchronous=False).order_id


def _update(order_id, status):
    return current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


def _status(order_id):
    return current_domain.repository_for(Order).get(order_id).status


class TestUpdateOrderStatus:
    def test_accept(self):
        order_id = _place_order()
        assert _update(order_id, "accepted") == "accepted"
        assert _status(order_id) == "accepted"

    def test_full_happy_path(self):
        order_id = _place_order()
        _update(order_id, "accepted")
        _update(order_id, "delivered")
        assert _status(order_id) == "delivered"

    def test_cancel_from_accepted(self):
        order_id = _place_order()
        _update(order_id, "accepted")
        _update(order_id, "cancelled")
        assert _status(order_id) == "cancelled"

    def test_rejected_transition_leaves_stored_status(self):
        order_id = _place_order()
        with pytest.raises(ValidationError):
            _update(order_id, "delivered")
        assert _status(order_id) == "pending"

    def test_terminal_order_cannot_move(self):
        order_id = _place_order()
        _update(order_id, "cancelled")
        with pytest.raises(ValidationError):
            _update(order_id, "accepted")
        assert _status(order_id) == "cancelled"

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _update("no-such-order", "accepted")

    def test_confirmation_lifecycle(self):
        use_settings(ShopSettings(lifecycle=OrderLifecycle.builtin(WITH_CONFIRMATION)))
        order_id = _place_order()

        with pytest.raises(ValidationError):
            _update(order_id, "accepted")
        _update(order_id, "confirmed")
        _update(order_id, "accepted")
        assert _status(order_id) == "accepted"
