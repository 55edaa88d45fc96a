"""Tests for the Order aggregate: placement snapshot, invariants and transitions."""

import pytest
from ordering.cart.lines import KgLine, PieceLine
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.order.lifecycle import OrderLifecycle
from ordering.order.order import Order, OrderItem
from protean.exceptions import ValidationError

LINES = [
    KgLine("prod-1", "Chicken Breast", 2, 280.0),
    PieceLine("prod-2", "Quail", 4, 120.0, cutting_preference="Curry cut"),
]


def _place(**overrides):
    defaults = {
        "customer_name": "Asha",
        "mobile": "9876543210",
        "delivery_type": "delivery",
        "address": "12 Market Road",
        "delivery_slot": "Morning (7AM – 10AM)",
        "lines": LINES,
        "delivery_charge": 30.0,
        "idempotency_token": "tok-001",
        "initial_status": "pending",
    }
    defaults.update(overrides)
    return Order.place(**defaults)


class TestPlacement:
    def test_snapshot_amounts(self):
        order = _place()
        assert order.subtotal == 1040.0
        assert order.delivery_charge == 30.0
        assert order.total_amount == 1070.0

    def test_items_carry_locked_prices(self):
        order = _place()
        assert order.item_count == 2
        breast, quail = order.items
        assert (breast.unit, breast.quantity, breast.unit_price, breast.subtotal) == ("kg", 2, 280.0, 560.0)
        assert quail.cutting_preference == "Curry cut"
        assert quail.subtotal == 480.0

    def test_starts_in_initial_status(self):
        assert _place(initial_status="pending").status == "pending"

    def test_timestamps(self):
        order = _place()
        assert order.created_at is not None
        assert order.updated_at == order.created_at

    def test_name_is_trimmed(self):
        assert _place(customer_name="  Asha  ").customer_name == "Asha"

    def test_pickup_drops_address_and_slot(self):
        order = _place(delivery_type="pickup", delivery_charge=0.0)
        assert not order.address
        assert order.delivery_slot is None
        assert order.total_amount == order.subtotal

    def test_raises_order_placed(self):
        order = _place()
        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.item_count == 2
        assert event.total_amount == 1070.0


class TestInvariants:
    def test_total_must_equal_subtotal_plus_delivery(self):
        with pytest.raises(ValidationError) as exc:
            Order(
                customer_name="Asha",
                mobile="9876543210",
                delivery_type="pickup",
                subtotal=200.0,
                delivery_charge=0.0,
                total_amount=250.0,
                status="pending",
                idempotency_token="tok-bad",
            )
        assert "total_amount" in exc.value.messages

    def test_delivery_needs_address(self):
        with pytest.raises(ValidationError) as exc:
            _place(address="   ")
        assert exc.value.messages["address"] == ["Address is required for delivery"]

    def test_item_subtotal_must_match(self):
        with pytest.raises(ValidationError):
            OrderItem(
                product_id="prod-1",
                product_name="Chicken Breast",
                unit="kg",
                quantity=2,
                unit_price=280.0,
                subtotal=500.0,
            )

    def test_unknown_delivery_type(self):
        with pytest.raises(ValidationError):
            _place(delivery_type="courier")


class TestTransitions:
    @pytest.fixture()
    def lifecycle(self):
        return OrderLifecycle.builtin()

    def test_accept(self, lifecycle):
        order = _place()
        order.transition_to("accepted", lifecycle)
        assert order.status == "accepted"

    def test_transition_raises_event(self, lifecycle):
        order = _place()
        order.transition_to("cancelled", lifecycle)
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert (event.previous_status, event.new_status) == ("pending", "cancelled")

    def test_skip_is_rejected_and_state_unchanged(self, lifecycle):
        order = _place()
        updated_at = order.updated_at
        with pytest.raises(ValidationError):
            order.transition_to("delivered", lifecycle)
        assert order.status == "pending"
        assert order.updated_at == updated_at

    @pytest.mark.parametrize("terminal", ["delivered", "cancelled"])
    def test_terminal_orders_do_not_move(self, lifecycle, terminal):
        order = _place()
        if terminal == "delivered":
            order.transition_to("accepted", lifecycle)
        order.transition_to(terminal, lifecycle)

        for target in ("pending", "accepted", "delivered", "cancelled"):
            with pytest.raises(ValidationError):
                order.transition_to(target, lifecycle)
        assert order.status == terminal
