"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer's checkout was accepted and persisted as a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    mobile = String(required=True, max_length=10)
    delivery_type = String(required=True)
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    delivery_charge = Float(required=True)
    total_amount = Float(required=True)
    status = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """The shop moved an order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
