"""Order aggregate (CQRS) — a placed order and its fulfilment status.

Items and amounts are a snapshot taken at placement and never change
afterwards. The only mutable fact is ``status``, which moves through the
configured OrderLifecycle.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, String, Text

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.pricing.rules import DeliveryType, PricingUnit, compute_order_total, round_money


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A cart line frozen into the order with its locked unit price."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit = String(required=True, choices=PricingUnit)
    quantity = Float(required=True, min_value=0.0)
    unit_price = Float(required=True, min_value=0.0)
    subtotal = Float(required=True, min_value=0.0)
    cutting_preference = String(max_length=100)
    image_url = Text()

    @invariant.post
    def subtotal_matches_quantity_and_price(self):
        if self.quantity is None or self.unit_price is None or self.subtotal is None:
            return
        if round_money(self.subtotal) != round_money(self.quantity * self.unit_price):
            raise ValidationError(
                {"subtotal": [f"Item subtotal {self.subtotal:.2f} does not equal quantity x unit price"]}
            )


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_name = String(required=True, max_length=100)
    mobile = String(required=True, max_length=10)
    delivery_type = String(required=True, choices=DeliveryType)
    address = Text()
    delivery_slot = String(max_length=50)
    items = HasMany(OrderItem)
    subtotal = Float(required=True, min_value=0.0)
    delivery_charge = Float(default=0.0, min_value=0.0)
    total_amount = Float(required=True, min_value=0.0)
    status = String(required=True, max_length=50)
    idempotency_token = String(required=True, max_length=64, unique=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_is_subtotal_plus_delivery(self):
        if self.subtotal is None or self.total_amount is None:
            return
        expected = compute_order_total(self.subtotal, self.delivery_charge or 0.0)
        if round_money(self.total_amount) != expected:
            raise ValidationError(
                {"total_amount": [f"Total {self.total_amount:.2f} does not equal subtotal plus delivery {expected:.2f}"]}
            )

    @invariant.post
    def address_only_for_delivery(self):
        if self.delivery_type == DeliveryType.DELIVERY.value and not (self.address or "").strip():
            raise ValidationError({"address": ["Address is required for delivery"]})
        if self.delivery_type == DeliveryType.PICKUP.value and (self.address or self.delivery_slot):
            raise ValidationError({"address": ["Pickup orders carry no address or delivery slot"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_name,
        mobile,
        delivery_type,
        address,
        delivery_slot,
        lines,
        delivery_charge,
        idempotency_token,
        initial_status,
    ):
        """Snapshot cart lines into a new order.

        Args:
            lines: Cart lines (anything with ``product_id``, ``name``, ``unit``,
                ``quantity``, ``unit_price``, ``cutting_preference``).
            delivery_charge: Charge already decided by the delivery policy.
            initial_status: The lifecycle's initial state.
        """
        now = datetime.now(UTC)

        items = [
            OrderItem(
                product_id=line.product_id,
                product_name=line.name,
                unit=line.unit,
                quantity=line.quantity,
                unit_price=line.unit_price,
                subtotal=round_money(line.quantity * line.unit_price),
                cutting_preference=line.cutting_preference,
                image_url=line.image_url or None,
            )
            for line in lines
        ]
        subtotal = round_money(sum(item.subtotal for item in items))
        delivery_charge = round_money(delivery_charge or 0.0)

        order = cls(
            customer_name=customer_name.strip(),
            mobile=mobile,
            delivery_type=delivery_type,
            address=(address or "").strip() if delivery_type == DeliveryType.DELIVERY.value else "",
            delivery_slot=delivery_slot if delivery_type == DeliveryType.DELIVERY.value else None,
            items=items,
            subtotal=subtotal,
            delivery_charge=delivery_charge,
            total_amount=compute_order_total(subtotal, delivery_charge),
            status=initial_status,
            idempotency_token=idempotency_token,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                mobile=order.mobile,
                delivery_type=order.delivery_type,
                item_count=len(items),
                subtotal=order.subtotal,
                delivery_charge=order.delivery_charge,
                total_amount=order.total_amount,
                status=order.status,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def transition_to(self, target_status, lifecycle):
        """Move to ``target_status`` if the lifecycle allows it from the current status.

        Raises ValidationError keyed ``status`` before touching any field.
        """
        lifecycle.assert_can_transition(self.status, target_status)

        previous_status = self.status
        now = datetime.now(UTC)
        self.status = target_status
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=target_status,
                changed_at=now,
            )
        )

    @property
    def item_count(self) -> int:
        return len(self.items)
