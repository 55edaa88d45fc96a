"""Repository for the Order aggregate — idempotency lookup and admin queries."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, time, timedelta
from zoneinfo import ZoneInfo

from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.domain import ordering
from ordering.order.order import Order

ALL_STATUSES = "all"

_BATCH_SIZE = 100


@dataclass(frozen=True)
class OrderPage:
    """One page of orders, newest first.

    ``next_cursor`` is the id of the last order on the page, or None when
    there are no more pages.
    """

    orders: list
    next_cursor: str | None = None


@dataclass(frozen=True)
class DashboardSummary:
    day: str
    total: int
    by_status: dict = field(default_factory=dict)


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_by_idempotency_token(self, token: str) -> Order | None:
        if not token:
            return None
        return self._dao.query.filter(idempotency_token=token).all().first

    def latest_for_mobile(self, mobile: str) -> Order | None:
        return self._dao.query.filter(mobile=mobile).order_by("-created_at").limit(1).all().first

    def list_orders(self, status=None, mobile=None, after_cursor=None, page_size=15) -> OrderPage:
        """Newest orders first, optionally filtered by status or exact mobile.

        Orders placed in the same microsecond as the cursor order are treated
        as one position and may be skipped.
        """
        filters = {}
        if status and status != ALL_STATUSES:
            filters["status"] = status
        if mobile:
            filters["mobile"] = mobile
        if after_cursor:
            try:
                anchor = self._dao.get(after_cursor)
            except ObjectNotFoundError:
                raise ValidationError({"cursor": [f"Unknown cursor {after_cursor}"]}) from None
            filters["created_at__lt"] = anchor.created_at

        query = self._dao.query.filter(**filters) if filters else self._dao.query
        orders = query.order_by("-created_at").limit(page_size).all().items
        next_cursor = str(orders[-1].id) if len(orders) == page_size else None
        return OrderPage(orders=list(orders), next_cursor=next_cursor)

    def placed_between(self, start: datetime, end: datetime) -> list[Order]:
        orders = []
        offset = 0
        while True:
            batch = (
                self._dao.query.filter(created_at__gte=start, created_at__lt=end)
                .order_by("-created_at")
                .offset(offset)
                .limit(_BATCH_SIZE)
                .all()
                .items
            )
            orders.extend(batch)
            if len(batch) < _BATCH_SIZE:
                return orders
            offset += _BATCH_SIZE

    def today_summary(self, states, timezone="Asia/Kolkata", now=None) -> DashboardSummary:
        """Count today's orders (in the shop's time zone) in total and per state."""
        zone = ZoneInfo(timezone)
        local_now = (now or datetime.now(UTC)).astimezone(zone)
        start = datetime.combine(local_now.date(), time.min, tzinfo=zone)
        end = start + timedelta(days=1)

        orders = self.placed_between(start.astimezone(UTC), end.astimezone(UTC))
        by_status = dict.fromkeys(states, 0)
        for order in orders:
            by_status[order.status] = by_status.get(order.status, 0) + 1

        return DashboardSummary(
            day=local_now.date().isoformat(),
            total=len(orders),
            by_status=by_status,
        )
