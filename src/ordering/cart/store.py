"""CartStore — the shopper's cart, persisted after every change."""

import structlog

from ordering.cart.lines import CartLine, line_from_dict
from ordering.cart.reducer import AddLine, ClearCart, Hydrate, RemoveLine, UpdateQuantity, reduce
from ordering.cart.storage import CartStorage
from ordering.pricing.rules import line_subtotal

logger = structlog.get_logger(__name__)


class CartStore:
    """Holds the cart lines and writes the full collection through ``storage``.

    Quantities accumulate without bound here; whether they are orderable is
    decided at checkout.
    """

    def __init__(self, storage: CartStorage) -> None:
        self._storage = storage
        self._lines: tuple = ()
        self._hydrate()

    def _hydrate(self) -> None:
        try:
            saved = self._storage.load()
            if not saved:
                return
            lines = tuple(line_from_dict(data) for data in saved)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Discarded unreadable cart state", error=str(exc))
            return
        self._lines = reduce(self._lines, Hydrate(lines))

    def _dispatch(self, command) -> tuple:
        self._lines = reduce(self._lines, command)
        try:
            self._storage.save([line.to_dict() for line in self._lines])
        except OSError as exc:
            logger.warning("Could not save cart", error=str(exc), line_count=len(self._lines))
        return self._lines

    @property
    def items(self) -> tuple:
        return self._lines

    @property
    def item_count(self) -> int:
        return len(self._lines)

    @property
    def subtotal(self) -> float:
        return sum(line_subtotal(line) for line in self._lines)

    def add_item(self, line: CartLine) -> tuple:
        return self._dispatch(AddLine(line))

    def update_quantity(self, product_id: str, quantity) -> tuple:
        return self._dispatch(UpdateQuantity(str(product_id), quantity))

    def remove_item(self, product_id: str) -> tuple:
        return self._dispatch(RemoveLine(str(product_id)))

    def clear(self) -> tuple:
        return self._dispatch(ClearCart())
