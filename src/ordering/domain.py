"""Ordering bounded context — cart pricing, checkout and the order lifecycle.

Holds the client-side cart model, the idempotent order submission protocol,
the configurable order status state machine and the admin order listing.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging

# Configure logging for the application
configure_logging()

# Domain Composition Root
ordering = Domain(name="ordering")
