"""Catalogue bounded context — the shop's meat products and their pricing units.

Products are entered by the shop owner and read by the storefront; the
ordering context only ever sees price-locked snapshots of them.
"""

from protean.domain import Domain

# Domain Composition Root
catalogue = Domain(name="catalogue")
