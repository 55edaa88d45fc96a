"""Catalogue reads for the storefront."""

from protean.exceptions import DatabaseError
from protean.utils.globals import current_domain
from sqlalchemy.exc import SQLAlchemyError

from catalogue.product.product import Product
from catalogue.utils.logging import logger


class CatalogueUnavailable(Exception):
    """The product list could not be read. Safe to retry."""


_BATCH_SIZE = 100

# Failures worth a retry. Anything else is a bug and propagates.
_STORAGE_ERRORS = (DatabaseError, SQLAlchemyError, ConnectionError, TimeoutError)


def _active_products(**filters):
    query = current_domain.repository_for(Product)._dao.query.filter(is_active=True, **filters)
    products, offset = [], 0
    while True:
        batch = query.offset(offset).limit(_BATCH_SIZE).all().items
        products.extend(batch)
        if len(batch) < _BATCH_SIZE:
            return products
        offset += _BATCH_SIZE


def fetch_active_products(category=None) -> list[Product]:
    """Active products, optionally in one category, sorted by name ignoring case."""
    filters = {"category": category} if category else {}
    try:
        products = _active_products(**filters)
    except _STORAGE_ERRORS as exc:
        logger.error("Failed to read the product catalogue", category=category, error=str(exc))
        raise CatalogueUnavailable("The menu could not be loaded. Please try again.") from exc
    return sorted(products, key=lambda product: product.name.lower())


def fetch_today_available() -> list[Product]:
    """Products flagged for today's strip. Failures only cost the strip, so they yield []."""
    try:
        products = _active_products(today_available=True)
    except Exception as exc:
        logger.warning("Failed to read today's available products", error=str(exc))
        return []
    return sorted(products, key=lambda product: product.name.lower())
