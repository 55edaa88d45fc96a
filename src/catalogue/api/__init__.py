"""Catalogue HTTP endpoints: the storefront product list, today's strip and categories."""

from catalogue.api.routes import category_router, product_router

__all__ = ["product_router", "category_router"]
