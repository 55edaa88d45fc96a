"""Product availability — commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class MarkTodayAvailable:
    product_id: Identifier(required=True)
    available: Boolean(default=True)


@catalogue.command_handler(part_of=Product)
class ManageAvailabilityHandler:
    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)

    @handle(MarkTodayAvailable)
    def mark_today_available(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.mark_today_available(command.available)
        repo.add(product)
