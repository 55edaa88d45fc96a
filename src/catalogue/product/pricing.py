"""Product repricing — command and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProductPrice:
    product_id: Identifier(required=True)
    unit: String(required=True, max_length=10)
    price: Float(required=True)


@catalogue.command_handler(part_of=Product)
class UpdateProductPriceHandler:
    @handle(UpdateProductPrice)
    def update_product_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_price(unit=command.unit, price=command.price)
        repo.add(product)
