"""Product data entry — command and handler."""

from protean import handle
from protean.fields import Boolean, Float, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=150)
    category: String(required=True, max_length=50)
    unit: String(required=True, max_length=10)
    price: Float(required=True)
    description: Text()
    image_url: String(max_length=500)
    is_active: Boolean(default=True)


@catalogue.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            category=command.category,
            unit=command.unit,
            price=command.price,
            description=command.description,
            image_url=command.image_url,
            is_active=command.is_active,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
