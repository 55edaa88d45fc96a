"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A product was entered into the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    unit: String(required=True)
    price: Float(required=True)
    added_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductPriceChanged:
    """The shop repriced a product. Carts keep the price they locked in."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_unit: String(required=True)
    previous_price: Float(required=True)
    unit: String(required=True)
    price: Float(required=True)


@catalogue.event(part_of="Product")
class ProductDeactivated:
    """A product was withdrawn from sale."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
