"""Domain events for the Category and Product aggregates."""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    category_id = Identifier()
    name = String(required=True)
    brand = String()
    price = Float(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductPriceChanged:
    """The list price of a product changed. Existing cart and order lines keep their captured price."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)


@storefront.event(part_of="Product")
class ProductImageAdded:
    __version__ = 1

    product_id = Identifier(required=True)
    image_id = Identifier(required=True)
    image_url = String(required=True)
    is_primary = Boolean(default=False)
