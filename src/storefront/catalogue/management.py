"""Catalogue management: commands and handlers for categories and products."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.inventory.record import InventoryRecord
from storefront.utils.queries import fetch_all, get_or_raise


@storefront.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=100)
    description = String(max_length=255)


@storefront.command(part_of="Product")
class CreateProduct:
    """Add a product to the catalogue and open its inventory record."""

    category_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    brand = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    description = Text()
    initial_stock = Integer(default=0, min_value=0)


@storefront.command(part_of="Product")
class UpdateProductPrice:
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)


@storefront.command(part_of="Product")
class AddProductImage:
    product_id = Identifier(required=True)
    image_url = String(required=True, max_length=1024)
    is_primary = Boolean(default=False)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        name = command.name.strip()
        existing = [c for c in fetch_all(Category) if c.name.lower() == name.lower()]
        if existing:
            raise ValidationError({"name": ["A category with this name already exists"]})

        category = Category.create(name=name, description=command.description)
        current_domain.repository_for(Category).add(category)
        return str(category.id)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        get_or_raise(Category, command.category_id, "category")

        product = Product.create(
            category_id=command.category_id,
            name=command.name,
            brand=command.brand,
            price=command.price,
            description=command.description,
        )
        current_domain.repository_for(Product).add(product)

        record = InventoryRecord.create(product_id=product.id, stock=command.initial_stock or 0)
        current_domain.repository_for(InventoryRecord).add(record)
        return str(product.id)

    @handle(UpdateProductPrice)
    def update_product_price(self, command):
        product = get_or_raise(Product, command.product_id, "product")
        product.change_price(command.price)
        current_domain.repository_for(Product).add(product)

    @handle(AddProductImage)
    def add_product_image(self, command):
        product = get_or_raise(Product, command.product_id, "product")
        image = product.add_image(image_url=command.image_url, is_primary=command.is_primary)
        current_domain.repository_for(Product).add(product)
        return str(image.id)
