"""Product aggregate with ProductImage entity.

The product's ``price`` is the current list price. Carts capture it when an
item is added and orders copy it from the cart, so later price changes never
reach placed orders.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, String, Text

from storefront.catalogue.events import ProductCreated, ProductImageAdded, ProductPriceChanged
from storefront.domain import storefront


@storefront.entity(part_of="Product")
class ProductImage:
    image_url = String(required=True, max_length=1024)
    is_primary = Boolean(default=False)


@storefront.aggregate
class Product:
    category_id = Identifier()
    name = String(required=True, max_length=200)
    brand = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    description = Text()
    images = HasMany(ProductImage)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def exactly_one_primary_image_when_images_exist(self):
        if not self.images:
            return
        primaries = [i for i in self.images if i.is_primary]
        if len(primaries) != 1:
            raise ValidationError({"images": ["Exactly one image must be primary"]})

    @classmethod
    def create(cls, name, price, category_id=None, brand=None, description=None):
        now = datetime.now(UTC)
        product = cls(
            category_id=category_id,
            name=name,
            brand=brand,
            price=price,
            description=description,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                category_id=str(category_id) if category_id else None,
                name=name,
                brand=brand,
                price=price,
                created_at=now,
            )
        )
        return product

    def change_price(self, new_price):
        if new_price is None or new_price < 0:
            raise ValidationError({"price": ["Price must be zero or positive"]})

        previous_price = self.price
        self.price = new_price
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=new_price,
            )
        )

    def add_image(self, image_url, is_primary=False):
        """Attach an image. The first image is always primary; a new primary demotes the old one."""
        with atomic_change(self):
            if not self.images:
                is_primary = True

            if is_primary:
                for img in self.images:
                    if img.is_primary:
                        img.is_primary = False

            image = ProductImage(image_url=image_url, is_primary=is_primary)
            self.add_images(image)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductImageAdded(
                product_id=str(self.id),
                image_id=str(image.id),
                image_url=image_url,
                is_primary=is_primary,
            )
        )
        return image
