"""Category aggregate: a named grouping of products used by revenue reports."""

from protean.fields import String

from storefront.catalogue.events import CategoryCreated
from storefront.domain import storefront


@storefront.aggregate
class Category:
    name = String(required=True, max_length=100, unique=True)
    description = String(max_length=255)

    @classmethod
    def create(cls, name, description=None):
        category = cls(name=name.strip(), description=description)
        category.raise_(CategoryCreated(category_id=str(category.id), name=category.name))
        return category
