"""User deletion: command and handler applying the cascade rules.

Addresses, the cart and reviews go with the user. Orders, product views and
search logs are history: they stay, with the user reference cleared.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.activity.product_view import ProductView
from storefront.activity.search_log import SearchLog
from storefront.domain import storefront
from storefront.identity.user import User
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.order.order import Order
from storefront.reviews.review import Review
from storefront.utils.queries import fetch_all, get_or_raise

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class DeleteUser:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class DeleteUserHandler:
    @handle(DeleteUser)
    def delete_user(self, command):
        user = get_or_raise(User, command.user_id, "user")
        user_id = str(user.id)

        for record_cls in (ShoppingCart, Review):
            repo = current_domain.repository_for(record_cls)
            for record in fetch_all(record_cls, user_id=user_id):
                repo._dao.delete(record)

        for record_cls in (Order, ProductView, SearchLog):
            repo = current_domain.repository_for(record_cls)
            for record in fetch_all(record_cls, user_id=user_id):
                record.user_id = None
                repo.add(record)

        current_domain.repository_for(User)._dao.delete(user)

        logger.info("Deleted user", user_id=user_id)
