"""Cart management: commands and handler.

Each user has at most one cart. ``CreateCart`` is idempotent: it hands back
the user's existing cart when there is one.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.ordering.cart.cart import ShoppingCart
from storefront.utils.queries import fetch_all, get_or_raise


def cart_for_user(user_id):
    """Return the user's cart, or None when the user has not opened one."""
    carts = fetch_all(ShoppingCart, user_id=str(user_id))
    return carts[0] if carts else None


@storefront.command(part_of="ShoppingCart")
class CreateCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        get_or_raise(User, command.user_id, "user")

        existing = cart_for_user(command.user_id)
        if existing is not None:
            return str(existing.id)

        cart = ShoppingCart.create(user_id=command.user_id)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)
