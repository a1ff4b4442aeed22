"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new user account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    full_name = String(required=True)
    email = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class AddressAdded:
    """A delivery address was added to a user."""

    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    city = String()
    address_type = String()


@storefront.event(part_of="User")
class AddressRemoved:
    """A delivery address was removed from a user."""

    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
