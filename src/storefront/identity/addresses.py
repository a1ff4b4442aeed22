"""Address management: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.utils.queries import get_or_raise


@storefront.command(part_of="User")
class AddAddress:
    user_id = Identifier(required=True)
    house_no = String(max_length=100)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    pincode = String(required=True, max_length=10)
    country = String(max_length=50)
    address_type = String(max_length=10)


@storefront.command(part_of="User")
class RemoveAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        user = get_or_raise(User, command.user_id, "user")
        address = user.add_address(
            house_no=command.house_no,
            street=command.street,
            city=command.city,
            state=command.state,
            pincode=command.pincode,
            country=command.country,
            address_type=command.address_type,
        )
        current_domain.repository_for(User).add(user)
        return str(address.id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        user = get_or_raise(User, command.user_id, "user")
        user.remove_address(command.address_id)
        current_domain.repository_for(User).add(user)
