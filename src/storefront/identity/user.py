"""User aggregate root with Address entity.

A user owns its delivery addresses outright: removing the user removes them
with it. Orders keep the address id they were placed with.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, String

from storefront.domain import storefront
from storefront.identity.events import AddressAdded, AddressRemoved, UserRegistered

_EMAIL_PATTERN = re.compile(r"^[^@\s;,<>()\[\]\\]+@[^@\s;,<>()\[\]\\]+\.[^@\s;,<>()\[\]\\]+$")


class AddressType(Enum):
    HOME = "Home"
    OFFICE = "Office"


@storefront.entity(part_of="User")
class Address:
    house_no = String(max_length=100)
    street = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    pincode = String(max_length=10)
    country = String(max_length=50, default="India")
    address_type = String(choices=AddressType, default=AddressType.HOME.value)


@storefront.aggregate
class User:
    full_name = String(required=True, max_length=100)
    email = String(required=True, max_length=100, unique=True)
    phone = String(max_length=15)
    password_hash = String(required=True, max_length=255)
    addresses = HasMany(Address)
    created_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(cls, full_name, email, password_hash, phone=None):
        now = datetime.now(UTC)
        user = cls(
            full_name=full_name,
            email=email.strip().lower(),
            phone=phone,
            password_hash=password_hash,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                full_name=user.full_name,
                email=user.email,
                registered_at=now,
            )
        )
        return user

    def find_address(self, address_id):
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)

    def add_address(self, street, city, pincode, house_no=None, state=None, country=None, address_type=None):
        address = Address(
            house_no=house_no,
            street=street,
            city=city,
            state=state,
            pincode=pincode,
            country=country or "India",
            address_type=address_type or AddressType.HOME.value,
        )
        self.add_addresses(address)

        self.raise_(
            AddressAdded(
                user_id=str(self.id),
                address_id=str(address.id),
                city=city,
                address_type=address.address_type,
            )
        )
        return address

    def remove_address(self, address_id):
        address = self.find_address(address_id)
        if address is None:
            raise ValidationError({"address_id": ["Address not found for this user"]})

        self.remove_addresses(address)
        self.raise_(AddressRemoved(user_id=str(self.id), address_id=str(address_id)))
