"""Tests for User registration and addresses."""

import pytest
from protean.exceptions import ValidationError
from storefront.identity.events import AddressAdded, UserRegistered
from storefront.identity.user import User


def _user(**overrides):
    defaults = {"full_name": "Rahul Sharma", "email": "rahul@gmail.com", "password_hash": "pass123"}
    defaults.update(overrides)
    return User.register(**defaults)


class TestRegistration:
    def test_register(self):
        user = _user(phone="9876543210")
        assert user.full_name == "Rahul Sharma"
        assert user.phone == "9876543210"
        assert user.created_at is not None

    def test_email_is_normalized(self):
        assert _user(email="  Rahul@Gmail.com ").email == "rahul@gmail.com"

    def test_malformed_email_rejected(self):
        with pytest.raises(ValidationError):
            _user(email="not-an-email")

    def test_register_raises_event(self):
        user = _user()
        event = next(e for e in user._events if isinstance(e, UserRegistered))
        assert event.email == "rahul@gmail.com"


class TestAddresses:
    def test_add_address_defaults(self):
        user = _user()
        address = user.add_address(street="MG Road", city="Bengaluru", pincode="560001")
        assert address.country == "India"
        assert address.address_type == "Home"
        assert user.find_address(address.id) is not None

    def test_add_address_raises_event(self):
        user = _user()
        user.add_address(street="Park Street", city="Kolkata", pincode="700016", address_type="Office")
        event = next(e for e in user._events if isinstance(e, AddressAdded))
        assert event.address_type == "Office"

    def test_unknown_address_type_rejected(self):
        user = _user()
        with pytest.raises(ValidationError):
            user.add_address(street="MG Road", city="Bengaluru", pincode="560001", address_type="Warehouse")

    def test_remove_address(self):
        user = _user()
        address = user.add_address(street="MG Road", city="Bengaluru", pincode="560001")
        user.remove_address(address.id)
        assert len(user.addresses) == 0

    def test_remove_unknown_address(self):
        user = _user()
        with pytest.raises(ValidationError):
            user.remove_address("missing")
