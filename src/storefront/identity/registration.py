"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.utils.queries import fetch_all


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new user account."""

    full_name = String(required=True, max_length=100)
    email = String(required=True, max_length=100)
    phone = String(max_length=15)
    password_hash = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        email = command.email.strip().lower()
        if fetch_all(User, email=email):
            raise ValidationError({"email": ["A user with this email already exists"]})
        if command.phone and fetch_all(User, phone=command.phone):
            raise ValidationError({"phone": ["A user with this phone number already exists"]})

        user = User.register(
            full_name=command.full_name,
            email=email,
            phone=command.phone,
            password_hash=command.password_hash,
        )
        current_domain.repository_for(User).add(user)
        return str(user.id)
