"""User registration: command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.user.user import User, UserRole


@marketplace.command(part_of="User")
class RegisterUser:
    """Create a new buyer or seller account."""

    username = String(required=True, max_length=100)
    role = String(choices=UserRole, default=UserRole.BUYER.value)


@marketplace.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        user = User.register(username=command.username, role=command.role)
        current_domain.repository_for(User).add(user)
        return str(user.id)
