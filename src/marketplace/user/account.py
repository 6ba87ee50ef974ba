"""User account maintenance: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.user.user import User, UserRole


@marketplace.command(part_of="User")
class UpdateUser:
    """Change the username and/or role of an account."""

    user_id = Identifier(required=True)
    username = String(max_length=100)
    role = String(choices=UserRole)


@marketplace.command(part_of="User")
class CloseUser:
    """Close an account. Closed accounts can no longer trade."""

    user_id = Identifier(required=True)


@marketplace.command_handler(part_of=User)
class ManageAccountHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update(username=command.username, role=command.role)
        repo.add(user)

    @handle(CloseUser)
    def close_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.close()
        repo.add(user)
