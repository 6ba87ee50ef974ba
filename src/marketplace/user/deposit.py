"""Buyer deposits: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.user.user import User


@marketplace.command(part_of="User")
class Deposit:
    """Add funds to a buyer's balance."""

    user_id = Identifier(required=True)
    amount = Integer(required=True, min_value=1)


@marketplace.command(part_of="User")
class ResetDeposit:
    """Reset a buyer's balance to zero."""

    user_id = Identifier(required=True)


@marketplace.command_handler(part_of=User)
class DepositHandler:
    @handle(Deposit)
    def deposit(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.deposit(command.amount)
        repo.add(user)
        return user.balance

    @handle(ResetDeposit)
    def reset_deposit(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.reset_deposit()
        repo.add(user)
        return user.balance
