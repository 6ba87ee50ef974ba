"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="User")
class UserRegistered:
    """A new buyer or seller account was created."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    username = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="User")
class UserUpdated:
    """A user's username or role was changed."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    username = String(required=True)
    role = String(required=True)


@marketplace.event(part_of="User")
class UserClosed:
    """A user closed their account."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    closed_at = DateTime(required=True)


@marketplace.event(part_of="User")
class FundsDeposited:
    """A buyer added funds to their balance."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    amount = Integer(required=True)
    previous_balance = Integer(required=True)
    new_balance = Integer(required=True)


@marketplace.event(part_of="User")
class DepositReset:
    """A buyer's balance was reset to zero."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    previous_balance = Integer(required=True)


@marketplace.event(part_of="User")
class BalanceDebited:
    """A purchase total was taken from a buyer's balance."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    amount = Integer(required=True)
    previous_balance = Integer(required=True)
    new_balance = Integer(required=True)
