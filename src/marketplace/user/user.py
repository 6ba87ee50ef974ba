"""User aggregate: account role, status and monetary balance."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String

from marketplace.domain import marketplace
from marketplace.errors import InsufficientFunds


class UserRole(Enum):
    BUYER = "Buyer"
    SELLER = "Seller"


class UserStatus(Enum):
    ACTIVE = "Active"
    CLOSED = "Closed"


@marketplace.aggregate
class User:
    """A marketplace participant.

    Buyers hold a balance in the smallest currency unit and spend it on
    products listed by sellers. The balance only moves through deposits,
    resets and order settlement, and never drops below zero.
    """

    username = String(required=True, max_length=100)
    role = String(choices=UserRole, default=UserRole.BUYER.value)
    balance = Integer(default=0, min_value=0)
    status = String(choices=UserStatus, default=UserStatus.ACTIVE.value)
    created_at = DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def register(cls, username, role=None):
        from marketplace.user.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            username=username,
            role=role or UserRole.BUYER.value,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                username=user.username,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_active(self):
        return self.status == UserStatus.ACTIVE.value

    @property
    def is_buyer(self):
        return self.role == UserRole.BUYER.value

    def update(self, username=None, role=None):
        from marketplace.user.events import UserUpdated

        self._ensure_active()

        if username is not None:
            self.username = username
        if role is not None:
            self.role = role

        self.raise_(UserUpdated(user_id=self.id, username=self.username, role=self.role))

    def close(self):
        from marketplace.user.events import UserClosed

        self._ensure_active()
        self.status = UserStatus.CLOSED.value
        self.raise_(UserClosed(user_id=self.id, closed_at=datetime.now(UTC)))

    def deposit(self, amount):
        from marketplace.user.events import FundsDeposited

        self._ensure_active()
        if not self.is_buyer:
            raise ValidationError({"role": ["Only buyers can deposit funds"]})
        if amount is None or amount <= 0:
            raise ValidationError({"amount": ["Deposit amount must be positive"]})

        previous = self.balance
        self.balance = previous + amount

        self.raise_(
            FundsDeposited(
                user_id=self.id,
                amount=amount,
                previous_balance=previous,
                new_balance=self.balance,
            )
        )

    def reset_deposit(self):
        from marketplace.user.events import DepositReset

        self._ensure_active()
        if not self.is_buyer:
            raise ValidationError({"role": ["Only buyers can reset their deposit"]})

        previous = self.balance
        self.balance = 0
        self.raise_(DepositReset(user_id=self.id, previous_balance=previous))

    def debit(self, amount):
        """Take a purchase total from the balance, refusing to overdraw."""
        from marketplace.user.events import BalanceDebited

        if amount > self.balance:
            raise InsufficientFunds(f"Balance {self.balance} cannot cover {amount}")

        previous = self.balance
        self.balance = previous - amount

        self.raise_(
            BalanceDebited(
                user_id=self.id,
                amount=amount,
                previous_balance=previous,
                new_balance=self.balance,
            )
        )

    def _ensure_active(self):
        if not self.is_active:
            raise ValidationError({"status": ["Account is closed"]})
