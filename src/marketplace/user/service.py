"""User Service: the account operations order placement depends on."""

import structlog
from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError

from marketplace.user.user import User

logger = structlog.get_logger(__name__)


class UserService:
    """Reads buyer snapshots and settles purchase totals against balances.

    Every call runs inside its own domain context so the service can be
    driven from any task without relying on an ambient context.
    """

    def __init__(self, domain: Domain) -> None:
        self._domain = domain

    def get_user(self, user_id: str) -> User | None:
        """Return an active user, or None when unknown or closed."""
        with self._domain.domain_context():
            try:
                user = self._domain.repository_for(User).get(user_id)
            except ObjectNotFoundError:
                return None

        if not user.is_active:
            return None
        return user

    def update_balance_post_order(self, user_id: str, total_purchase_amount: int) -> User:
        """Debit a purchase total. Raises InsufficientFunds instead of overdrawing."""
        with self._domain.domain_context():
            repo = self._domain.repository_for(User)
            user = repo.get(user_id)
            user.debit(total_purchase_amount)
            repo.add(user)

        logger.info(
            "Balance debited",
            user_id=user_id,
            amount=total_purchase_amount,
            new_balance=user.balance,
        )
        return user
