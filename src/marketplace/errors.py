"""Marketplace domain exceptions.

Raised by the services when a business rule is violated. The API layer
translates them into HTTP responses.
"""


class MarketplaceError(Exception):
    """Base class for all marketplace errors."""

    default_message = "Marketplace error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ProductNotFound(MarketplaceError):
    """The referenced product does not exist."""

    default_message = "Product not found"


class UserNotFound(MarketplaceError):
    """The referenced user does not exist or has been closed."""

    default_message = "User not found"


class InsufficientProductStock(MarketplaceError):
    """The requested quantity exceeds the available stock."""

    default_message = "Insufficient product stock"


class InsufficientFunds(MarketplaceError):
    """The buyer's balance does not cover the purchase."""

    default_message = "Insufficient funds"


class NotAuthorizedToPerformAction(MarketplaceError):
    """The user may not perform this action (e.g. buying their own product)."""

    default_message = "Not authorized to perform this action"


class LockContention(MarketplaceError):
    """A critical section could not be entered within the retry budget."""

    default_message = "Resource is busy, retry later"


class OrderCreationFailed(MarketplaceError):
    """The order repository did not return an order."""

    default_message = "Order could not have been created"


class StockUpdateConflict(MarketplaceError):
    """The conditional stock decrement kept losing to concurrent writers."""

    default_message = "Stock changed concurrently, update abandoned"
