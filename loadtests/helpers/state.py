"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across
users. State tracks ids returned by creation endpoints so follow-up requests
can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopState:
    """A seller with one product and a buyer with a funded balance."""

    seller_id: str | None = None
    product_id: str | None = None
    buyer_id: str | None = None
    deposited: int = 0
    order_ids: list[str] = field(default_factory=list)
