"""Marketplace bounded context: Users, Products and Orders.

Buyers hold a balance and purchase products listed by sellers. Order
placement validates stock and funds, records the order inside a per-buyer
critical section, and then settles stock and balance.
"""

import structlog
from protean.domain import Domain

marketplace = Domain(name="marketplace")

logger = structlog.get_logger(__name__)
