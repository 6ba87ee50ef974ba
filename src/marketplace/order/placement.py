"""Order placement: validation, the per-buyer critical section, settlement.

Flow:
    1. Product must exist                       -> ProductNotFound
    2. Stock must cover the quantity            -> InsufficientProductStock
    3. Buyer must exist and be active           -> UserNotFound
    4. Balance must cover cost x quantity       -> InsufficientFunds
    5. Buyer must not be the product's seller   -> NotAuthorizedToPerformAction
    6. Under the buyer's lock: persist the order, then decrement stock and
       balance side by side.

Validation failures leave no trace. Once the order is persisted it is
returned no matter how settlement went; settlement failures are logged and
reported through ``PlacementResult.settlement`` for reconciliation.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum

import structlog

from marketplace.errors import (
    InsufficientFunds,
    InsufficientProductStock,
    NotAuthorizedToPerformAction,
    OrderCreationFailed,
    ProductNotFound,
    UserNotFound,
)
from marketplace.locking.coordinator import MutualExclusionCoordinator
from marketplace.order import pricing
from marketplace.order.order import Order
from marketplace.order.repository import OrderStore
from marketplace.product.service import ProductService
from marketplace.user.service import UserService

logger = structlog.get_logger(__name__)

LOCK_MAX_ATTEMPTS = 5


def buyer_lock_key(buyer_id: str) -> str:
    return f"order:user:{buyer_id}"


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------
class SettlementOutcome(Enum):
    OK = "Ok"
    PARTIAL_FAILURE = "Partial_Failure"


class SettlementStep(Enum):
    STOCK = "stock"
    BALANCE = "balance"


@dataclass(frozen=True)
class SettlementFailure:
    step: SettlementStep
    error_type: str
    reason: str


@dataclass(frozen=True)
class SettlementStatus:
    outcome: SettlementOutcome = SettlementOutcome.OK
    failures: tuple[SettlementFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return self.outcome == SettlementOutcome.OK


@dataclass(frozen=True)
class PlacementResult:
    """A persisted order together with how its settlement went."""

    order: Order
    settlement: SettlementStatus = field(default_factory=SettlementStatus)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PlacementDependencies:
    users: UserService
    products: ProductService
    orders: OrderStore
    locks: MutualExclusionCoordinator


class OrderPlacementService:
    def __init__(self, dependencies: PlacementDependencies, lock_max_attempts: int = LOCK_MAX_ATTEMPTS) -> None:
        self.users = dependencies.users
        self.products = dependencies.products
        self.orders = dependencies.orders
        self.locks = dependencies.locks
        self.lock_max_attempts = lock_max_attempts

    async def place_order(self, product_id: str, quantity: int, buyer_id: str) -> PlacementResult:
        product = self.products.get_product(product_id)
        if product is None:
            logger.debug("Order placement rejected: product not found", product_id=product_id)
            raise ProductNotFound(f"Product {product_id} not found")

        if not pricing.is_product_available(product, quantity):
            logger.debug(
                "Order placement rejected: insufficient product stock",
                product_id=product_id,
                stock=product.stock,
                quantity=quantity,
            )
            raise InsufficientProductStock(f"Requested {quantity}, only {product.stock} in stock")

        buyer = self.users.get_user(buyer_id)
        if buyer is None:
            logger.debug("Order placement rejected: buyer not found", buyer_id=buyer_id)
            raise UserNotFound(f"User {buyer_id} not found")

        balance_before_purchase = pricing.get_balance(buyer)
        total_purchase_amount = pricing.get_total_cost(product, quantity)

        if balance_before_purchase < total_purchase_amount:
            logger.debug(
                "Order placement rejected: insufficient funds",
                product_id=product_id,
                buyer_id=buyer_id,
                balance_before_purchase=balance_before_purchase,
                total_purchase_amount=total_purchase_amount,
            )
            raise InsufficientFunds(f"Balance {balance_before_purchase} cannot cover {total_purchase_amount}")

        if product.is_sold_by(buyer_id):
            logger.debug(
                "Order placement rejected: cannot purchase own product",
                product_id=product_id,
                buyer_id=buyer_id,
            )
            raise NotAuthorizedToPerformAction("Sellers cannot purchase their own products")

        async def critical_section() -> PlacementResult:
            basket = pricing.get_order_basket(
                product_id=product_id,
                quantity=quantity,
                total_cost=total_purchase_amount,
                unit_cost=product.cost,
            )
            order = self.orders.create_order(buyer_id, basket)
            if order is None:
                raise OrderCreationFailed()

            settlement = await self._settle(
                order=order,
                product=product,
                buyer=buyer,
                quantity=quantity,
                balance_before_purchase=balance_before_purchase,
                total_purchase_amount=total_purchase_amount,
            )
            return PlacementResult(order=order, settlement=settlement)

        result = await self.locks.run_exclusive(
            buyer_lock_key(buyer_id),
            max_attempts=self.lock_max_attempts,
            action=critical_section,
        )

        logger.info(
            "Order placed",
            order_id=str(result.order.id),
            product_id=product_id,
            buyer_id=buyer_id,
            quantity=quantity,
            total_purchase_amount=total_purchase_amount,
            settlement=result.settlement.outcome.value,
        )
        return result

    async def _settle(self, order, product, buyer, quantity, balance_before_purchase, total_purchase_amount):
        product_id = str(product.id)
        buyer_id = str(buyer.id)

        async def decrement_stock():
            return self.products.update_stock_post_order(product_id, quantity)

        async def decrement_balance():
            return self.users.update_balance_post_order(buyer_id, total_purchase_amount)

        outcomes = await asyncio.gather(decrement_stock(), decrement_balance(), return_exceptions=True)

        failures = []
        for step, outcome in zip((SettlementStep.STOCK, SettlementStep.BALANCE), outcomes, strict=True):
            if isinstance(outcome, Exception):
                failures.append(SettlementFailure(step=step, error_type=type(outcome).__name__, reason=str(outcome)))
                logger.error(
                    "Post-order settlement failed",
                    step=step.value,
                    product_id=product_id,
                    quantity=quantity,
                    buyer=buyer.to_dict(),
                    product=product.to_dict(),
                    balance_before_purchase=balance_before_purchase,
                    total_purchase_amount=total_purchase_amount,
                    order=order.to_dict(),
                    error=repr(outcome),
                )

        if failures:
            return SettlementStatus(outcome=SettlementOutcome.PARTIAL_FAILURE, failures=tuple(failures))
        return SettlementStatus()
