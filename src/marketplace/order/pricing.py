"""Pricing and eligibility rules for order placement.

Pure functions over product and user snapshots. Nothing here reads or
writes storage.
"""

from marketplace.order.order import Basket


def is_product_available(product, quantity: int) -> bool:
    return product.stock >= quantity


def get_balance(user) -> int:
    """Funds the user can spend right now."""
    return user.balance


def get_total_cost(product, quantity: int) -> int:
    return product.cost * quantity


def get_order_basket(product_id: str, quantity: int, total_cost: int, unit_cost: int) -> Basket:
    return Basket(
        product_id=product_id,
        quantity=quantity,
        unit_cost=unit_cost,
        total_cost=total_cost,
    )
