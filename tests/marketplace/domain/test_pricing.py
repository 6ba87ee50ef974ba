"""Tests for the pure pricing and eligibility rules."""

from marketplace.order import pricing
from marketplace.order.order import Basket
from marketplace.product.product import Product
from marketplace.user.user import User


def _product(cost=10, stock=5):
    return Product(seller_id="seller-001", name="Widget", cost=cost, stock=stock)


class TestIsProductAvailable:
    def test_available_when_stock_covers_quantity(self):
        assert pricing.is_product_available(_product(stock=5), 5)

    def test_unavailable_when_quantity_exceeds_stock(self):
        assert not pricing.is_product_available(_product(stock=5), 6)

    def test_out_of_stock(self):
        assert not pricing.is_product_available(_product(stock=0), 1)


class TestBalanceAndCost:
    def test_get_balance_returns_user_balance(self):
        assert pricing.get_balance(User(username="alice", balance=25)) == 25

    def test_total_cost_is_cost_times_quantity(self):
        assert pricing.get_total_cost(_product(cost=10), 2) == 20

    def test_free_product(self):
        assert pricing.get_total_cost(_product(cost=0), 3) == 0


class TestOrderBasket:
    def test_builds_basket(self):
        basket = pricing.get_order_basket(product_id="prod-001", quantity=2, total_cost=20, unit_cost=10)
        assert isinstance(basket, Basket)
        assert basket.product_id == "prod-001"
        assert basket.quantity == 2
        assert basket.total_cost == 20

    def test_deterministic(self):
        first = pricing.get_order_basket("prod-001", 2, 20, 10)
        second = pricing.get_order_basket("prod-001", 2, 20, 10)
        assert first == second
