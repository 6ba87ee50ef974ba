"""Tests for the Product aggregate: listing, cost changes, restocking, stock decrement."""

import pytest
from marketplace.errors import InsufficientProductStock
from marketplace.product.events import ProductCostChanged, ProductListed, StockDecremented
from marketplace.product.product import Product
from protean.exceptions import ValidationError


def _make_product(cost=10, stock=5):
    product = Product.create(seller_id="seller-001", name="Widget", cost=cost, stock=stock)
    product._events.clear()
    return product


class TestCreate:
    def test_create_sets_fields(self):
        product = Product.create(seller_id="seller-001", name="Widget", cost=10, stock=5)
        assert product.cost == 10
        assert product.stock == 5
        assert str(product.seller_id) == "seller-001"

    def test_create_raises_listed_event(self):
        product = Product.create(seller_id="seller-001", name="Widget", cost=10, stock=5)
        event = product._events[0]
        assert isinstance(event, ProductListed)
        assert event.product_id == str(product.id)
        assert event.cost == 10

    def test_cost_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            Product.create(seller_id="seller-001", name="Widget", cost=-1)

    def test_stock_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            Product.create(seller_id="seller-001", name="Widget", cost=1, stock=-3)


class TestIsSoldBy:
    def test_matches_seller(self):
        assert _make_product().is_sold_by("seller-001")

    def test_other_user_is_not_seller(self):
        assert not _make_product().is_sold_by("buyer-001")


class TestDecrementStock:
    def test_decrement_reduces_stock(self):
        product = _make_product(stock=5)
        product.decrement_stock(2)
        assert product.stock == 3

    def test_decrement_to_zero(self):
        product = _make_product(stock=5)
        product.decrement_stock(5)
        assert product.stock == 0

    def test_decrement_raises_event(self):
        product = _make_product(stock=5)
        product.decrement_stock(2)
        event = product._events[0]
        assert isinstance(event, StockDecremented)
        assert event.previous_stock == 5
        assert event.new_stock == 3

    def test_decrement_beyond_stock_is_refused(self):
        product = _make_product(stock=1)
        with pytest.raises(InsufficientProductStock):
            product.decrement_stock(2)
        assert product.stock == 1


class TestCostAndRestock:
    def test_change_cost(self):
        product = _make_product(cost=10)
        product.change_cost(12)
        assert product.cost == 12
        event = product._events[0]
        assert isinstance(event, ProductCostChanged)
        assert event.previous_cost == 10

    def test_negative_cost_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.change_cost(-1)

    def test_restock_adds_units(self):
        product = _make_product(stock=5)
        product.restock(3)
        assert product.stock == 8

    def test_restock_must_be_positive(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.restock(0)
