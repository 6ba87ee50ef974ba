"""Shared BDD fixtures and step definitions for order placement."""

import pytest
from marketplace.product.product import Product
from marketplace.user.account import UpdateUser
from marketplace.user.user import User, UserRole
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def world():
    """Named users and products, plus the outcome of the last placement."""
    return {"users": {}, "products": {}, "result": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a seller "{name}"'))
def _(world, make_user, name):
    world["users"][name] = make_user(username=name, role=UserRole.SELLER.value)


@given(parsers.cfparse('a buyer "{name}" with a balance of {balance:d}'))
def _(world, make_user, name, balance):
    world["users"][name] = make_user(username=name, balance=balance)


@given(parsers.cfparse('"{name}" becomes a seller'))
def _(world, name):
    user = world["users"][name]
    current_domain.process(UpdateUser(user_id=str(user.id), role=UserRole.SELLER.value), asynchronous=False)


@given(parsers.cfparse('a product "{product}" sold by "{seller}" costing {cost:d} with {stock:d} in stock'))
def _(world, make_product, product, seller, cost, stock):
    world["products"][product] = make_product(world["users"][seller], cost=cost, stock=stock, name=product)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has a balance of {balance:d}'))
def _(world, name, balance):
    user = current_domain.repository_for(User).get(world["users"][name].id)
    assert user.balance == balance


@then(parsers.cfparse('"{product}" has {stock:d} in stock'))
def _(world, product, stock):
    assert current_domain.repository_for(Product).get(world["products"][product].id).stock == stock
