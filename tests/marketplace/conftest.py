"""Shared fixtures for the marketplace tests."""

import pytest
from marketplace.domain import marketplace
from marketplace.locking import InMemoryLockManager, MutualExclusionCoordinator
from marketplace.order.placement import OrderPlacementService, PlacementDependencies
from marketplace.order.repository import OrderStore
from marketplace.product.product import Product
from marketplace.product.service import ProductService
from marketplace.user.service import UserService
from marketplace.user.user import User, UserRole
from protean import current_domain


@pytest.fixture()
def make_user():
    def _make_user(username="buyer", role=UserRole.BUYER.value, balance=0):
        user = User.register(username=username, role=role)
        if balance:
            user.deposit(balance)
        current_domain.repository_for(User).add(user)
        return user

    return _make_user


@pytest.fixture()
def make_product():
    def _make_product(seller, cost=10, stock=5, name="Widget"):
        product = Product.create(seller_id=str(seller.id), name=name, cost=cost, stock=stock)
        current_domain.repository_for(Product).add(product)
        return product

    return _make_product


@pytest.fixture()
def seller(make_user):
    return make_user(username="seller", role=UserRole.SELLER.value)


@pytest.fixture()
def buyer(make_user):
    return make_user(username="buyer", balance=25)


@pytest.fixture()
def product(seller, make_product):
    return make_product(seller, cost=10, stock=5)


@pytest.fixture()
def lock_manager():
    return InMemoryLockManager()


@pytest.fixture()
def coordinator(lock_manager):
    return MutualExclusionCoordinator(lock_manager, acquire_timeout=0.5, backoff_base=0.001, backoff_max=0.01)


@pytest.fixture()
def dependencies(coordinator):
    return PlacementDependencies(
        users=UserService(marketplace),
        products=ProductService(marketplace),
        orders=OrderStore(marketplace),
        locks=coordinator,
    )


@pytest.fixture()
def placement(dependencies):
    return OrderPlacementService(dependencies)
