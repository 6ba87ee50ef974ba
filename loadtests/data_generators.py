"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names and limits of the API's Pydantic request
schemas (usernames up to 100 characters, non-negative costs, positive
deposits and quantities).
"""

import random
import uuid

from faker import Faker

fake = Faker()


def username() -> str:
    """Unique usernames like 'jsmith-a1b2c3'."""
    return f"{fake.user_name()[:40]}-{uuid.uuid4().hex[:6]}"


def seller_data() -> dict:
    return {"username": username(), "role": "Seller"}


def buyer_data() -> dict:
    return {"username": username(), "role": "Buyer"}


def product_data(seller_id: str, cost: int | None = None, stock: int | None = None) -> dict:
    return {
        "seller_id": seller_id,
        "name": fake.catch_phrase()[:255],
        "cost": cost if cost is not None else random.randint(1, 50),
        "stock": stock if stock is not None else random.randint(50, 500),
    }


def deposit_data(user_id: str, amount: int | None = None) -> dict:
    return {"user_id": user_id, "amount": amount or random.choice([5, 10, 20, 50, 100])}


def order_data(product_id: str, buyer_id: str, quantity: int | None = None) -> dict:
    return {
        "product_id": product_id,
        "buyer_id": buyer_id,
        "quantity": quantity or random.randint(1, 3),
    }
