"""Purchasing load test scenarios.

PurchaseJourney walks one shop end to end. SameBuyerRaceUser fires
simultaneous orders for one buyer to exercise the per-buyer critical
section: the balance must never go negative however the requests
interleave.
"""

import gevent
from locust import HttpUser, SequentialTaskSet, between, constant_pacing, task

from loadtests.data_generators import buyer_data, deposit_data, order_data, product_data, seller_data
from loadtests.helpers.response import extract_error_detail, is_expected_rejection
from loadtests.helpers.state import ShopState


def _open_shop(client, state: ShopState, cost=None, stock=None, deposit=None) -> bool:
    """Register a seller and a funded buyer, and list one product."""
    resp = client.post("/users", json=seller_data(), name="POST /users")
    if resp.status_code != 201:
        return False
    state.seller_id = resp.json()["user_id"]

    resp = client.post("/products", json=product_data(state.seller_id, cost=cost, stock=stock), name="POST /products")
    if resp.status_code != 201:
        return False
    state.product_id = resp.json()["product_id"]

    resp = client.post("/users", json=buyer_data(), name="POST /users")
    if resp.status_code != 201:
        return False
    state.buyer_id = resp.json()["user_id"]

    payload = deposit_data(state.buyer_id, amount=deposit)
    resp = client.post("/deposit", json=payload, name="POST /deposit")
    if resp.status_code != 200:
        return False
    state.deposited = payload["amount"]
    return True


class PurchaseJourney(SequentialTaskSet):
    """Open shop -> Order -> Check order -> Check balance -> Reset."""

    def on_start(self):
        self.state = ShopState()

    @task
    def open_shop(self):
        if not _open_shop(self.client, self.state, deposit=100):
            self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.product_id, self.state.buyer_id),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order"]["order_id"])
            elif is_expected_rejection(resp):
                resp.success()
            else:
                resp.failure(f"Order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def check_order(self):
        if not self.state.order_ids:
            return
        self.client.get(f"/orders/{self.state.order_ids[-1]}", name="GET /orders/{id}")

    @task
    def check_balance(self):
        with self.client.get(
            f"/users/{self.state.buyer_id}",
            catch_response=True,
            name="GET /users/{id}",
        ) as resp:
            if resp.status_code == 200 and resp.json()["balance"] < 0:
                resp.failure("Balance went negative")

    @task
    def reset_deposit(self):
        self.client.post("/reset", json={"user_id": self.state.buyer_id}, name="POST /reset")
        self.interrupt()


class PurchasingUser(HttpUser):
    """Steady end-to-end purchasing."""

    wait_time = between(0.5, 2)
    tasks = [PurchaseJourney]


class SameBuyerRaceUser(HttpUser):
    """Simultaneous orders for one buyer, only some of which can be paid for.

    The buyer holds enough for three orders; each round fires five at once.
    Unaffordable orders come back as 402, or as 201 with a partial
    settlement on the balance step. The balance is checked after every round.
    """

    wait_time = constant_pacing(1)
    burst = 5

    def on_start(self):
        self.state = ShopState()
        if not _open_shop(self.client, self.state, cost=10, stock=10_000, deposit=30):
            raise RuntimeError("Could not set up the race fixture")

    def _order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.product_id, self.state.buyer_id, quantity=1),
            catch_response=True,
            name="[RACE] POST /orders",
        ) as resp:
            if resp.status_code == 201 or is_expected_rejection(resp):
                resp.success()
            else:
                resp.failure(f"Order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def race(self):
        gevent.joinall([gevent.spawn(self._order) for _ in range(self.burst)])

        with self.client.get(
            f"/users/{self.state.buyer_id}",
            catch_response=True,
            name="[RACE] GET /users/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(extract_error_detail(resp))
            elif resp.json()["balance"] < 0:
                resp.failure(f"Balance went negative: {resp.json()['balance']}")

        self.client.post("/deposit", json=deposit_data(self.state.buyer_id, amount=30), name="[RACE] POST /deposit")
