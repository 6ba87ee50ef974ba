"""Order repository: append-only creation and buyer history."""

from protean.domain import Domain

from marketplace.domain import marketplace
from marketplace.order.order import Basket, Order


@marketplace.repository(part_of=Order)
class OrderRepository:
    def create_order(self, buyer_id: str, basket: Basket) -> Order:
        """Persist a new order and return it with its assigned id and timestamp."""
        order = Order.create(buyer_id=buyer_id, basket=basket)
        self.add(order)
        return order

    def find_by_buyer(self, buyer_id: str) -> list[Order]:
        return self._dao.query.filter(buyer_id=buyer_id).order_by("created_at").all().items


class OrderStore:
    """Gives order placement access to the repository from any task."""

    def __init__(self, domain: Domain) -> None:
        self._domain = domain

    def create_order(self, buyer_id: str, basket: Basket) -> Order:
        with self._domain.domain_context():
            return self._domain.repository_for(Order).create_order(buyer_id, basket)

    def get_order(self, order_id: str) -> Order:
        with self._domain.domain_context():
            return self._domain.repository_for(Order).get(order_id)

    def find_by_buyer(self, buyer_id: str) -> list[Order]:
        with self._domain.domain_context():
            return self._domain.repository_for(Order).find_by_buyer(buyer_id)
