"""Order aggregate and its Basket value object.

An Order is a historical record of a completed purchase. It is created once
through the order repository and never modified afterwards.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, ValueObject

from marketplace.domain import marketplace


@marketplace.value_object(part_of="Order")
class Basket:
    """What was bought and at what price.

    The unit cost is captured at order time; later catalogue price changes
    do not affect it.
    """

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_cost = Integer(required=True, min_value=0)
    total_cost = Integer(required=True, min_value=0)

    @invariant.post
    def total_matches_unit_cost(self):
        if self.unit_cost * self.quantity != self.total_cost:
            raise ValidationError(
                {"total_cost": [f"Total {self.total_cost} does not equal {self.unit_cost} x {self.quantity}"]}
            )


@marketplace.aggregate
class Order:
    buyer_id = Identifier(required=True)
    basket = ValueObject(Basket, required=True)
    created_at = DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, buyer_id, basket):
        from marketplace.order.events import OrderPlaced

        now = datetime.now(UTC)
        order = cls(buyer_id=buyer_id, basket=basket, created_at=now)
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                buyer_id=buyer_id,
                product_id=basket.product_id,
                quantity=basket.quantity,
                unit_cost=basket.unit_cost,
                total_cost=basket.total_cost,
                placed_at=now,
            )
        )
        return order
