"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A purchase was recorded. The order is the durable source of truth;
    stock and balance follow through settlement."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_cost = Integer(required=True)
    total_cost = Integer(required=True)
    placed_at = DateTime(required=True)
