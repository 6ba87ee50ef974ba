"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductListed:
    """A seller put a new product up for sale."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    name = String(required=True)
    cost = Integer(required=True)
    stock = Integer(required=True)
    listed_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductCostChanged:
    """The unit cost of a product changed. Existing orders keep their locked price."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    previous_cost = Integer(required=True)
    new_cost = Integer(required=True)


@marketplace.event(part_of="Product")
class ProductRestocked:
    """Units were added to a product's stock."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_stock = Integer(required=True)


@marketplace.event(part_of="Product")
class StockDecremented:
    """Units were taken out of stock to settle an order."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
