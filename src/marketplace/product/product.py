"""Product aggregate: a seller's listing with unit cost and stock."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from marketplace.domain import marketplace
from marketplace.errors import InsufficientProductStock


@marketplace.aggregate
class Product:
    """A product listed by a seller.

    Cost is in the smallest currency unit. Stock is only taken out through
    order settlement and can never go negative.
    """

    name = String(required=True, max_length=255)
    cost = Integer(required=True, min_value=0)
    stock = Integer(default=0, min_value=0)
    seller_id = Identifier(required=True)
    created_at = DateTime(default=lambda: datetime.now(UTC))
    updated_at = DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, seller_id, name, cost, stock=0):
        from marketplace.product.events import ProductListed

        now = datetime.now(UTC)
        product = cls(
            seller_id=seller_id,
            name=name,
            cost=cost,
            stock=stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=product.id,
                seller_id=seller_id,
                name=name,
                cost=cost,
                stock=stock,
                listed_at=now,
            )
        )
        return product

    def is_sold_by(self, user_id):
        return str(self.seller_id) == str(user_id)

    def change_cost(self, new_cost):
        from marketplace.product.events import ProductCostChanged

        if new_cost is None or new_cost < 0:
            raise ValidationError({"cost": ["Cost cannot be negative"]})

        previous = self.cost
        self.cost = new_cost
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductCostChanged(product_id=self.id, previous_cost=previous, new_cost=new_cost))

    def restock(self, quantity):
        from marketplace.product.events import ProductRestocked

        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Restock quantity must be positive"]})

        self.stock = self.stock + quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductRestocked(product_id=self.id, quantity=quantity, new_stock=self.stock))

    def decrement_stock(self, quantity):
        from marketplace.product.events import StockDecremented

        if quantity > self.stock:
            raise InsufficientProductStock(f"Only {self.stock} left, cannot take {quantity}")

        previous = self.stock
        self.stock = previous - quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockDecremented(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
            )
        )
