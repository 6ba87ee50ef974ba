"""Product listing: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import NotAuthorizedToPerformAction, UserNotFound
from marketplace.product.product import Product
from marketplace.user.user import User, UserRole


@marketplace.command(part_of="Product")
class ListProduct:
    """Put a new product up for sale."""

    seller_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    cost = Integer(required=True, min_value=0)
    stock = Integer(default=0, min_value=0)


@marketplace.command(part_of="Product")
class ChangeProductCost:
    product_id = Identifier(required=True)
    cost = Integer(required=True, min_value=0)


@marketplace.command(part_of="Product")
class RestockProduct:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@marketplace.command_handler(part_of=Product)
class ProductListingHandler:
    @handle(ListProduct)
    def list_product(self, command):
        try:
            seller = current_domain.repository_for(User).get(command.seller_id)
        except ObjectNotFoundError:
            raise UserNotFound(f"Seller {command.seller_id} not found") from None

        if not seller.is_active:
            raise UserNotFound(f"Seller {command.seller_id} not found")
        if seller.role != UserRole.SELLER.value:
            raise NotAuthorizedToPerformAction("Only sellers can list products")

        product = Product.create(
            seller_id=command.seller_id,
            name=command.name,
            cost=command.cost,
            stock=command.stock or 0,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(ChangeProductCost)
    def change_cost(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_cost(command.cost)
        repo.add(product)

    @handle(RestockProduct)
    def restock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restock(command.quantity)
        repo.add(product)
        return product.stock
