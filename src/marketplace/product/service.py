"""Product Service: catalogue reads and the post-order stock decrement."""

import threading

import structlog
from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError

from marketplace.errors import StockUpdateConflict
from marketplace.product.product import Product

logger = structlog.get_logger(__name__)


class ProductService:
    """Reads product snapshots and takes sold units out of stock.

    The stock decrement is a conditional write: it only lands if the stock
    still holds the value the decrement was computed from, and it is retried
    against a fresh read otherwise. Two buyers racing on the same product can
    therefore never drive stock below zero, whatever locks they hold.

    The compare and the write are made one step by an in-process guard, so
    the guarantee holds for writers inside one process only. Instances that
    share a store need the condition enforced by the provider itself (a
    conditional UPDATE on the stock column); the Redis lock backend does
    not cover this, as it serializes buyers, not products.
    """

    def __init__(self, domain: Domain, max_attempts: int = 5) -> None:
        self._domain = domain
        self._max_attempts = max_attempts
        # Makes compare-and-set a single step against the in-process store
        self._write_guard = threading.Lock()

    def get_product(self, product_id: str) -> Product | None:
        with self._domain.domain_context():
            try:
                return self._domain.repository_for(Product).get(product_id)
            except ObjectNotFoundError:
                return None

    def update_stock_post_order(self, product_id: str, quantity: int) -> Product:
        """Decrement stock by ``quantity``.

        Raises InsufficientProductStock when the current stock cannot cover
        the quantity, and StockUpdateConflict when every attempt lost a race.
        """
        with self._domain.domain_context():
            repo = self._domain.repository_for(Product)

            for attempt in range(1, self._max_attempts + 1):
                product = repo.get(product_id)
                expected_stock = product.stock
                product.decrement_stock(quantity)

                if self._compare_and_set(repo, product, expected_stock):
                    logger.info(
                        "Stock decremented",
                        product_id=product_id,
                        quantity=quantity,
                        new_stock=product.stock,
                        attempt=attempt,
                    )
                    return product

                logger.debug(
                    "Stock changed concurrently, retrying decrement",
                    product_id=product_id,
                    expected_stock=expected_stock,
                    attempt=attempt,
                )

        raise StockUpdateConflict(f"Could not decrement stock of {product_id} after {self._max_attempts} attempts")

    def _compare_and_set(self, repo, product: Product, expected_stock: int) -> bool:
        with self._write_guard:
            current = repo.get(product.id)
            if current.stock != expected_stock:
                return False
            repo.add(product)
            return True
