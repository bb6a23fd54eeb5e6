"""
Cart engine - stock-aware mutations with persist-then-commit.

Every mutation works on a copy of the committed cart, validates it against
the stock provider, writes the new snapshot to the persistence store and
only then swaps it in as the in-memory cart. A failure at any step leaves
both the stored snapshot and the in-memory cart as they were.
"""
import asyncio
from decimal import Decimal
from typing import Awaitable, Callable, Optional

from rocketcart import config
from rocketcart.errors import ExternalServiceError
from rocketcart.logging import get_logger, sanitize_id_for_logging
from rocketcart.services.money import to_float
from rocketcart.services.notifications import LoggingNotificationSink
from .models import CartEntry, CartOperation, CartOutcome, CartResult
from .notifier import CartNotifier
from .ports import NotificationSink, PersistenceStore, ProductCatalog, StockProvider
from .storage import encode_cart, load_snapshot

logger = get_logger(__name__)


class CartEngine:
    """
    Owns the cart and serialises mutations.

    Mutations run one at a time under an asyncio.Lock, so a second
    add_product for the same product always sees the first one's commit.
    Reads (`cart`, `get_cart_summary`) never wait on the lock; they see
    the last committed tuple.
    """

    def __init__(
        self,
        stock_provider: StockProvider,
        catalog: ProductCatalog,
        store: PersistenceStore,
        sink: Optional[NotificationSink] = None,
        *,
        storage_key: str = config.CART_STORAGE_KEY,
        language: str = config.CART_LANGUAGE,
        notifier: Optional[CartNotifier] = None,
    ):
        self.stock_provider = stock_provider
        self.catalog = catalog
        self.store = store
        self.storage_key = storage_key
        self.notifier = notifier or CartNotifier(sink or LoggingNotificationSink(), language)

        self._cart: tuple[CartEntry, ...] = load_snapshot(store, storage_key)
        self._version = 0
        self._lock = asyncio.Lock()

    @property
    def cart(self) -> tuple[CartEntry, ...]:
        """Committed cart, in the order products were first added."""
        return self._cart

    @property
    def version(self) -> int:
        """Number of commits since the engine was created."""
        return self._version

    def get_entry(self, product_id: int) -> Optional[CartEntry]:
        index = self._find(self._cart, product_id)
        return None if index is None else self._cart[index]

    # ==================== MUTATIONS ====================

    async def add_product(self, product_id: int) -> CartResult:
        """Add one unit of product_id, or append it with amount 1."""
        return await self._execute(CartOperation.ADD, product_id, self._add)

    async def remove_product(self, product_id: int) -> CartResult:
        """Remove product_id from the cart."""
        return await self._execute(CartOperation.REMOVE, product_id, self._remove)

    async def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        """
        Set the amount of a product already in the cart.

        A non-positive amount is ignored (NO_OP), it does not remove the
        product.
        """
        if amount <= 0:
            result = CartResult(CartOperation.UPDATE, CartOutcome.NO_OP, product_id)
            self.notifier.notify(result)
            return result

        async def _update(pid: int) -> CartResult:
            return await self._update(pid, amount)

        return await self._execute(CartOperation.UPDATE, product_id, _update)

    async def _execute(
        self,
        operation: CartOperation,
        product_id: int,
        step: Callable[[int], Awaitable[CartResult]],
    ) -> CartResult:
        safe_id = sanitize_id_for_logging(product_id)
        async with self._lock:
            try:
                result = await step(product_id)
            except ExternalServiceError as e:
                logger.warning(f"Cart {operation.value} for product {safe_id} failed: {e}")
                result = CartResult(operation, CartOutcome.EXTERNAL_FAILURE, product_id, str(e))
            except Exception as e:
                logger.error(
                    f"Cart {operation.value} for product {safe_id} failed unexpectedly: {e}",
                    exc_info=True,
                )
                result = CartResult(operation, CartOutcome.EXTERNAL_FAILURE, product_id, str(e))

        if result.outcome == CartOutcome.COMMITTED:
            logger.info(f"Cart {operation.value} committed for product {safe_id} (v{self._version})")
        self.notifier.notify(result)
        return result

    async def _add(self, product_id: int) -> CartResult:
        working = list(self._cart)
        index = self._find(working, product_id)

        stock = await self.stock_provider.fetch_stock(product_id)
        current_amount = working[index].amount if index is not None else 0
        new_amount = current_amount + 1

        if new_amount > stock.amount:
            return CartResult(
                CartOperation.ADD,
                CartOutcome.STOCK_EXCEEDED,
                product_id,
                f"requested {new_amount}, {stock.amount} in stock",
            )

        if index is not None:
            working[index] = working[index].with_amount(new_amount)
        else:
            product = await self.catalog.fetch_product(product_id)
            if product.id != product_id:
                raise ExternalServiceError(
                    f"Catalog returned product {product.id} for {product_id}"
                )
            working.append(CartEntry.from_product(product, new_amount))

        self._commit(working)
        return CartResult(CartOperation.ADD, CartOutcome.COMMITTED, product_id)

    async def _remove(self, product_id: int) -> CartResult:
        working = list(self._cart)
        index = self._find(working, product_id)
        if index is None:
            return CartResult(
                CartOperation.REMOVE, CartOutcome.NOT_FOUND, product_id, "product not in cart"
            )

        del working[index]
        self._commit(working)
        return CartResult(CartOperation.REMOVE, CartOutcome.COMMITTED, product_id)

    async def _update(self, product_id: int, amount: int) -> CartResult:
        stock = await self.stock_provider.fetch_stock(product_id)

        working = list(self._cart)
        index = self._find(working, product_id)
        if index is None:
            return CartResult(
                CartOperation.UPDATE, CartOutcome.NOT_FOUND, product_id, "product not in cart"
            )

        if amount > stock.amount:
            return CartResult(
                CartOperation.UPDATE,
                CartOutcome.STOCK_EXCEEDED,
                product_id,
                f"requested {amount}, {stock.amount} in stock",
            )

        working[index] = working[index].with_amount(amount)
        self._commit(working)
        return CartResult(CartOperation.UPDATE, CartOutcome.COMMITTED, product_id)

    def _commit(self, working: list[CartEntry]) -> None:
        """Persist working, then make it the in-memory cart."""
        snapshot = tuple(working)
        self.store.save(self.storage_key, encode_cart(snapshot))
        self._cart = snapshot
        self._version += 1

    @staticmethod
    def _find(entries, product_id: int) -> Optional[int]:
        return next((i for i, entry in enumerate(entries) if entry.id == product_id), None)

    # ==================== READ HELPERS ====================

    def get_cart_summary(self) -> dict:
        """Cart contents with per-line subtotals and the cart total."""
        cart = self._cart
        total = sum((entry.subtotal for entry in cart), Decimal("0"))
        return {
            "is_empty": not cart,
            "cart_size": len(cart),
            "total_items": sum(entry.amount for entry in cart),
            "items": [
                {
                    "product_id": entry.id,
                    "name": entry.name,
                    "image_url": entry.image_url,
                    "amount": entry.amount,
                    "price": to_float(entry.price),
                    "subtotal": to_float(entry.subtotal),
                }
                for entry in cart
            ],
            "total": to_float(total),
        }

    async def close(self) -> None:
        """Close collaborators that hold network resources."""
        closed = set()
        for collaborator in (self.stock_provider, self.catalog):
            close = getattr(collaborator, "close", None)
            if close is None or id(collaborator) in closed:
                continue
            closed.add(id(collaborator))
            await close()


def create_cart_engine(sink: Optional[NotificationSink] = None) -> CartEngine:
    """Build an engine wired to the shop API and Upstash Redis from config."""
    from rocketcart.services.api import ShopApiClient
    from .storage import RedisCartStore, get_redis_sync

    api = ShopApiClient()
    store = RedisCartStore(get_redis_sync())
    return CartEngine(stock_provider=api, catalog=api, store=store, sink=sink)
