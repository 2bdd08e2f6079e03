# krishi_jyothi/services/cart_manager.py
import json
import logging
from contextlib import contextmanager
from typing import Iterator

from pydantic import ValidationError

from krishi_jyothi.core.notifications import NotificationCollector
from krishi_jyothi.core.storage import KeyValueStore
from krishi_jyothi.schemas.cart import CartLineItem

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "krishijyothi_cart"


class CartManager:
    """
    Shopping cart for one browser session.

    Responsibilities:
      - keep at most one line per product id, quantity always >= 1
      - derive item_count and subtotal on every read
      - mirror the whole line array to the key-value store after each call
      - push a notification for add / remove / clear (not for a plain
        quantity change)

    Every mutation re-reads the stored lines under the store's lock before
    changing them, so overlapping requests on one session never drop lines.
    Mutations are synchronous; nothing here awaits.
    """

    def __init__(
        self,
        store: KeyValueStore,
        notifier: NotificationCollector | None = None,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self.store = store
        self.notifier = notifier or NotificationCollector()
        self.storage_key = storage_key
        self._items: list[CartLineItem] = self._load()

    # ---- persistence ----

    def _load(self) -> list[CartLineItem]:
        """
        Read the stored lines.

        Unparseable data yields an empty cart. Individual invalid rows are
        skipped, and rows repeating a product id are merged into the first.
        """
        raw = self.store.get(self.storage_key)
        if not raw:
            return []
        try:
            rows = json.loads(raw)
        except json.JSONDecodeError as e:
            # Corrupted data: start with an empty cart
            logger.warning("Failed to parse saved cart: %s", e)
            return []
        if not isinstance(rows, list):
            logger.warning("Failed to parse saved cart: expected a list, got %s", type(rows).__name__)
            return []

        items: list[CartLineItem] = []
        by_id: dict[int, CartLineItem] = {}
        for row in rows:
            try:
                item = CartLineItem.model_validate(row)
            except ValidationError as e:
                logger.warning("Skipping invalid saved cart line: %s", e)
                continue
            existing = by_id.get(item.id)
            if existing is not None:
                existing.quantity += item.quantity
                continue
            by_id[item.id] = item
            items.append(item)
        return items

    def _save(self) -> None:
        payload = [item.model_dump(mode="json") for item in self._items]
        self.store.set(self.storage_key, json.dumps(payload))

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the stored cart steady, freshly loaded, across several calls."""
        with self.store.locked(self.storage_key):
            self._items = self._load()
            yield

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        with self.locked():
            yield
            self._save()

    def _find(self, product_id: int) -> CartLineItem | None:
        for item in self._items:
            if item.id == product_id:
                return item
        return None

    # ---- derived reads ----

    @property
    def items(self) -> list[CartLineItem]:
        return [item.model_copy() for item in self._items]

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def subtotal(self) -> float:
        return sum(item.price * item.quantity for item in self._items)

    # ---- operations ----

    def add_item(self, item: CartLineItem, quantity: int = 1) -> None:
        """
        Add `quantity` units of `item`.

        If a line with the same id exists its quantity is incremented,
        otherwise a new line is appended. `quantity` is expected to be
        positive; callers validate it.
        """
        with self._mutation():
            existing = self._find(item.id)
            if existing is not None:
                existing.quantity += quantity
                self.notifier.push(
                    "Cart updated",
                    f"{item.name} quantity updated in your cart.",
                )
            else:
                self._items.append(item.model_copy(update={"quantity": quantity}))
                self.notifier.push(
                    "Added to cart",
                    f"{item.name} has been added to your cart.",
                )

    def remove_item(self, product_id: int) -> None:
        """Drop the line for `product_id`; absent ids are a no-op."""
        with self._mutation():
            existing = self._find(product_id)
            if existing is not None:
                self._items = [i for i in self._items if i.id != product_id]
                self.notifier.push(
                    "Item removed",
                    f"{existing.name} has been removed from your cart.",
                )

    def update_quantity(self, product_id: int, quantity: int) -> None:
        """Set a line's quantity; quantity <= 0 removes the line instead."""
        if quantity <= 0:
            self.remove_item(product_id)
            return

        with self._mutation():
            existing = self._find(product_id)
            if existing is not None:
                existing.quantity = quantity

    def clear_cart(self) -> None:
        with self._mutation():
            self._items = []
            self.notifier.push(
                "Cart cleared",
                "All items have been removed from your cart.",
            )
