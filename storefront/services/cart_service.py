# storefront/services/cart_service.py
import json
import logging
import uuid
from typing import Any, Mapping

from pydantic import ValidationError

from storefront.core.local_storage import KeyValueStorage
from storefront.schemas.cart import CartItem, CartSummary, ProductSnapshot

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "cart"


class CartStore:
    """
    Client-local shopping cart.

    Lifecycle:
      - created by loading `key` from storage, empty if absent or corrupt
      - every mutation re-writes the whole cart to storage; only ids,
        quantities and snapshot prices are stored
      - clear_cart() empties it; the key stays in storage

    Invariants:
      - at most one item per product_id, insertion order preserved
      - quantity is always >= 1 (setting it to <= 0 removes the item)
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_CART_KEY):
        self.storage = storage
        self.key = key
        self._items: list[CartItem] = self._load()

    # ---- persistence ----

    def _load(self) -> list[CartItem]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error("Error loading cart from storage: %s", e)
            return []
        if not isinstance(data, list):
            logger.error("Error loading cart from storage: expected a list")
            return []
        return self._parse_items(data)

    @staticmethod
    def _parse_items(data: list[Any]) -> list[CartItem]:
        """
        Rebuild items one by one: invalid entries are dropped and
        duplicate product ids are merged into the first occurrence.

        Stored entries carry the snapshot price only; entries with a full
        `product` object are accepted too.
        """
        items: list[CartItem] = []
        by_product: dict[uuid.UUID, CartItem] = {}
        for entry in data:
            if isinstance(entry, dict) and "product" not in entry and "price" in entry:
                entry = {
                    **entry,
                    "product": {"id": entry.get("product_id"), "price": entry["price"]},
                }
            try:
                item = CartItem.model_validate(entry)
            except ValidationError as e:
                logger.warning("Dropping invalid cart entry %r: %s", entry, e)
                continue
            existing = by_product.get(item.product_id)
            if existing is not None:
                existing.quantity += item.quantity
                continue
            by_product[item.product_id] = item
            items.append(item)
        return items

    @staticmethod
    def _stored(item: CartItem) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "id": item.id,
            "product_id": str(item.product_id),
            "quantity": item.quantity,
        }
        if item.product is not None:
            entry["price"] = item.product.price
        return entry

    def _save(self, items: list[CartItem]) -> None:
        """
        Write `items` to storage, then make them the current cart.

        If the storage refuses the write the current cart is unchanged.
        """
        payload = [self._stored(item) for item in items]
        self.storage.set_item(self.key, json.dumps(payload, separators=(",", ":")))
        self._items = items

    def _working_copy(self) -> list[CartItem]:
        return [item.model_copy(deep=True) for item in self._items]

    # ---- queries ----

    @property
    def items(self) -> list[CartItem]:
        return [item.model_copy(deep=True) for item in self._items]

    @staticmethod
    def _find(items: list[CartItem], product_id: uuid.UUID) -> CartItem | None:
        for item in items:
            if item.product_id == product_id:
                return item
        return None

    def get_total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_total_price(self) -> float:
        """Sum of quantity x snapshot price; items without a snapshot count as 0."""
        total = 0.0
        for item in self._items:
            price = item.product.price if item.product is not None else 0.0
            total += price * item.quantity
        return total

    def summary(self) -> CartSummary:
        return CartSummary(
            items=self.items,
            total_items=self.get_total_items(),
            total_price=self.get_total_price(),
        )

    def attach_product_details(self, products: Mapping[uuid.UUID, Any]) -> None:
        """
        Fill in title and image of each snapshot from current catalog rows.

        Only the price is stored with the cart, so display fields come
        from `products` (keyed by product id). Prices are left as stored
        and nothing is persisted.
        """
        for item in self._items:
            source = products.get(item.product_id)
            if source is None or item.product is None:
                continue
            item.product.title = source.title
            item.product.image_url = source.image_url

    # ---- mutations ----

    def add_to_cart(self, product: Any, quantity: int = 1) -> CartItem:
        """
        Add `quantity` units of `product`, merging with an existing line.

        `product` is anything exposing id/title/price/image_url (a Product
        row, a ProductRead, a ProductSnapshot). Its fields are copied at
        add time.

        Raises:
            ValueError: if quantity is not a positive integer.
            StorageQuotaError: if the grown cart does not fit in storage.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        snapshot = ProductSnapshot.model_validate(
            product, from_attributes=True
        ).model_copy()
        items = self._working_copy()
        item = self._find(items, snapshot.id)

        if item is not None:
            item.quantity += quantity
        else:
            item = CartItem(
                id=f"cart-{uuid.uuid4()}",
                product_id=snapshot.id,
                quantity=quantity,
                product=snapshot,
            )
            items.append(item)

        self._save(items)
        return item.model_copy(deep=True)

    def remove_from_cart(self, product_id: uuid.UUID) -> None:
        """Remove the line for product_id; absent products are ignored."""
        self._save([item for item in self._working_copy() if item.product_id != product_id])

    def update_quantity(self, product_id: uuid.UUID, quantity: int) -> None:
        """
        Set (not add to) the quantity of a line.

        quantity <= 0 removes the line; unknown products are ignored.
        """
        if quantity <= 0:
            self.remove_from_cart(product_id)
            return

        items = self._working_copy()
        item = self._find(items, product_id)
        if item is not None:
            item.quantity = quantity
        self._save(items)

    def clear_cart(self) -> None:
        self._save([])
