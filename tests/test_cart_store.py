# tests/test_cart_store.py
import json
import logging
import uuid

import pytest

from storefront.core.errors import StorageQuotaError
from storefront.core.local_storage import MemoryStorage
from storefront.schemas.cart import ProductSnapshot
from storefront.services.cart_service import CartStore


def snapshot(title: str = "Sauvage", price: float = 1000.0) -> ProductSnapshot:
    return ProductSnapshot(id=uuid.uuid4(), title=title, price=price)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cart(storage):
    return CartStore(storage)


def test_new_cart_is_empty_and_not_persisted(storage, cart):
    assert cart.items == []
    assert cart.get_total_items() == 0
    assert cart.get_total_price() == 0
    assert storage.get_item("cart") is None


def test_add_same_product_merges_quantity(cart):
    p = snapshot()
    cart.add_to_cart(p, 2)
    cart.add_to_cart(p, 3)

    assert len(cart.items) == 1
    assert cart.items[0].product_id == p.id
    assert cart.items[0].quantity == 5


def test_add_defaults_to_one_and_generates_unique_ids(cart):
    a, b = snapshot("A"), snapshot("B")
    first = cart.add_to_cart(a)
    second = cart.add_to_cart(b)

    assert first.quantity == 1
    assert first.id != second.id
    assert [i.product_id for i in cart.items] == [a.id, b.id]


@pytest.mark.parametrize("quantity", [0, -1])
def test_add_rejects_non_positive_quantity(storage, cart, quantity):
    with pytest.raises(ValueError):
        cart.add_to_cart(snapshot(), quantity)
    assert cart.items == []
    assert storage.get_item("cart") is None


def test_remove_is_idempotent(cart):
    a, b = snapshot("A"), snapshot("B")
    cart.add_to_cart(a)
    cart.add_to_cart(b)

    cart.remove_from_cart(a.id)
    once = cart.items
    cart.remove_from_cart(a.id)

    assert cart.items == once
    assert [i.product_id for i in cart.items] == [b.id]


def test_update_quantity_sets_absolute_value(cart):
    p = snapshot()
    cart.add_to_cart(p, 4)
    cart.update_quantity(p.id, 2)
    assert cart.items[0].quantity == 2


def test_update_quantity_zero_removes_item(storage):
    p, q = snapshot("P"), snapshot("Q")

    updated = CartStore(MemoryStorage())
    removed = CartStore(MemoryStorage())
    for c in (updated, removed):
        c.add_to_cart(p, 2)
        c.add_to_cart(q, 1)

    updated.update_quantity(p.id, 0)
    removed.remove_from_cart(p.id)

    assert [i.product_id for i in updated.items] == [q.id]
    assert [(i.product_id, i.quantity) for i in updated.items] == [
        (i.product_id, i.quantity) for i in removed.items
    ]


def test_update_quantity_unknown_product_is_noop(cart):
    p = snapshot()
    cart.add_to_cart(p, 1)
    cart.update_quantity(uuid.uuid4(), 7)
    assert [(i.product_id, i.quantity) for i in cart.items] == [(p.id, 1)]


def test_total_price_of_single_line():
    cart = CartStore(MemoryStorage())
    cart.add_to_cart(snapshot(price=1000), 2)
    assert cart.get_total_price() == 2000


def test_totals_sum_over_lines(cart):
    cart.add_to_cart(snapshot(price=1500), 2)
    cart.add_to_cart(snapshot(price=250.5), 4)

    assert cart.get_total_items() == 6
    assert cart.get_total_price() == pytest.approx(1500 * 2 + 250.5 * 4)


def test_item_without_snapshot_counts_as_zero_price(storage):
    storage.set_item(
        "cart",
        json.dumps([{"id": "cart-1", "product_id": str(uuid.uuid4()), "quantity": 3}]),
    )
    cart = CartStore(storage)
    assert cart.get_total_items() == 3
    assert cart.get_total_price() == 0


def test_snapshot_price_is_frozen_at_add_time(cart):
    p = snapshot(price=100)
    cart.add_to_cart(p, 1)
    p.price = 999
    assert cart.get_total_price() == 100


def test_every_mutation_persists(storage, cart):
    p = snapshot()

    cart.add_to_cart(p, 2)
    assert json.loads(storage.get_item("cart"))[0]["quantity"] == 2

    cart.update_quantity(p.id, 5)
    assert json.loads(storage.get_item("cart"))[0]["quantity"] == 5

    cart.remove_from_cart(p.id)
    assert json.loads(storage.get_item("cart")) == []


def test_clear_empties_cart_but_keeps_key(storage, cart):
    cart.add_to_cart(snapshot(), 1)
    cart.clear_cart()

    assert cart.items == []
    assert storage.get_item("cart") == "[]"


def test_persistence_round_trip(storage, cart):
    products = [snapshot("A", 10), snapshot("B", 20), snapshot("C", 30)]
    for qty, p in enumerate(products, start=1):
        cart.add_to_cart(p, qty)

    reloaded = CartStore(storage)

    assert [(i.id, i.product_id, i.quantity) for i in reloaded.items] == [
        (i.id, i.product_id, i.quantity) for i in cart.items
    ]
    assert reloaded.get_total_price() == cart.get_total_price()


def test_custom_storage_key(storage):
    cart = CartStore(storage, key="shop-cart")
    cart.add_to_cart(snapshot())
    assert storage.get_item("shop-cart") is not None
    assert storage.get_item("cart") is None


@pytest.mark.parametrize("payload", ["{not json", '{"id": 1}', "42"])
def test_corrupt_payload_starts_empty_and_logs(storage, caplog, payload):
    storage.set_item("cart", payload)

    with caplog.at_level(logging.ERROR, logger="storefront.services.cart_service"):
        cart = CartStore(storage)

    assert cart.items == []
    assert "Error loading cart" in caplog.text


def test_defensive_parsing_drops_bad_entries_and_merges_duplicates(storage):
    pid = uuid.uuid4()
    other = uuid.uuid4()
    storage.set_item(
        "cart",
        json.dumps(
            [
                {"id": "a", "product_id": str(pid), "quantity": 1, "legacy": True},
                {"id": "b", "product_id": "not-a-uuid", "quantity": 1},
                {"id": "c", "product_id": str(other), "quantity": 0},
                {"id": "d", "product_id": str(pid), "quantity": 2},
            ]
        ),
    )

    cart = CartStore(storage)

    assert [(i.id, i.product_id, i.quantity) for i in cart.items] == [("a", pid, 3)]


def test_items_are_copies(cart):
    p = snapshot()
    cart.add_to_cart(p, 1)
    cart.items[0].quantity = 50
    assert cart.items[0].quantity == 1


def test_add_accepts_orm_like_objects(cart, make_product):
    product = make_product("Rose Oud", price=12500, image_url="https://img/rose.jpg")
    cart.add_to_cart(product, 1)

    item = cart.items[0]
    assert item.product.title == "Rose Oud"
    assert item.product.price == 12500
    assert item.product.image_url == "https://img/rose.jpg"


def test_stored_payload_keeps_only_ids_quantity_and_price(storage, cart):
    p = ProductSnapshot(
        id=uuid.uuid4(), title="Sauvage", price=1000, image_url="https://img/s.jpg"
    )
    item = cart.add_to_cart(p, 2)

    assert json.loads(storage.get_item("cart")) == [
        {"id": item.id, "product_id": str(p.id), "quantity": 2, "price": 1000.0}
    ]


def test_reads_entries_with_full_snapshot(storage):
    pid = uuid.uuid4()
    storage.set_item(
        "cart",
        json.dumps(
            [
                {
                    "id": "cart-1",
                    "product_id": str(pid),
                    "quantity": 2,
                    "product": {"id": str(pid), "title": "Oud", "price": 50},
                }
            ]
        ),
    )

    cart = CartStore(storage)

    assert cart.items[0].product.title == "Oud"
    assert cart.get_total_price() == 100


class LimitedStorage(MemoryStorage):
    def __init__(self, max_len):
        super().__init__()
        self.max_len = max_len

    def set_item(self, key, value):
        if len(value) > self.max_len:
            raise StorageQuotaError(key, len(value), self.max_len)
        super().set_item(key, value)


def test_refused_write_leaves_cart_unchanged():
    storage = LimitedStorage(max_len=150)
    cart = CartStore(storage)
    first = snapshot("A", 10)
    cart.add_to_cart(first, 1)
    stored = storage.get_item("cart")

    with pytest.raises(StorageQuotaError):
        cart.add_to_cart(snapshot("B", 20), 1)

    assert [(i.product_id, i.quantity) for i in cart.items] == [(first.id, 1)]
    assert storage.get_item("cart") == stored
    assert CartStore(storage).get_total_price() == cart.get_total_price()


def test_attach_product_details_keeps_stored_price(storage, cart):
    p = snapshot("Old title", 100)
    cart.add_to_cart(p, 1)

    reloaded = CartStore(storage)
    assert reloaded.items[0].product.title == ""
    stored = storage.get_item("cart")

    current = ProductSnapshot(
        id=p.id, title="New title", price=999, image_url="https://img/n.jpg"
    )
    reloaded.attach_product_details({p.id: current})

    item = reloaded.items[0]
    assert item.product.title == "New title"
    assert item.product.image_url == "https://img/n.jpg"
    assert item.product.price == 100
    assert storage.get_item("cart") == stored
