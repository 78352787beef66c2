# tests/test_trending.py
import uuid
from types import SimpleNamespace

import pytest

from storefront.core.errors import GatewayError
from storefront.services.trending_service import plan_swap

API = "/api/v1/trending"


def entries(n: int):
    return [SimpleNamespace(id=uuid.uuid4(), order_index=i + 1) for i in range(n)]


# -------- plan_swap --------


def test_plan_swap_first_up_is_noop():
    items = entries(3)
    assert plan_swap(items, items[0].id, "up") is None


def test_plan_swap_last_down_is_noop():
    items = entries(3)
    assert plan_swap(items, items[-1].id, "down") is None


def test_plan_swap_middle_up_pairs_with_predecessor():
    items = entries(3)
    assert plan_swap(items, items[1].id, "up") == (items[1], items[0])


def test_plan_swap_middle_down_pairs_with_successor():
    items = entries(3)
    assert plan_swap(items, items[1].id, "down") == (items[1], items[2])


def test_plan_swap_unknown_entry():
    with pytest.raises(LookupError):
        plan_swap(entries(2), uuid.uuid4(), "up")


# -------- API --------


@pytest.fixture
def three_trending(make_product, make_trending):
    products = [make_product(f"Perfume {i}") for i in range(3)]
    return [make_trending(p, order_index=i + 1) for i, p in enumerate(products)]


def ranks(client):
    res = client.get(f"{API}/all")
    assert res.status_code == 200
    return [(item["id"], item["order_index"]) for item in res.json()]


def test_public_list_shows_active_entries_in_order(client, make_product, make_trending):
    a, b, c = make_product("A"), make_product("B"), make_product("C")
    make_trending(c, order_index=3)
    make_trending(a, order_index=1)
    make_trending(b, order_index=2, is_active=False)

    res = client.get(API)

    assert res.status_code == 200
    assert [item["product"]["title"] for item in res.json()] == ["A", "C"]


def test_admin_routes_require_auth(client, three_trending):
    assert client.get(f"{API}/all").status_code == 401
    res = client.post(f"{API}/{three_trending[1].id}/reorder", json={"direction": "up"})
    assert res.status_code == 401


def test_add_appends_after_max_rank(admin_client, three_trending, make_product):
    product = make_product("New Scent")

    res = admin_client.post(API, json={"product_id": str(product.id)})

    assert res.status_code == 201
    body = res.json()
    assert body["order_index"] == 4
    assert body["is_active"] is True
    assert body["product"]["title"] == "New Scent"


def test_add_to_empty_list_starts_at_one(admin_client, make_product):
    product = make_product()
    res = admin_client.post(API, json={"product_id": str(product.id)})
    assert res.json()["order_index"] == 1


def test_add_rejects_duplicates_and_unknown_products(admin_client, make_product):
    product = make_product()
    assert admin_client.post(API, json={"product_id": str(product.id)}).status_code == 201
    assert admin_client.post(API, json={"product_id": str(product.id)}).status_code == 409
    assert admin_client.post(API, json={"product_id": str(uuid.uuid4())}).status_code == 404


def test_reorder_middle_up_swaps_with_predecessor_only(admin_client, three_trending):
    first, middle, last = three_trending

    res = admin_client.post(f"{API}/{middle.id}/reorder", json={"direction": "up"})

    assert res.status_code == 200
    body = res.json()
    assert body["moved"] is True
    assert [item["id"] for item in body["items"]] == [
        str(middle.id),
        str(first.id),
        str(last.id),
    ]
    assert ranks(admin_client) == [
        (str(middle.id), 1),
        (str(first.id), 2),
        (str(last.id), 3),
    ]


def test_reorder_middle_down(admin_client, three_trending):
    first, middle, last = three_trending

    admin_client.post(f"{API}/{middle.id}/reorder", json={"direction": "down"})

    assert ranks(admin_client) == [
        (str(first.id), 1),
        (str(last.id), 2),
        (str(middle.id), 3),
    ]


@pytest.mark.parametrize("position,direction", [(0, "up"), (2, "down")])
def test_reorder_at_edge_is_noop(admin_client, three_trending, position, direction):
    before = ranks(admin_client)

    res = admin_client.post(
        f"{API}/{three_trending[position].id}/reorder", json={"direction": direction}
    )

    assert res.status_code == 200
    assert res.json()["moved"] is False
    assert ranks(admin_client) == before


def test_reorder_unknown_entry(admin_client, three_trending):
    res = admin_client.post(f"{API}/{uuid.uuid4()}/reorder", json={"direction": "up"})
    assert res.status_code == 404


def test_reorder_rejects_bad_direction(admin_client, three_trending):
    res = admin_client.post(
        f"{API}/{three_trending[1].id}/reorder", json={"direction": "left"}
    )
    assert res.status_code == 422


def test_failed_swap_leaves_both_ranks_unchanged(admin_client, three_trending, monkeypatch):
    before = ranks(admin_client)

    def failing_commit(session):
        session.rollback()
        raise GatewayError("connection reset")

    monkeypatch.setattr("storefront.services.trending_service.commit", failing_commit)

    res = admin_client.post(
        f"{API}/{three_trending[1].id}/reorder", json={"direction": "up"}
    )

    assert res.status_code == 500
    assert res.json()["detail"] == "Error reordering trending perfume"
    assert ranks(admin_client) == before


def test_toggle_active(admin_client, three_trending):
    entry = three_trending[0]

    res = admin_client.post(f"{API}/{entry.id}/toggle")
    assert res.status_code == 200
    assert res.json()["is_active"] is False
    assert str(entry.id) not in [item["id"] for item in admin_client.get(API).json()]

    res = admin_client.post(f"{API}/{entry.id}/toggle")
    assert res.json()["is_active"] is True


def test_delete(admin_client, three_trending):
    entry = three_trending[0]

    assert admin_client.delete(f"{API}/{entry.id}").status_code == 204
    assert admin_client.delete(f"{API}/{entry.id}").status_code == 404
    assert [rid for rid, _ in ranks(admin_client)] == [
        str(three_trending[1].id),
        str(three_trending[2].id),
    ]
