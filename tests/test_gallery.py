# tests/test_gallery.py
import uuid

from storefront.schemas.product import ProductImageRead
from storefront.services.gallery import order_product_images, primary_image_url


def image(name: str, is_primary: bool, order_index: int) -> ProductImageRead:
    return ProductImageRead(
        id=uuid.uuid5(uuid.NAMESPACE_URL, name),
        image_url=f"https://img/{name}.jpg",
        is_primary=is_primary,
        order_index=order_index,
    )


def urls(images):
    return [img.image_url.rsplit("/", 1)[1].split(".")[0] for img in images]


def test_primary_first_then_order_index():
    images = [image("a", False, 2), image("b", True, 5), image("c", False, 0)]
    assert urls(order_product_images(images)) == ["b", "c", "a"]


def test_ordering_is_deterministic_and_does_not_mutate_input():
    images = [image("a", False, 2), image("b", True, 5), image("c", False, 0)]
    before = [img.model_dump() for img in images]

    first = order_product_images(images)
    second = order_product_images(list(reversed(images)))

    assert urls(first) == urls(second)
    assert [img.model_dump() for img in images] == before


def test_only_first_of_several_primaries_keeps_flag():
    images = [image("x", True, 3), image("y", False, 0), image("z", True, 1)]
    ordered = order_product_images(images)

    assert urls(ordered) == ["z", "x", "y"]
    assert [img.is_primary for img in ordered] == [True, False, False]


def test_legacy_image_fallback():
    pid = uuid.uuid4()
    ordered = order_product_images([], legacy_image_url="X", product_id=pid)

    assert len(ordered) == 1
    assert ordered[0].image_url == "X"
    assert ordered[0].is_primary is True
    assert ordered[0].order_index == 0
    assert ordered[0].product_id == pid


def test_gallery_rows_win_over_legacy_image():
    ordered = order_product_images([image("a", False, 0)], legacy_image_url="X")
    assert urls(ordered) == ["a"]


def test_nothing_to_show():
    assert order_product_images([], legacy_image_url=None) == []
    assert order_product_images([], legacy_image_url="") == []


def test_primary_image_url_uses_placeholder_when_empty():
    assert primary_image_url([], "https://placeholder") == "https://placeholder"
    ordered = order_product_images([image("a", False, 1), image("b", False, 0)])
    assert primary_image_url(ordered, "https://placeholder") == "https://img/b.jpg"
