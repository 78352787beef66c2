# storefront/services/gallery.py
"""
Display ordering for product galleries.

Primary images come first, then ascending `order_index`. When several
images are flagged primary only the first of them keeps the flag in the
output. Products without gallery rows fall back to their legacy
`image_url`.
"""
import uuid
from typing import Iterable, Protocol

from storefront.schemas.product import ProductImageRead


class ImageLike(Protocol):
    id: uuid.UUID | None
    product_id: uuid.UUID | None
    image_url: str
    is_primary: bool
    order_index: int


def order_product_images(
    images: Iterable[ImageLike],
    legacy_image_url: str | None = None,
    product_id: uuid.UUID | None = None,
) -> list[ProductImageRead]:
    """
    Return the gallery in display order without touching the input.

    Args:
        images: gallery rows (models or read schemas).
        legacy_image_url: single image used when there are no rows.
        product_id: attached to the synthetic legacy entry.

    Returns:
        New ProductImageRead objects; empty when there is nothing to show
        (the caller renders the placeholder).
    """
    images = list(images)

    if not images:
        if legacy_image_url:
            return [
                ProductImageRead(
                    id=None,
                    product_id=product_id,
                    image_url=legacy_image_url,
                    is_primary=True,
                    order_index=0,
                )
            ]
        return []

    # sorted() is stable, so ties on order_index keep their input order
    ranked = sorted(images, key=lambda img: (not img.is_primary, img.order_index))

    ordered: list[ProductImageRead] = []
    primary_taken = False
    for img in ranked:
        is_primary = bool(img.is_primary) and not primary_taken
        primary_taken = primary_taken or is_primary
        ordered.append(
            ProductImageRead(
                id=img.id,
                product_id=img.product_id,
                image_url=img.image_url,
                is_primary=is_primary,
                order_index=img.order_index,
            )
        )
    return ordered


def primary_image_url(
    ordered: list[ProductImageRead],
    placeholder_url: str,
) -> str:
    """First image of an ordered gallery, or the placeholder."""
    if ordered:
        return ordered[0].image_url
    return placeholder_url
