# storefront/models/trending.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class TrendingPerfume(SQLModel, table=True):
    """
    Admin-curated trending slot.

    `order_index` defines the display rank; ranks are kept pairwise
    distinct by only ever appending (max + 1) or swapping two entries.
    """

    __tablename__ = "trending_perfumes"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
    )

    order_index: int = Field(index=True)

    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
