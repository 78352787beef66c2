# storefront/schemas/trending.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel

from storefront.schemas.product import ProductRead

Direction = Literal["up", "down"]


class TrendingCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID


class TrendingReorder(SQLModel):
    model_config = ConfigDict(extra="forbid")

    direction: Direction


class TrendingRead(SQLModel):
    id: uuid.UUID
    product_id: uuid.UUID
    order_index: int
    is_active: bool
    created_at: datetime
    product: ProductRead | None = None


class TrendingReorderResult(SQLModel):
    """
    Outcome of a move request.

    `moved` is False when the entry already sat at the requested edge.
    `items` is the list re-read after the swap.
    """

    moved: bool
    items: list[TrendingRead]
