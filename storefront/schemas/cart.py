# storefront/schemas/cart.py
import uuid

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class ProductSnapshot(SQLModel):
    """
    Copy of the product fields taken when it was added to the cart.

    Prices in the cart stay at their add-time value.
    """

    model_config = ConfigDict(extra="ignore")

    id: uuid.UUID
    title: str = ""
    price: float = 0.0
    image_url: str | None = None


class CartItem(SQLModel):
    """
    One line of the client-side cart.
    At most one item per product_id; quantity is always >= 1.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    product_id: uuid.UUID
    quantity: int = Field(gt=0)
    product: ProductSnapshot | None = None


class CartItemAdd(SQLModel):
    """
    Payload for adding to cart.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID
    quantity: int = 1


class CartItemUpdate(SQLModel):
    """
    Payload for setting the quantity of a cart line.
    A quantity <= 0 removes the line.
    """

    model_config = ConfigDict(extra="forbid")

    quantity: int


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartItem]
    total_items: int
    total_price: float
