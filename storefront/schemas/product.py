# storefront/schemas/product.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from storefront.schemas.brand import BrandSummary
from storefront.schemas.category import CategorySummary


class ProductImageIn(SQLModel):
    """
    One entry of the image set submitted with a product form.

    Position in the submitted list becomes `order_index`.
    """

    model_config = ConfigDict(extra="forbid")

    image_url: str
    is_primary: bool = False

    @field_validator("image_url")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("image_url cannot be empty")
        return v


class ProductImageRead(SQLModel):
    """
    Gallery image as displayed.

    `id` is None for the synthetic entry built from a legacy image_url
    and for freshly uploaded drafts not yet saved with a product.
    """

    id: uuid.UUID | None = None
    product_id: uuid.UUID | None = None
    image_url: str
    is_primary: bool = False
    order_index: int = 0


class ProductCreate(SQLModel):
    """
    Payload for creating a product.

    - `images`, when given, is saved together with the product in a
      single transaction.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    description: str = ""
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    brand_id: uuid.UUID | None = None
    category_id: uuid.UUID | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    reviews_count: int | None = Field(default=None, ge=0)
    in_stock: bool = True
    compare_at_price: float | None = Field(default=None, ge=0)
    image_url: str | None = None
    images: list[ProductImageIn] | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v


class ProductUpdate(SQLModel):
    """
    Partial update payload for products.
    All fields are optional; `images` replaces the whole gallery.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    brand_id: uuid.UUID | None = None
    category_id: uuid.UUID | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    reviews_count: int | None = Field(default=None, ge=0)
    in_stock: bool | None = None
    compare_at_price: float | None = Field(default=None, ge=0)
    image_url: str | None = None
    images: list[ProductImageIn] | None = None

    @field_validator("title", "description", "price", "stock", "in_stock", mode="before")
    @classmethod
    def reject_null(cls, v):
        # These columns are NOT NULL; omit the field to leave it unchanged
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v


class ProductRead(SQLModel):
    """
    Product representation for clients, with brand and category joined in.
    """

    id: uuid.UUID
    title: str
    description: str
    price: float
    stock: int
    brand_id: uuid.UUID | None = None
    category_id: uuid.UUID | None = None
    rating: float | None = None
    reviews_count: int | None = None
    in_stock: bool = True
    compare_at_price: float | None = None
    image_url: str | None = None
    created_at: datetime
    brand: BrandSummary | None = None
    category: CategorySummary | None = None
    product_images: list[ProductImageRead] = []


class ProductDetail(ProductRead):
    """
    Product detail page payload.

    `gallery` is display-ordered; `primary_image_url` falls back to the
    placeholder image when the product has no image at all.
    """

    gallery: list[ProductImageRead]
    primary_image_url: str


class ImageUploadRead(SQLModel):
    """Public URL of a freshly uploaded image."""

    image_url: str
