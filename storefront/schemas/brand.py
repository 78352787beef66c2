# storefront/schemas/brand.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class BrandCreate(SQLModel):
    """
    Payload for creating a brand.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    description: str | None = None
    logo_url: str | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class BrandUpdate(SQLModel):
    """
    Partial update payload for brands.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    description: str | None = None
    logo_url: str | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class BrandRead(SQLModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    logo_url: str | None = None
    created_at: datetime


class BrandSummary(SQLModel):
    """Brand fields embedded in product responses."""

    id: uuid.UUID
    name: str
    description: str | None = None
