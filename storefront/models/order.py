# storefront/models/order.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order as recorded by the shop staff.

    WhatsApp hand-offs are not written here; the table is read by the
    admin dashboard only.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID | None = Field(default=None, index=True)

    customer_name: str
    customer_email: str
    customer_phone: str

    total_amount: float = Field(
        default=0.0,
        ge=0,
        description="Final amount for this order",
    )

    # pending | confirmed | shipped | delivered
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )

    # website | whatsapp
    order_type: str = Field(default="whatsapp")

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )
