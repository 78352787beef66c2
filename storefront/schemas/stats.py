# storefront/schemas/stats.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel


class RecentOrder(SQLModel):
    """
    Lightweight info for the latest orders table.
    """
    model_config = ConfigDict(extra="forbid")

    id: uuid.UUID
    customer_name: str
    customer_email: str
    total_amount: float
    status: str
    order_type: str
    created_at: datetime


class AdminDashboardStats(SQLModel):
    """
    Full payload for admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    total_products: int
    total_orders: int
    total_revenue: float
    active_brands: int
    total_categories: int
    recent_orders: list[RecentOrder]
