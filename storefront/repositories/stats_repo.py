# storefront/repositories/stats_repo.py
from sqlalchemy import func
from sqlmodel import Session, select, col

from storefront.database import gateway_call
from storefront.models.order import Order
from storefront.models.product import Brand, Category, Product


class StatsRepository:
    """
    Read-only aggregated queries for admin dashboard.
    """

    def _count(self, session: Session, model) -> int:
        stmt = select(func.count()).select_from(model)
        # SQLModel's Session.exec() -> ScalarResult -> use .one()
        value = session.exec(stmt).one()
        return int(value or 0)

    @gateway_call
    def count_products(self, session: Session) -> int:
        return self._count(session, Product)

    @gateway_call
    def count_orders(self, session: Session) -> int:
        return self._count(session, Order)

    @gateway_call
    def count_brands(self, session: Session) -> int:
        return self._count(session, Brand)

    @gateway_call
    def count_categories(self, session: Session) -> int:
        return self._count(session, Category)

    @gateway_call
    def total_revenue(self, session: Session) -> float:
        """
        Sum of total_amount over every order.
        """
        stmt = select(func.coalesce(func.sum(Order.total_amount), 0.0))
        value = session.exec(stmt).one()
        return float(value or 0.0)

    @gateway_call
    def latest_orders(
        self,
        session: Session,
        limit: int = 5,
    ) -> list[Order]:
        """
        Latest N orders by created_at (any status).
        """
        stmt = (
            select(Order)
            .order_by(col(Order.created_at).desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())
