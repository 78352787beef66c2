# storefront/services/stats_service.py
import logging

from sqlmodel import Session

from storefront.core.errors import GatewayError
from storefront.repositories.stats_repo import StatsRepository
from storefront.schemas.stats import AdminDashboardStats, RecentOrder

logger = logging.getLogger(__name__)


class StatsService:
    """
    Orchestrates aggregated admin dashboard statistics.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def get_admin_dashboard_stats(
        self,
        session: Session,
        recent_n_orders: int = 5,
    ) -> AdminDashboardStats:
        try:
            total_products = self.repo.count_products(session)
            total_orders = self.repo.count_orders(session)
            total_revenue = self.repo.total_revenue(session)
            active_brands = self.repo.count_brands(session)
            total_categories = self.repo.count_categories(session)
            latest = self.repo.latest_orders(session, limit=recent_n_orders)
        except GatewayError as e:
            # Dashboard shows zeroed counters rather than an error page
            logger.error("Error fetching dashboard data: %s", e.message)
            return AdminDashboardStats(
                total_products=0,
                total_orders=0,
                total_revenue=0.0,
                active_brands=0,
                total_categories=0,
                recent_orders=[],
            )

        recent_orders = [
            RecentOrder(
                id=o.id,
                customer_name=o.customer_name,
                customer_email=o.customer_email,
                total_amount=o.total_amount,
                status=o.status,
                order_type=o.order_type,
                created_at=o.created_at,
            )
            for o in latest
        ]

        return AdminDashboardStats(
            total_products=total_products,
            total_orders=total_orders,
            total_revenue=total_revenue,
            active_brands=active_brands,
            total_categories=total_categories,
            recent_orders=recent_orders,
        )
