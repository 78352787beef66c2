# storefront/repositories/trending_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from storefront.database import commit, gateway_call
from storefront.models.product import Brand, Category, Product
from storefront.models.trending import TrendingPerfume

TrendingRow = tuple[TrendingPerfume, Product | None, Brand | None, Category | None]


class TrendingRepository:
    """
    Data access layer for trending_perfumes.

    `swap_order_indexes` does not commit: the service commits both rank
    updates together.
    """

    @gateway_call
    def list_with_products(
        self,
        session: Session,
        active_only: bool = False,
    ) -> list[TrendingRow]:
        stmt = (
            select(TrendingPerfume, Product, Brand, Category)
            .outerjoin(Product, TrendingPerfume.product_id == Product.id)
            .outerjoin(Brand, Product.brand_id == Brand.id)
            .outerjoin(Category, Product.category_id == Category.id)
        )
        if active_only:
            stmt = stmt.where(TrendingPerfume.is_active == True)  # noqa: E712
        stmt = stmt.order_by(TrendingPerfume.order_index)
        return list(session.exec(stmt).all())

    @gateway_call
    def list_ordered(self, session: Session) -> list[TrendingPerfume]:
        stmt = select(TrendingPerfume).order_by(TrendingPerfume.order_index)
        return list(session.exec(stmt).all())

    @gateway_call
    def get_by_id(
        self,
        session: Session,
        entry_id: uuid.UUID,
    ) -> TrendingPerfume | None:
        return session.get(TrendingPerfume, entry_id)

    @gateway_call
    def get_by_product(
        self,
        session: Session,
        product_id: uuid.UUID,
    ) -> TrendingPerfume | None:
        stmt = select(TrendingPerfume).where(TrendingPerfume.product_id == product_id)
        return session.exec(stmt).first()

    @gateway_call
    def max_order_index(self, session: Session) -> int:
        stmt = select(func.max(TrendingPerfume.order_index))
        value = session.exec(stmt).one()
        return int(value or 0)

    # CRUD
    @gateway_call
    def create(self, session: Session, entry: TrendingPerfume) -> TrendingPerfume:
        session.add(entry)
        commit(session)
        session.refresh(entry)
        return entry

    @gateway_call
    def update(self, session: Session, entry: TrendingPerfume) -> TrendingPerfume:
        session.add(entry)
        commit(session)
        session.refresh(entry)
        return entry

    @gateway_call
    def delete(self, session: Session, entry: TrendingPerfume) -> None:
        session.delete(entry)
        commit(session)

    @gateway_call
    def swap_order_indexes(
        self,
        session: Session,
        first: TrendingPerfume,
        second: TrendingPerfume,
    ) -> None:
        first.order_index, second.order_index = second.order_index, first.order_index
        session.add(first)
        session.add(second)
        session.flush()
