# storefront/services/trending_service.py
import logging
import uuid
from typing import Literal, Sequence, TypeVar

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.core.errors import GatewayError
from storefront.database import commit
from storefront.models.trending import TrendingPerfume
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.trending_repo import TrendingRepository
from storefront.schemas.brand import BrandSummary
from storefront.schemas.category import CategorySummary
from storefront.schemas.product import ProductRead
from storefront.schemas.trending import TrendingRead, TrendingReorderResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def plan_swap(
    entries: Sequence[T],
    entry_id: uuid.UUID,
    direction: Literal["up", "down"],
) -> tuple[T, T] | None:
    """
    Pick the pair whose ranks must be exchanged to move `entry_id` one
    position up or down.

    `entries` must already be sorted by ascending order_index.

    Returns:
        (target, neighbour), or None when the target already sits at the
        requested edge.

    Raises:
        LookupError: entry_id is not in `entries`.
    """
    ids = [entry.id for entry in entries]
    try:
        index = ids.index(entry_id)
    except ValueError:
        raise LookupError(f"Trending entry {entry_id} not found") from None

    neighbour_index = index - 1 if direction == "up" else index + 1
    if neighbour_index < 0 or neighbour_index >= len(entries):
        return None
    return entries[index], entries[neighbour_index]


class TrendingService:
    """
    Curation of the "trending perfumes" strip.

    Ranks (order_index) stay pairwise distinct: new entries go after the
    current maximum and reordering swaps two ranks in one transaction.
    """

    def __init__(self, repo: TrendingRepository, product_repo: ProductRepository):
        self.repo = repo
        self.product_repo = product_repo

    # ---- helpers ----

    @staticmethod
    def _to_read(row) -> TrendingRead:
        entry, product, brand, category = row
        product_read = None
        if product is not None:
            product_read = ProductRead(
                **product.model_dump(),
                brand=(
                    BrandSummary.model_validate(brand, from_attributes=True)
                    if brand is not None
                    else None
                ),
                category=(
                    CategorySummary.model_validate(category, from_attributes=True)
                    if category is not None
                    else None
                ),
            )
        return TrendingRead(**entry.model_dump(), product=product_read)

    def _get_entry(self, session: Session, entry_id: uuid.UUID) -> TrendingPerfume:
        entry = self.repo.get_by_id(session, entry_id)
        if not entry:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Trending perfume not found",
            )
        return entry

    @staticmethod
    def _failed(action: str, e: GatewayError) -> HTTPException:
        logger.error("Error %s trending perfume: %s", action, e.message)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error {action} trending perfume",
        )

    # ---- reads ----

    def list_trending(
        self,
        session: Session,
        active_only: bool = False,
    ) -> list[TrendingRead]:
        try:
            rows = self.repo.list_with_products(session, active_only=active_only)
        except GatewayError as e:
            logger.error("Error fetching trending perfumes: %s", e.message)
            return []
        return [self._to_read(row) for row in rows]

    # ---- writes ----

    def add_trending(self, session: Session, product_id: uuid.UUID) -> TrendingRead:
        """
        Append a product at the end of the trending order, active.
        """
        try:
            product = self.product_repo.get_by_id(session, product_id)
            existing = self.repo.get_by_product(session, product_id)
        except GatewayError as e:
            raise self._failed("adding", e) from e

        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Product is already trending",
            )

        try:
            next_index = self.repo.max_order_index(session) + 1
            entry = self.repo.create(
                session,
                TrendingPerfume(
                    product_id=product_id,
                    order_index=next_index,
                    is_active=True,
                ),
            )
        except GatewayError as e:
            raise self._failed("adding", e) from e

        logger.info("Added product %s to trending at #%s", product_id, next_index)
        return self._find_read(session, entry.id)

    def _find_read(self, session: Session, entry_id: uuid.UUID) -> TrendingRead:
        for item in self.list_trending(session):
            if item.id == entry_id:
                return item
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trending perfume not found",
        )

    def toggle_active(self, session: Session, entry_id: uuid.UUID) -> TrendingRead:
        entry = self._get_entry(session, entry_id)
        entry.is_active = not entry.is_active
        try:
            self.repo.update(session, entry)
        except GatewayError as e:
            raise self._failed("updating", e) from e
        return self._find_read(session, entry_id)

    def delete_trending(self, session: Session, entry_id: uuid.UUID) -> None:
        entry = self._get_entry(session, entry_id)
        try:
            self.repo.delete(session, entry)
        except GatewayError as e:
            raise self._failed("deleting", e) from e

    def reorder(
        self,
        session: Session,
        entry_id: uuid.UUID,
        direction: Literal["up", "down"],
    ) -> TrendingReorderResult:
        """
        Move an entry one position up or down by swapping its rank with
        its neighbour's.

        Both rank updates are committed together; on failure the
        transaction is rolled back and neither rank changes.
        """
        try:
            entries = self.repo.list_ordered(session)
        except GatewayError as e:
            raise self._failed("reordering", e) from e

        try:
            pair = plan_swap(entries, entry_id, direction)
        except LookupError:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Trending perfume not found",
            )

        if pair is None:
            logger.info("Trending entry %s is already at the %s edge", entry_id, direction)
            return TrendingReorderResult(moved=False, items=self.list_trending(session))

        target, neighbour = pair
        try:
            self.repo.swap_order_indexes(session, target, neighbour)
            commit(session)
        except GatewayError as e:
            raise self._failed("reordering", e) from e

        return TrendingReorderResult(moved=True, items=self.list_trending(session))
