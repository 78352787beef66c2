# storefront/routers/trending.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_admin
from storefront.database import get_session
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.trending_repo import TrendingRepository
from storefront.schemas.trending import (
    TrendingCreate,
    TrendingRead,
    TrendingReorder,
    TrendingReorderResult,
)
from storefront.services.trending_service import TrendingService

router = APIRouter(prefix="/trending", tags=["Trending"])

service = TrendingService(TrendingRepository(), ProductRepository())


# -------- Public endpoints --------


@router.get("", response_model=list[TrendingRead])
def list_active_trending(session: Session = Depends(get_session)):
    """
    Active trending perfumes in display order.
    """
    return service.list_trending(session, active_only=True)


# -------- Admin endpoints --------


@router.get(
    "/all",
    response_model=list[TrendingRead],
    dependencies=[Depends(require_admin)],
)
def list_all_trending(session: Session = Depends(get_session)):
    """
    Every trending entry, active or not (admin only).
    """
    return service.list_trending(session)


@router.post(
    "",
    response_model=TrendingRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def add_trending(payload: TrendingCreate, session: Session = Depends(get_session)):
    """
    Append a product to the end of the trending order (admin only).
    """
    return service.add_trending(session, payload.product_id)


@router.post(
    "/{entry_id}/toggle",
    response_model=TrendingRead,
    dependencies=[Depends(require_admin)],
)
def toggle_trending(entry_id: uuid.UUID, session: Session = Depends(get_session)):
    """
    Flip the active flag of an entry (admin only).
    """
    return service.toggle_active(session, entry_id)


@router.post(
    "/{entry_id}/reorder",
    response_model=TrendingReorderResult,
    dependencies=[Depends(require_admin)],
)
def reorder_trending(
    entry_id: uuid.UUID,
    payload: TrendingReorder,
    session: Session = Depends(get_session),
):
    """
    Move an entry one position up or down (admin only).

    `moved` is false when the entry is already first (up) or last (down).
    """
    return service.reorder(session, entry_id, payload.direction)


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_trending(entry_id: uuid.UUID, session: Session = Depends(get_session)):
    service.delete_trending(session, entry_id)
    return None
