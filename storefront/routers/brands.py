# storefront/routers/brands.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_admin
from storefront.database import get_session
from storefront.repositories.brand_repo import BrandRepository
from storefront.schemas.brand import BrandCreate, BrandRead, BrandUpdate
from storefront.services.brand_service import BrandService

router = APIRouter(prefix="/brands", tags=["Brands"])

repo = BrandRepository()
service = BrandService(repo)


@router.get("", response_model=list[BrandRead])
def list_brands(session: Session = Depends(get_session)):
    """
    All brands by name (navigation dropdown).
    """
    return service.list_brands(session)


@router.get("/{brand_id}", response_model=BrandRead)
def get_brand(brand_id: uuid.UUID, session: Session = Depends(get_session)):
    return service.get_brand(session, brand_id)


@router.post(
    "",
    response_model=BrandRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_brand(payload: BrandCreate, session: Session = Depends(get_session)):
    return service.create_brand(session, payload)


@router.patch(
    "/{brand_id}",
    response_model=BrandRead,
    dependencies=[Depends(require_admin)],
)
def update_brand(
    brand_id: uuid.UUID,
    payload: BrandUpdate,
    session: Session = Depends(get_session),
):
    return service.update_brand(session, brand_id, payload)


@router.delete(
    "/{brand_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_brand(brand_id: uuid.UUID, session: Session = Depends(get_session)):
    """
    Delete a brand (admin only). Its products stay, without a brand.
    """
    service.delete_brand(session, brand_id)
    return None
