# storefront/services/brand_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.core.errors import GatewayError
from storefront.models.product import Brand
from storefront.repositories.brand_repo import BrandRepository
from storefront.schemas.brand import BrandCreate, BrandUpdate

logger = logging.getLogger(__name__)


class BrandService:
    """
    Brand listing for the storefront navigation and admin CRUD.
    """

    def __init__(self, repo: BrandRepository):
        self.repo = repo

    def list_brands(self, session: Session) -> list[Brand]:
        try:
            return self.repo.list_by_name(session)
        except GatewayError as e:
            logger.error("Error fetching brands: %s", e.message)
            return []

    def get_brand(self, session: Session, brand_id: uuid.UUID) -> Brand:
        try:
            brand = self.repo.get_by_id(session, brand_id)
        except GatewayError as e:
            logger.error("Error fetching brand %s: %s", brand_id, e.message)
            brand = None
        if not brand:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Brand not found",
            )
        return brand

    def create_brand(self, session: Session, payload: BrandCreate) -> Brand:
        try:
            return self.repo.create(session, Brand(**payload.model_dump()))
        except GatewayError as e:
            logger.error("Error saving brand: %s", e.message)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving brand",
            ) from e

    def update_brand(
        self,
        session: Session,
        brand_id: uuid.UUID,
        payload: BrandUpdate,
    ) -> Brand:
        brand = self.get_brand(session, brand_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(brand, field, value)
        try:
            return self.repo.update(session, brand)
        except GatewayError as e:
            logger.error("Error saving brand %s: %s", brand_id, e.message)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving brand",
            ) from e

    def delete_brand(self, session: Session, brand_id: uuid.UUID) -> None:
        brand = self.get_brand(session, brand_id)
        try:
            self.repo.delete(session, brand)
        except GatewayError as e:
            logger.error("Error deleting brand %s: %s", brand_id, e.message)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error deleting brand",
            ) from e
