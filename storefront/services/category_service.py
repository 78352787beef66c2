# storefront/services/category_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.core.errors import GatewayError
from storefront.models.product import Category
from storefront.repositories.category_repo import CategoryRepository
from storefront.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Category listing for the storefront navigation and admin CRUD.
    """

    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    def list_categories(self, session: Session) -> list[Category]:
        try:
            return self.repo.list_by_name(session)
        except GatewayError as e:
            logger.error("Error fetching categories: %s", e.message)
            return []

    def get_category(self, session: Session, category_id: uuid.UUID) -> Category:
        try:
            category = self.repo.get_by_id(session, category_id)
        except GatewayError as e:
            logger.error("Error fetching category %s: %s", category_id, e.message)
            category = None
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found",
            )
        return category

    def create_category(self, session: Session, payload: CategoryCreate) -> Category:
        try:
            return self.repo.create(session, Category(**payload.model_dump()))
        except GatewayError as e:
            logger.error("Error saving category: %s", e.message)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving category",
            ) from e

    def update_category(
        self,
        session: Session,
        category_id: uuid.UUID,
        payload: CategoryUpdate,
    ) -> Category:
        category = self.get_category(session, category_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(category, field, value)
        try:
            return self.repo.update(session, category)
        except GatewayError as e:
            logger.error("Error saving category %s: %s", category_id, e.message)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving category",
            ) from e

    def delete_category(self, session: Session, category_id: uuid.UUID) -> None:
        category = self.get_category(session, category_id)
        try:
            self.repo.delete(session, category)
        except GatewayError as e:
            logger.error("Error deleting category %s: %s", category_id, e.message)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error deleting category",
            ) from e
