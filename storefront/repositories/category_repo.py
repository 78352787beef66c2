# storefront/repositories/category_repo.py
import uuid

from sqlmodel import Session, select, update

from storefront.database import commit, gateway_call
from storefront.models.product import Category, Product


class CategoryRepository:

    @gateway_call
    def list_by_name(self, session: Session) -> list[Category]:
        return list(session.exec(select(Category).order_by(Category.name)).all())

    @gateway_call
    def get_by_id(self, session: Session, category_id: uuid.UUID) -> Category | None:
        return session.get(Category, category_id)

    # CRUD
    @gateway_call
    def create(self, session: Session, category: Category) -> Category:
        session.add(category)
        commit(session)
        session.refresh(category)
        return category

    @gateway_call
    def update(self, session: Session, category: Category) -> Category:
        session.add(category)
        commit(session)
        session.refresh(category)
        return category

    @gateway_call
    def delete(self, session: Session, category: Category) -> None:
        """Delete a category; its products are kept uncategorised."""
        session.exec(
            update(Product)
            .where(Product.category_id == category.id)
            .values(category_id=None)
        )
        session.delete(category)
        commit(session)
