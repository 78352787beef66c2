# storefront/repositories/brand_repo.py
import uuid

from sqlmodel import Session, select, update

from storefront.database import commit, gateway_call
from storefront.models.product import Brand, Product


class BrandRepository:

    @gateway_call
    def list_by_name(self, session: Session) -> list[Brand]:
        return list(session.exec(select(Brand).order_by(Brand.name)).all())

    @gateway_call
    def get_by_id(self, session: Session, brand_id: uuid.UUID) -> Brand | None:
        return session.get(Brand, brand_id)

    # CRUD
    @gateway_call
    def create(self, session: Session, brand: Brand) -> Brand:
        session.add(brand)
        commit(session)
        session.refresh(brand)
        return brand

    @gateway_call
    def update(self, session: Session, brand: Brand) -> Brand:
        session.add(brand)
        commit(session)
        session.refresh(brand)
        return brand

    @gateway_call
    def delete(self, session: Session, brand: Brand) -> None:
        """Delete a brand; its products are kept without a brand."""
        session.exec(
            update(Product).where(Product.brand_id == brand.id).values(brand_id=None)
        )
        session.delete(brand)
        commit(session)
