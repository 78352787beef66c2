# storefront/repositories/product_repo.py
import uuid

from sqlmodel import Session, select, col, delete

from storefront.database import gateway_call
from storefront.models.product import Brand, Category, Product, ProductImage
from storefront.models.trending import TrendingPerfume

ProductRow = tuple[Product, Brand | None, Category | None]


class ProductRepository:
    """
    Data access layer for Product & ProductImage.

    - Pure DB operations (CRUD + queries).
    - No commits here; saving a product and its gallery is one
      transaction and the service calls commit().
    """

    @staticmethod
    def _with_relations():
        return (
            select(Product, Brand, Category)
            .outerjoin(Brand, Product.brand_id == Brand.id)
            .outerjoin(Category, Product.category_id == Category.id)
        )

    # ----- Products -----

    @gateway_call
    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    @gateway_call
    def get_with_relations(
        self,
        session: Session,
        product_id: uuid.UUID,
    ) -> ProductRow | None:
        stmt = self._with_relations().where(Product.id == product_id)
        return session.exec(stmt).first()

    @gateway_call
    def list_newest(self, session: Session) -> list[ProductRow]:
        stmt = self._with_relations().order_by(col(Product.created_at).desc())
        return list(session.exec(stmt).all())

    @gateway_call
    def list_top_rated(self, session: Session, limit: int = 5) -> list[ProductRow]:
        stmt = (
            self._with_relations()
            .where(col(Product.rating).is_not(None))
            .order_by(col(Product.rating).desc(), col(Product.created_at).desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    @gateway_call
    def list_by_ids(
        self,
        session: Session,
        product_ids: list[uuid.UUID],
    ) -> list[Product]:
        if not product_ids:
            return []
        stmt = select(Product).where(col(Product.id).in_(product_ids))
        return list(session.exec(stmt).all())

    @gateway_call
    def add(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.flush()  # Assign PK / surface constraint errors early
        return product

    @gateway_call
    def delete(self, session: Session, product: Product) -> None:
        """
        Delete a product together with its gallery rows and trending slots.
        """
        session.exec(delete(ProductImage).where(ProductImage.product_id == product.id))
        session.exec(
            delete(TrendingPerfume).where(TrendingPerfume.product_id == product.id)
        )
        session.delete(product)
        session.flush()

    # ----- Product images -----

    @gateway_call
    def list_images_for_products(
        self,
        session: Session,
        product_ids: list[uuid.UUID],
    ) -> list[ProductImage]:
        if not product_ids:
            return []
        stmt = (
            select(ProductImage)
            .where(col(ProductImage.product_id).in_(product_ids))
            .order_by(ProductImage.order_index)
        )
        return list(session.exec(stmt).all())

    @gateway_call
    def replace_images(
        self,
        session: Session,
        product_id: uuid.UUID,
        images: list[ProductImage],
    ) -> list[ProductImage]:
        """
        Swap the whole gallery of a product for `images` (not committed).
        """
        session.exec(delete(ProductImage).where(ProductImage.product_id == product_id))
        for image in images:
            session.add(image)
        session.flush()
        return images
