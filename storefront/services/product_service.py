# storefront/services/product_service.py
import logging
import uuid
from typing import Iterable

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.core.errors import GatewayError, UploadError
from storefront.core.storage_utils import product_image_path, upload_to_storage
from storefront.database import commit
from storefront.models.product import Brand, Category, Product, ProductImage
from storefront.repositories.brand_repo import BrandRepository
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.brand import BrandSummary
from storefront.schemas.category import CategorySummary
from storefront.schemas.product import (
    ProductCreate,
    ProductDetail,
    ProductImageIn,
    ProductImageRead,
    ProductRead,
    ProductUpdate,
)
from storefront.services.gallery import order_product_images, primary_image_url

logger = logging.getLogger(__name__)


# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def slugify(name: str) -> str:
    """URL slug used by /brand/<slug> and /category/<slug> links."""
    return "-".join(name.strip().lower().split())


def filter_products(
    products: Iterable[ProductRead],
    search: str | None = None,
    brand: str | None = None,
    category: str | None = None,
) -> list[ProductRead]:
    """
    Storefront filtering.

    - search: case-insensitive substring of title, description, brand
      name or category name
    - brand / category: slug of the brand / category name
    """
    needle = search.strip().lower() if search else ""
    brand_slug = slugify(brand) if brand else None
    category_slug = slugify(category) if category else None

    result: list[ProductRead] = []
    for p in products:
        if brand_slug and (p.brand is None or slugify(p.brand.name) != brand_slug):
            continue
        if category_slug and (
            p.category is None or slugify(p.category.name) != category_slug
        ):
            continue
        if needle:
            haystacks = [p.title, p.description or ""]
            if p.brand is not None:
                haystacks.append(p.brand.name)
            if p.category is not None:
                haystacks.append(p.category.name)
            if not any(needle in h.lower() for h in haystacks):
                continue
        result.append(p)
    return result


class ProductService:
    """
    Business logic for Product & ProductImage.

    Responsibilities:
      - storefront listing, search and detail (reads degrade to empty/404)
      - admin CRUD, saving a product and its gallery atomically
      - image upload orchestration with Supabase Storage
    """

    def __init__(
        self,
        repo: ProductRepository,
        brand_repo: BrandRepository,
        category_repo: CategoryRepository,
    ):
        self.repo = repo
        self.brand_repo = brand_repo
        self.category_repo = category_repo

    # ----- Helpers -----

    @staticmethod
    def _to_read(
        product: Product,
        brand: Brand | None,
        category: Category | None,
        images: list[ProductImage] | None = None,
    ) -> ProductRead:
        return ProductRead(
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
            product_images=[
                ProductImageRead.model_validate(img, from_attributes=True)
                for img in images or []
            ],
        )

    def _attach_images(self, session: Session, rows) -> list[ProductRead]:
        images = self.repo.list_images_for_products(
            session, [product.id for product, _, _ in rows]
        )
        by_product: dict[uuid.UUID, list[ProductImage]] = {}
        for img in images:
            by_product.setdefault(img.product_id, []).append(img)
        return [
            self._to_read(product, brand, category, by_product.get(product.id))
            for product, brand, category in rows
        ]

    @staticmethod
    def _build_image_rows(
        product_id: uuid.UUID,
        images: list[ProductImageIn],
    ) -> list[ProductImage]:
        """
        Rows for a submitted gallery: order_index is the list position and
        the first image becomes primary when none is flagged.
        """
        has_primary = any(img.is_primary for img in images)
        return [
            ProductImage(
                product_id=product_id,
                image_url=img.image_url,
                is_primary=img.is_primary or (not has_primary and idx == 0),
                order_index=idx,
            )
            for idx, img in enumerate(images)
        ]

    def _check_references(
        self,
        session: Session,
        brand_id: uuid.UUID | None,
        category_id: uuid.UUID | None,
    ) -> None:
        if brand_id is not None and self.brand_repo.get_by_id(session, brand_id) is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Brand not found",
            )
        if (
            category_id is not None
            and self.category_repo.get_by_id(session, category_id) is None
        ):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category not found",
            )

    @staticmethod
    def _validate_and_get_ext(content_type: str, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported image type. Allowed: JPEG, PNG, WEBP, GIF.",
            )

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Image too large (max 5MB).",
            )

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    def _save_failed(self, e: GatewayError) -> HTTPException:
        logger.error("Error saving product: %s", e.message)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error saving product",
        )

    # ----- Storefront reads -----

    def list_products(
        self,
        session: Session,
        search: str | None = None,
        brand: str | None = None,
        category: str | None = None,
    ) -> list[ProductRead]:
        """
        Newest-first catalog, optionally filtered.
        A data store failure yields an empty list.
        """
        try:
            rows = self.repo.list_newest(session)
            products = self._attach_images(session, rows)
        except GatewayError as e:
            logger.error("Error fetching products: %s", e.message)
            return []
        return filter_products(products, search=search, brand=brand, category=category)

    def list_featured(self, session: Session, limit: int = 5) -> list[ProductRead]:
        """Top-rated products for the hero slider."""
        try:
            rows = self.repo.list_top_rated(session, limit=limit)
            return self._attach_images(session, rows)
        except GatewayError as e:
            logger.error("Error fetching featured products: %s", e.message)
            return []

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        try:
            product = self.repo.get_by_id(session, product_id)
        except GatewayError as e:
            logger.error("Error fetching product %s: %s", product_id, e.message)
            product = None
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def get_products_by_ids(
        self,
        session: Session,
        product_ids: list[uuid.UUID],
    ) -> dict[uuid.UUID, Product]:
        """Catalog rows keyed by id; missing ids are left out."""
        try:
            products = self.repo.list_by_ids(session, product_ids)
        except GatewayError as e:
            logger.error("Error fetching products for cart: %s", e.message)
            return {}
        return {product.id: product for product in products}

    def get_product_read(self, session: Session, product_id: uuid.UUID) -> ProductRead:
        try:
            row = self.repo.get_with_relations(session, product_id)
            if row is not None:
                return self._attach_images(session, [row])[0]
        except GatewayError as e:
            logger.error("Error fetching product %s: %s", product_id, e.message)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    def get_product_detail(
        self,
        session: Session,
        product_id: uuid.UUID,
        placeholder_url: str,
    ) -> ProductDetail:
        """
        Product with its display-ordered gallery.
        """
        product = self.get_product_read(session, product_id)
        gallery = order_product_images(
            product.product_images,
            legacy_image_url=product.image_url,
            product_id=product.id,
        )
        return ProductDetail(
            **product.model_dump(exclude={"brand", "category", "product_images"}),
            brand=product.brand,
            category=product.category,
            product_images=product.product_images,
            gallery=gallery,
            primary_image_url=primary_image_url(gallery, placeholder_url),
        )

    # ----- Admin writes -----

    def create_product(self, session: Session, payload: ProductCreate) -> ProductRead:
        """
        Insert a product and, when given, its gallery in one transaction.
        """
        product = Product(**payload.model_dump(exclude={"images"}))
        try:
            self._check_references(session, payload.brand_id, payload.category_id)
            self.repo.add(session, product)
            if payload.images is not None:
                self.repo.replace_images(
                    session, product.id, self._build_image_rows(product.id, payload.images)
                )
            commit(session)
        except GatewayError as e:
            raise self._save_failed(e) from e

        return self.get_product_read(session, product.id)

    def update_product(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ProductUpdate,
    ) -> ProductRead:
        """
        Partial update; `images` (if sent) replaces the gallery in the
        same transaction as the field changes.
        """
        product = self.get_product(session, product_id)
        changes = payload.model_dump(exclude_unset=True, exclude={"images"})
        try:
            self._check_references(
                session, changes.get("brand_id"), changes.get("category_id")
            )
            for field, value in changes.items():
                setattr(product, field, value)

            self.repo.add(session, product)
            if payload.images is not None:
                self.repo.replace_images(
                    session, product.id, self._build_image_rows(product.id, payload.images)
                )
            commit(session)
        except GatewayError as e:
            raise self._save_failed(e) from e

        return self.get_product_read(session, product.id)

    def delete_product(self, session: Session, product_id: uuid.UUID) -> None:
        """
        Delete a product with its gallery rows and trending slots.
        Stored image files are left in the bucket.
        """
        product = self.get_product(session, product_id)
        try:
            self.repo.delete(session, product)
            commit(session)
        except GatewayError as e:
            logger.error("Error deleting product %s: %s", product_id, e.message)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error deleting product",
            )

    # ----- Image uploads -----

    def upload_image(self, content_type: str, file_bytes: bytes) -> str:
        """
        Upload one image under a random name and return its public URL.
        """
        ext = self._validate_and_get_ext(content_type, file_bytes)
        try:
            return upload_to_storage(product_image_path(ext), file_bytes, content_type)
        except UploadError:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Error uploading image",
            )

    def upload_gallery_drafts(
        self,
        files: Iterable[tuple[str, bytes]],
    ) -> list[ProductImageRead]:
        """
        Upload several images for the product form.

        Args:
            files: iterable of (content_type, file_bytes)

        Returns:
            Unsaved gallery entries; the first is primary, order_index is
            the upload position. They are stored with the product on save.
        """
        files = list(files)
        # Validate everything before the first upload
        for content_type, file_bytes in files:
            self._validate_and_get_ext(content_type, file_bytes)

        drafts: list[ProductImageRead] = []
        for idx, (content_type, file_bytes) in enumerate(files):
            url = self.upload_image(content_type, file_bytes)
            drafts.append(
                ProductImageRead(image_url=url, is_primary=idx == 0, order_index=idx)
            )
        return drafts
