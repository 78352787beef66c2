# storefront/routers/products.py
import uuid

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Query,
    UploadFile,
    status,
)
from sqlmodel import Session

from storefront.core.auth import require_admin
from storefront.core.config import get_settings
from storefront.database import get_session
from storefront.repositories.brand_repo import BrandRepository
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.order import WhatsAppOrderLink
from storefront.schemas.product import (
    ImageUploadRead,
    ProductCreate,
    ProductDetail,
    ProductImageRead,
    ProductRead,
    ProductUpdate,
)
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

settings = get_settings()

service = ProductService(ProductRepository(), BrandRepository(), CategoryRepository())
order_service = OrderService(settings.WHATSAPP_NUMBER, settings.CURRENCY_LABEL)


# -------- Public endpoints --------


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    search: str | None = None,
    brand: str | None = None,
    category: str | None = None,
):
    """
    List products, newest first.

    - `search` matches title, description, brand and category names.
    - `brand` / `category` take the slug used in storefront links,
      e.g. `/products?brand=dior`.
    """
    return service.list_products(session, search=search, brand=brand, category=category)


@router.get("/featured", response_model=list[ProductRead])
def list_featured_products(
    session: Session = Depends(get_session),
    limit: int = Query(default=5, ge=1, le=20),
):
    """
    Top-rated products for the home page slider.
    """
    return service.list_featured(session, limit=limit)


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Product detail with its display-ordered gallery.
    """
    return service.get_product_detail(
        session, product_id, placeholder_url=settings.PLACEHOLDER_IMAGE_URL
    )


@router.get("/{product_id}/whatsapp", response_model=WhatsAppOrderLink)
def get_whatsapp_order_link(
    product_id: uuid.UUID,
    quantity: int = Query(default=1, ge=1, le=10),
    session: Session = Depends(get_session),
):
    """
    Pre-filled WhatsApp message for ordering this product.
    """
    product = service.get_product(session, product_id)
    return order_service.product_order_link(product, quantity)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    """
    Create a new product (admin only), optionally with its gallery.
    """
    return service.create_product(session, payload)


@router.patch(
    "/{product_id}",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Update an existing product (admin only).

    Sending `images` replaces the whole gallery.
    """
    return service.update_product(session, product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a product and its gallery (admin only).
    """
    service.delete_product(session, product_id)
    return None


@router.post(
    "/images",
    response_model=ImageUploadRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Upload a single product image",
)
def upload_image(file: UploadFile = File(...)):
    """
    Upload one image and return its public URL (legacy `image_url`).
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )
    url = service.upload_image(file.content_type, file.file.read())
    return ImageUploadRead(image_url=url)


@router.post(
    "/images/gallery",
    response_model=list[ProductImageRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Upload several gallery images",
)
def upload_gallery_images(files: list[UploadFile] = File(...)):
    """
    Upload images for the product form.

    - Accepts JPEG, PNG, WEBP, GIF.
    - Returns unsaved gallery entries; send them back as `images` when
      creating or updating the product.
    """
    if not files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No files uploaded",
        )

    payload: list[tuple[str, bytes]] = []
    for f in files:
        if not f.content_type:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing content-type for one of the uploaded files",
            )
        payload.append((f.content_type, f.file.read()))

    return service.upload_gallery_drafts(payload)
