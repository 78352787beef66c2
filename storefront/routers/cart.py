# storefront/routers/cart.py
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlmodel import Session

from storefront.core.config import get_settings
from storefront.core.errors import StorageQuotaError
from storefront.core.local_storage import CookieStorage
from storefront.database import get_session
from storefront.repositories.brand_repo import BrandRepository
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import CartItemAdd, CartItemUpdate, CartSummary
from storefront.schemas.order import WhatsAppOrderLink
from storefront.services.cart_service import CartStore
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["Cart"])

settings = get_settings()

product_service = ProductService(
    ProductRepository(), BrandRepository(), CategoryRepository()
)
order_service = OrderService(settings.WHATSAPP_NUMBER, settings.CURRENCY_LABEL)


def get_cart_store(
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
) -> CartStore:
    """
    Cart for the current client, read from and written back to its cookie.

    The server keeps no cart state between requests. The cookie holds
    ids, quantities and prices; titles and images are read from the
    catalog.
    """
    storage = CookieStorage(
        request.cookies,
        response,
        max_age=settings.CART_COOKIE_MAX_AGE,
    )
    cart = CartStore(storage, key=settings.CART_COOKIE_NAME)
    product_ids = [item.product_id for item in cart.items]
    if product_ids:
        cart.attach_product_details(
            product_service.get_products_by_ids(session, product_ids)
        )
    return cart


def _cart_full(e: StorageQuotaError) -> HTTPException:
    logger.warning("Cart cookie too large: %s", e)
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Cart is full, remove items or place the order first",
    )


@router.get("", response_model=CartSummary)
def get_cart(cart: CartStore = Depends(get_cart_store)):
    """
    Current cart with item count and total price.
    """
    return cart.summary()


@router.post("/items", response_model=CartSummary)
def add_to_cart(
    payload: CartItemAdd,
    cart: CartStore = Depends(get_cart_store),
    session: Session = Depends(get_session),
):
    """
    Add a product to the cart, merging with an existing line.

    The product's price at this moment is the price the cart keeps.
    """
    product = product_service.get_product(session, payload.product_id)
    try:
        cart.add_to_cart(product, payload.quantity)
    except StorageQuotaError as e:
        raise _cart_full(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return cart.summary()


@router.patch("/items/{product_id}", response_model=CartSummary)
def update_cart_item(
    product_id: uuid.UUID,
    payload: CartItemUpdate,
    cart: CartStore = Depends(get_cart_store),
):
    """
    Set the quantity of a cart line; 0 or less removes it.
    """
    try:
        cart.update_quantity(product_id, payload.quantity)
    except StorageQuotaError as e:
        raise _cart_full(e)
    return cart.summary()


@router.delete("/items/{product_id}", response_model=CartSummary)
def remove_cart_item(
    product_id: uuid.UUID,
    cart: CartStore = Depends(get_cart_store),
):
    """
    Remove a product from the cart (no-op if absent).
    """
    cart.remove_from_cart(product_id)
    return cart.summary()


@router.delete("", response_model=CartSummary)
def clear_cart(cart: CartStore = Depends(get_cart_store)):
    """
    Clear the entire cart.
    """
    cart.clear_cart()
    return cart.summary()


@router.get("/whatsapp", response_model=WhatsAppOrderLink)
def get_cart_whatsapp_link(cart: CartStore = Depends(get_cart_store)):
    """
    Pre-filled WhatsApp message for the whole cart.
    """
    items = cart.items
    if not items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cart is empty",
        )
    return order_service.cart_order_link(items)
