# storefront/services/order_service.py
from typing import Any
from urllib.parse import quote

from storefront.schemas.cart import CartItem
from storefront.schemas.order import WhatsAppOrderLink

GREETING_SINGLE = "Hello! I'm interested in ordering this product:"
GREETING_CART = "Hello! I'm interested in ordering these products:"
CLOSING = "Please let me know about availability and delivery options."

# encodeURIComponent leaves these unescaped as well
_URI_SAFE = "!*'()"


def format_amount(value: float) -> str:
    """
    Thousands-separated amount with at most two decimals and no
    trailing zeros: 12500 -> '12,500', 99.5 -> '99.5'.
    """
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


class OrderService:
    """
    Builds the WhatsApp hand-off for orders.

    Orders placed this way are not stored: the customer confirms the
    pre-filled message in WhatsApp and the shop follows up there.
    """

    def __init__(self, whatsapp_number: str, currency_label: str = "KSH"):
        self.whatsapp_number = whatsapp_number
        self.currency_label = currency_label

    def _money(self, value: float) -> str:
        return f"{self.currency_label} {format_amount(value)}"

    def _line(self, title: str, price: float, quantity: int) -> list[str]:
        return [
            f"*{title}*",
            f"Price: {self._money(price)}",
            f"Quantity: {quantity}",
            f"Total: {self._money(price * quantity)}",
        ]

    def build_whatsapp_message(self, product: Any, quantity: int = 1) -> str:
        """
        Message for a single product from the detail page.

        `product` needs title, price and description attributes.
        """
        parts = [GREETING_SINGLE, ""]
        parts.extend(self._line(product.title, product.price, quantity))
        parts.append("")
        if product.description:
            parts.extend([product.description, ""])
        parts.append(CLOSING)
        return "\n".join(parts)

    def build_cart_whatsapp_message(self, items: list[CartItem]) -> str:
        """
        Message listing every cart line and the grand total.

        Lines without a product snapshot are priced at 0.
        """
        parts = [GREETING_CART, ""]
        grand_total = 0.0
        for item in items:
            title = item.product.title if item.product else str(item.product_id)
            price = item.product.price if item.product else 0.0
            grand_total += price * item.quantity
            parts.extend(self._line(title, price, item.quantity))
            parts.append("")
        parts.append(f"Grand Total: {self._money(grand_total)}")
        parts.append("")
        parts.append(CLOSING)
        return "\n".join(parts)

    def build_whatsapp_url(self, message: str) -> str:
        return f"https://wa.me/{self.whatsapp_number}?text={quote(message, safe=_URI_SAFE)}"

    def product_order_link(self, product: Any, quantity: int = 1) -> WhatsAppOrderLink:
        message = self.build_whatsapp_message(product, quantity)
        return WhatsAppOrderLink(message=message, url=self.build_whatsapp_url(message))

    def cart_order_link(self, items: list[CartItem]) -> WhatsAppOrderLink:
        message = self.build_cart_whatsapp_message(items)
        return WhatsAppOrderLink(message=message, url=self.build_whatsapp_url(message))
