# storefront/schemas/order.py
from sqlmodel import SQLModel


class WhatsAppOrderLink(SQLModel):
    """
    Pre-filled WhatsApp hand-off for an order.

    Nothing is recorded server-side; the client opens `url`.
    """

    message: str
    url: str
