# storefront/core/local_storage.py
"""
Key-value backends for client-side state (the shopping cart).

The cart never lives on the server: over HTTP its serialized form
travels in a cookie, `MemoryStorage` covers scripts and tests.
"""
import base64
import binascii
import logging
from typing import Mapping, Protocol

from fastapi import Response

from storefront.core.errors import StorageQuotaError

logger = logging.getLogger(__name__)

# Browsers drop Set-Cookie headers over 4096 bytes; part of that goes to
# the Max-Age, Path, SameSite and HttpOnly attributes.
MAX_COOKIE_BYTES = 4096
COOKIE_ATTRIBUTES_ALLOWANCE = 100


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage, shared by reference with its creator."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data = data if data is not None else {}

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.data[key] = value


class CookieStorage:
    """
    Storage over the request/response cookie pair.

    Values are unpadded base64url so arbitrary JSON survives cookie
    quoting. Writes go straight onto the outgoing response and are
    visible to later reads in the same request.

    A value that would not fit in one cookie raises StorageQuotaError
    and nothing is written.
    """

    def __init__(
        self,
        cookies: Mapping[str, str],
        response: Response,
        max_age: int,
    ):
        self._cookies = dict(cookies)
        self._response = response
        self._max_age = max_age

    def get_item(self, key: str) -> str | None:
        raw = self._cookies.get(key)
        if raw is None:
            return None
        try:
            padded = raw + "=" * (-len(raw) % 4)
            return base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
        except (binascii.Error, UnicodeError, ValueError) as e:
            # Undecodable cookie: hand back the raw text, the reader
            # treats it as a corrupt payload.
            logger.warning("Cookie %s is not valid base64: %s", key, e)
            return raw

    def set_item(self, key: str, value: str) -> None:
        encoded = (
            base64.urlsafe_b64encode(value.encode("utf-8")).decode("ascii").rstrip("=")
        )
        size = len(key) + 1 + len(encoded)
        limit = MAX_COOKIE_BYTES - COOKIE_ATTRIBUTES_ALLOWANCE
        if size > limit:
            raise StorageQuotaError(key, size, limit)
        self._cookies[key] = encoded
        self._response.set_cookie(
            key,
            encoded,
            max_age=self._max_age,
            httponly=True,
            samesite="lax",
        )
