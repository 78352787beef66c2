# storefront/core/errors.py


class GatewayError(Exception):
    """
    Raised when the hosted database rejects or fails a query.

    `message` carries the provider-defined error text so it can be logged.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UploadError(Exception):
    """Raised when object storage refuses an upload."""

    def __init__(self, path: str, message: str):
        super().__init__(f"Upload to '{path}' failed: {message}")
        self.path = path
        self.message = message


class StorageQuotaError(Exception):
    """Raised when a value is too large for its client-side storage slot."""

    def __init__(self, key: str, size: int, limit: int):
        super().__init__(f"Value for '{key}' is {size} bytes, limit is {limit}")
        self.key = key
        self.size = size
        self.limit = limit
