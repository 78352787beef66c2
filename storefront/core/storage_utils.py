# storefront/core/storage_utils.py
import logging
import uuid

from storefront.core.config import get_settings
from storefront.core.errors import UploadError
from storefront.core.supabase_client import supabase_admin

logger = logging.getLogger(__name__)

PRODUCT_IMAGES_PREFIX = "products"


def _bucket():
    return supabase_admin().storage.from_(get_settings().STORAGE_BUCKET)


def upload_to_storage(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upload raw bytes to Supabase Storage and return a public URL.

    Args:
        path: Full object path inside the bucket.
              Example: "products/<uuid>.png"
        file_bytes: File content in bytes.
        content_type: MIME type stored with the object.

    Returns:
        Public URL to the uploaded file.

    Raises:
        UploadError: if the storage service rejects the upload.
    """
    try:
        bucket = _bucket()
        bucket.upload(path, file_bytes, {"content-type": content_type})
    except Exception as e:
        logger.error("Error uploading image to %s: %s", path, e)
        raise UploadError(path, str(e)) from e
    return bucket.get_public_url(path)


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "<uuid4>.png"
    """
    return f"{uuid.uuid4()}.{ext}"


def product_image_path(ext: str) -> str:
    """Object path for a newly uploaded product image."""
    return f"{PRODUCT_IMAGES_PREFIX}/{generate_filename(ext)}"
