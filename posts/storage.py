"""
Post image storage.

Images live in the default storage backend (S3 or local disk, see
config/storage.py) under POST_IMAGE_DIR, with a unique
``<timestamp>-<random>.<ext>`` name per upload.
"""
import logging
import os
import secrets
import time
from typing import Optional

from django.conf import settings
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile

from config.storage import is_s3_enabled

logger = logging.getLogger(__name__)


class ImageUploadError(Exception):
    """Raised when an image is rejected or cannot be stored."""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.status_code = status_code


def validate_image(file: Optional[UploadedFile]) -> Optional[str]:
    """
    Validate an uploaded post image.

    Returns:
        None when the file is acceptable, otherwise an error message.
    """
    if not file:
        return "No file provided"

    content_type = getattr(file, 'content_type', '') or ''
    if not content_type.startswith('image/'):
        return "File must be an image"

    max_size = settings.MAX_IMAGE_UPLOAD_SIZE
    if file.size > max_size:
        return f"File size must be less than {max_size // (1024 * 1024)}MB"

    return None


def unique_image_name(original_name: str) -> str:
    """post-images/1718000000000-k3j2h4g5f6d7s8.png"""
    extension = os.path.splitext(original_name or '')[1].lstrip('.').lower() or 'jpg'
    timestamp = int(time.time() * 1000)
    token = secrets.token_hex(7)
    return f"{settings.POST_IMAGE_DIR}/{timestamp}-{token}.{extension}"


def upload_image(file: UploadedFile) -> str:
    """
    Store an image and return its storage path.

    Raises:
        ImageUploadError: If validation fails (400) or the backend errors (500)
    """
    error = validate_image(file)
    if error:
        raise ImageUploadError(error)

    name = unique_image_name(file.name)
    try:
        path = default_storage.save(name, file)
    except Exception as exc:
        logger.exception("Failed to store image %s (s3=%s)", name, is_s3_enabled())
        raise ImageUploadError(f"Failed to upload image: {exc}", status_code=500) from exc

    logger.info("Stored post image %s (%d bytes)", path, file.size)
    return path


def image_url(path: str) -> str:
    return default_storage.url(path)


def is_post_image(path: Optional[str]) -> bool:
    """True for an existing object under the post image prefix."""
    if not path or '..' in path:
        return False
    if not path.startswith(f"{settings.POST_IMAGE_DIR}/"):
        return False
    return default_storage.exists(path)


def delete_image(path: Optional[str]) -> None:
    """Remove a stored image. Missing objects are ignored."""
    if not path:
        return
    try:
        default_storage.delete(path)
    except Exception:
        logger.warning("Could not delete image %s", path, exc_info=True)
