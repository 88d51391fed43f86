from __future__ import annotations

import logging
import mimetypes
import re
import time
from typing import Optional

from django.conf import settings
from django.core.files.storage import Storage, default_storage
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {"image/png", "image/jpeg", "image/webp"}
IMAGE_PREFIX = "locations"

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
_QUOTES = "\"'"


class ImageUploadError(ValueError):
    """Raised when an uploaded location image is rejected."""


def public_image_url(path: Optional[str], storage: Optional[Storage] = None) -> str:
    """Resolve a stored image path to a URL a browser can fetch."""
    if not path:
        return ""

    safe_path = str(path).strip()
    if safe_path[:1] in _QUOTES:
        safe_path = safe_path[1:]
    if safe_path[-1:] in _QUOTES:
        safe_path = safe_path[:-1]
    if not safe_path:
        return ""

    if _ABSOLUTE_URL.match(safe_path) or safe_path.startswith("/"):
        return safe_path

    storage = storage or default_storage
    return storage.url(safe_path)


def slugify_name(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", (value or "").lower()).strip("-")
    return slug[:60]


def build_image_path(name: str, filename: str, *, timestamp_ms: Optional[int] = None) -> str:
    extension = filename.rsplit(".", 1)[-1].lower() if "." in (filename or "") else ""
    base_name = slugify_name(name or "location") or "location"
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{IMAGE_PREFIX}/{base_name}-{timestamp_ms}.{extension or 'jpg'}"


def store_location_image(upload, *, name: str = "", storage: Optional[Storage] = None) -> str:
    """Validate ``upload`` and save it under ``locations/``; returns the stored path."""
    max_bytes = settings.LOCATION_IMAGE_MAX_BYTES
    if upload.size > max_bytes:
        raise ImageUploadError(f"Image must be {max_bytes // (1024 * 1024)} MB or smaller.")

    content_type = getattr(upload, "content_type", None) or mimetypes.guess_type(upload.name)[0]
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ImageUploadError("Unsupported file type. Upload PNG, JPEG, or WebP.")

    try:
        with Image.open(upload) as image:
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ImageUploadError("Uploaded file is not a readable image.") from exc
    upload.seek(0)

    storage = storage or default_storage
    stored_path = storage.save(build_image_path(name, upload.name), upload)
    logger.info("Stored location image %s (%s bytes)", stored_path, upload.size)
    return stored_path
