"""
Local image storage for post uploads.

Files land in the configured upload directory and are served statically
under /uploads.
"""
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from .config import get_settings
from .errors import ValidationError
from .logging_config import feed_logger

UPLOAD_URL_PREFIX = "/uploads"

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def upload_root() -> Path:
    path = Path(get_settings().upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def has_file(upload: Optional[UploadFile]) -> bool:
    """Browsers send an empty part with no filename when no file was picked."""
    return upload is not None and bool(upload.filename)


def save_image(upload: UploadFile, user_id: str) -> str:
    """
    Store an uploaded image and return the URL path it is served from.

    Raises:
        ValidationError: wrong content type, empty file, or file too large
    """
    max_bytes = get_settings().max_upload_bytes
    extension = ALLOWED_IMAGE_TYPES.get((upload.content_type or "").lower())
    if extension is None:
        raise ValidationError("Only image files are allowed (jpeg, png, gif, webp)")

    # at most one byte past the limit
    data = upload.file.read(max_bytes + 1)
    if not data:
        raise ValidationError("Uploaded image is empty")
    if len(data) > max_bytes:
        raise ValidationError(f"Image exceeds {max_bytes // (1024 * 1024)}MB limit")

    filename = f"{user_id}-{uuid.uuid4().hex}{extension}"
    (upload_root() / filename).write_bytes(data)

    feed_logger.info("Image stored", filename=filename, size=len(data))
    return f"{UPLOAD_URL_PREFIX}/{filename}"


def delete_image(url: str) -> None:
    """Remove a stored image by the URL path save_image returned."""
    name = url.rsplit("/", 1)[-1]
    (upload_root() / name).unlink(missing_ok=True)
    feed_logger.info("Image removed", filename=name)
