"""
Local media storage for meal images.
"""

import logging
import uuid
from pathlib import Path

from app.config import settings
from app.exceptions import ServiceValidationError

logger = logging.getLogger("honestmeals.storage")

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


class StorageService:
    @staticmethod
    def validate_image(content_type: str, size: int) -> str:
        """
        Check an upload before it is written.

        Returns:
            File extension for the content type

        Raises:
            ServiceValidationError: if the file is not an image or too large
        """
        extension = IMAGE_EXTENSIONS.get((content_type or "").lower())
        if extension is None:
            raise ServiceValidationError(
                "Please select an image file",
                details={"content_type": content_type},
            )
        if size <= 0:
            raise ServiceValidationError("Image file is empty")
        if size > settings.max_image_bytes:
            limit_mb = settings.max_image_bytes // (1024 * 1024)
            raise ServiceValidationError(
                f"Image size should be less than {limit_mb}MB",
                details={"size": size, "limit": settings.max_image_bytes},
            )
        return extension

    @staticmethod
    def save_meal_image(meal_id: uuid.UUID, content: bytes, content_type: str) -> str:
        """Write the image under media_root and return its public URL."""
        extension = StorageService.validate_image(content_type, len(content))
        relative = Path("meals") / str(meal_id) / f"{uuid.uuid4()}.{extension}"
        target = Path(settings.media_root) / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.info(f"image_stored meal_id={meal_id} path={relative} bytes={len(content)}")
        return f"{settings.media_url.rstrip('/')}/{relative.as_posix()}"

    @staticmethod
    def delete_by_url(url: str) -> bool:
        """Remove a previously stored file; URLs outside media_url are ignored."""
        prefix = settings.media_url.rstrip("/") + "/"
        if not url or not url.startswith(prefix):
            return False
        target = Path(settings.media_root) / url[len(prefix):]
        if target.is_file():
            target.unlink()
            logger.info(f"image_deleted path={target}")
            return True
        return False
