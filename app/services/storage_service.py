"""
Storage Service

Handles course image and lesson file uploads to Cloudinary.
"""

import logging
import re
from typing import BinaryIO, Optional, Tuple
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader

from app.core.config import settings

logger = logging.getLogger(__name__)

_VERSION_SEGMENT = re.compile(r"^v\d+$")


def parse_delivery_url(url: str) -> Optional[Tuple[str, str]]:
    """
    Extract (resource_type, public_id) from a Cloudinary delivery URL.

    The version segment is dropped. Image and video public ids exclude the
    file extension; raw public ids keep it.

    Args:
        url: e.g. https://res.cloudinary.com/demo/image/upload/v17/courses/abc.jpg

    Returns:
        Tuple of (resource_type, public_id), or None if the URL is not a
        Cloudinary upload URL.
    """
    if not url:
        return None

    segments = [s for s in urlparse(url).path.split("/") if s]
    if "upload" not in segments:
        return None

    upload_index = segments.index("upload")
    resource_type = segments[upload_index - 1] if upload_index > 0 else "image"
    rest = segments[upload_index + 1:]
    if rest and _VERSION_SEGMENT.match(rest[0]):
        rest = rest[1:]
    if not rest:
        return None

    public_id = "/".join(rest)
    if resource_type != "raw" and "." in rest[-1]:
        public_id = public_id.rsplit(".", 1)[0]
    return resource_type, public_id


class CloudinaryService:
    """
    Service for uploading and deleting files on Cloudinary.

    Course images go to the image folder with a fixed 800x600 fill crop;
    lesson files are uploaded as raw resources.
    """

    _configured: bool = False

    @classmethod
    def _configure(cls) -> None:
        """Configure Cloudinary with credentials from settings."""
        if cls._configured:
            return

        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )
        cls._configured = True

    @classmethod
    def upload_image(cls, file: BinaryIO, filename: str) -> str:
        """
        Upload a course image.

        Args:
            file: Binary stream of the image.
            filename: Original file name.

        Returns:
            The secure_url of the uploaded image.
        """
        cls._configure()
        file.seek(0)

        result = cloudinary.uploader.upload(
            file,
            folder=settings.CLOUDINARY_IMAGE_FOLDER,
            resource_type="image",
            filename=filename,
            transformation=[
                {"width": 800, "height": 600, "crop": "fill", "gravity": "auto"}
            ],
        )
        logger.info("image uploaded public_id=%s", result.get("public_id"))
        return result["secure_url"]

    @classmethod
    def upload_file(cls, file: BinaryIO, filename: str) -> str:
        """
        Upload a lesson file (PDF, document, media).

        Args:
            file: Binary stream of the file content.
            filename: Original file name; kept as the base of the public id.

        Returns:
            The secure_url of the uploaded file.
        """
        cls._configure()
        file.seek(0)

        result = cloudinary.uploader.upload(
            file,
            folder=settings.CLOUDINARY_FILE_FOLDER,
            resource_type="raw",
            filename=filename,
            use_filename=True,
            unique_filename=True,
        )
        logger.info("file uploaded public_id=%s", result.get("public_id"))
        return result["secure_url"]

    @classmethod
    def delete_file(cls, url: Optional[str]) -> bool:
        """
        Delete a previously uploaded file by its delivery URL.

        Empty or unrecognised URLs are skipped.

        Returns:
            True if Cloudinary reported the file as deleted.
        """
        parsed = parse_delivery_url(url or "")
        if parsed is None:
            logger.warning("skipping delete, no public id in url=%r", url)
            return False

        cls._configure()
        resource_type, public_id = parsed
        result = cloudinary.uploader.destroy(
            public_id,
            resource_type=resource_type,
            invalidate=True,
        )
        deleted = result.get("result") == "ok"
        if deleted:
            logger.info("file deleted public_id=%s", public_id)
        else:
            logger.warning("file delete failed public_id=%s result=%s", public_id, result.get("result"))
        return deleted
