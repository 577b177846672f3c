"""
Upload service for listing and area images.
Validates uploaded files, stores them under the upload directory and builds public URLs.
"""

import io
import uuid
from pathlib import Path
from typing import List, Optional
from PIL import Image, UnidentifiedImageError
import aiofiles
from fastapi import UploadFile

from app.config import get_settings
from app.utils.exceptions import FileUploadError
import logging

logger = logging.getLogger(__name__)

settings = get_settings()

PROPERTY_FOLDER = "properties"
AREA_FOLDER = "areas"

NOT_AN_IMAGE_MESSAGE = "Not an image! Please upload only images."


class UploadService:
    """Service for storing uploaded images on the local filesystem."""

    def __init__(self, upload_dir: Optional[str] = None, max_file_size: Optional[int] = None):
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.max_file_size = max_file_size or settings.max_file_size

    def validate_image_content(self, file: UploadFile, content: bytes) -> None:
        """
        Check the declared content type, the size and that the bytes decode as an image.

        Raises:
            FileUploadError: If any check fails
        """
        if not (file.content_type or "").startswith("image/"):
            raise FileUploadError(NOT_AN_IMAGE_MESSAGE)

        if len(content) > self.max_file_size:
            max_mb = self.max_file_size / (1024 * 1024)
            raise FileUploadError(f"File size exceeds maximum allowed size of {max_mb:.0f}MB")

        try:
            with Image.open(io.BytesIO(content)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
            raise FileUploadError(NOT_AN_IMAGE_MESSAGE)

    @staticmethod
    def generate_unique_filename(original_filename: Optional[str]) -> str:
        """
        Generate a unique filename while preserving the extension.
        """
        extension = Path(original_filename or "").suffix.lower()
        return f"{uuid.uuid4().hex}{extension}"

    async def save_images(
        self,
        files: List[UploadFile],
        folder: str,
        base_url: str,
        max_count: int
    ) -> List[str]:
        """
        Validate and store a batch of images.

        Every file is validated before anything is written, so a bad file
        leaves no partial batch on disk.

        Args:
            files: Uploaded files, in the order their URLs should be returned
            folder: Sub-directory under the upload directory
            base_url: Public base URL of the service, with trailing slash
            max_count: Maximum number of files accepted in one request

        Returns:
            Public URLs of the stored files

        Raises:
            FileUploadError: If there are too many files or any file is invalid
        """
        files = [f for f in files if f is not None and f.filename]
        if len(files) > max_count:
            raise FileUploadError(f"Too many files. Maximum is {max_count} images")

        contents = []
        for file in files:
            await file.seek(0)
            content = await file.read()
            self.validate_image_content(file, content)
            contents.append((file, content))

        target_dir = self.upload_dir / folder
        target_dir.mkdir(parents=True, exist_ok=True)

        urls = []
        for file, content in contents:
            filename = self.generate_unique_filename(file.filename)
            async with aiofiles.open(target_dir / filename, "wb") as f:
                await f.write(content)
            urls.append(f"{base_url.rstrip('/')}/uploads/{folder}/{filename}")
            logger.info(f"Stored upload {file.filename} as {folder}/{filename} ({len(content)} bytes)")

        return urls

    def remove_images(self, urls: List[str], folder: str) -> int:
        """
        Delete stored files by their public URLs.

        Used to undo a batch when the request that uploaded it fails.
        Only the file name of each URL is used, so nothing outside the folder is touched.

        Returns:
            Number of files removed
        """
        removed = 0
        for url in urls:
            file_path = self.upload_dir / folder / Path(url).name
            if file_path.is_file():
                file_path.unlink()
                removed += 1
        if removed:
            logger.info(f"Removed {removed} unused upload(s) from {folder}")
        return removed
