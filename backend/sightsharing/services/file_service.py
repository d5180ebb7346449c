"""
SightSharing Backend: Image Ingestion Service
=============================================

What:  Accepts uploaded images, re-encodes them as JPEG, moves them into
       permanent storage, and removes stored images on replacement/deletion.
How:   Raw bytes land in <storage_root>/uploads/temp, Pillow re-encodes them
       into <storage_root>/uploads, and the temp file is deleted.
Who:   Called by DestinationService for create, update, and delete.

Ingestion Flow:
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────────┐
    │  Upload  │───▶│  Temp write  │───▶│  JPEG encode │───▶│  Temp delete │
    │  (bytes) │    │  (aiofiles)  │    │  (Pillow)    │    │  → "uploads/ │
    └──────────┘    └──────────────┘    └──────────────┘    │   <name>"    │
                                                            └──────────────┘

File naming:
    <creation timestamp in ms><original extension>, e.g. 1718000000123.png.
    The content is JPEG regardless of the extension kept in the name.
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Optional, Tuple

import aiofiles
import aiofiles.os
from PIL import Image, UnidentifiedImageError

from sightsharing.config import settings
from sightsharing.exceptions import FileStorageError, ImageProcessingError

logger = logging.getLogger(__name__)

# Reference prefix stored in the database; matches the /uploads static mount
UPLOADS_PREFIX = "uploads"

DEFAULT_EXTENSION = ".jpg"


class FileService:
    """
    Manages the lifecycle of destination images on disk.

    Directory Structure:
        storage/
        └── uploads/
            ├── temp/                 ← raw uploads, removed after encoding
            ├── 1718000000123.jpg
            └── 1718000000124.png     ← JPEG content, original extension
    """

    def __init__(self, storage_root: Optional[str] = None, quality: Optional[int] = None):
        """
        Args:
            storage_root: Override the default storage path (used in tests).
                          If None, uses settings.storage_root.
            quality:      JPEG quality; defaults to settings.jpeg_quality.
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.uploads_dir = self.storage_root / UPLOADS_PREFIX
        self.temp_dir = self.uploads_dir / "temp"
        self.quality = quality or settings.jpeg_quality
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        logger.info("FileService initialized with storage_root=%s", self.storage_root)

    # ── Naming ────────────────────────────────────────────────────────────

    @staticmethod
    def _extension_for(filename: str) -> str:
        return Path(filename).suffix.lower() or DEFAULT_EXTENSION

    def _generate_name(self, extension: str) -> str:
        """
        Millisecond timestamp plus extension, bumped until no temp or stored
        file has that name. Two uploads in one request never share a name.
        """
        stamp = int(time.time() * 1000)
        while True:
            name = f"{stamp}{extension}"
            if not (self.temp_dir / name).exists() and not (self.uploads_dir / name).exists():
                return name
            stamp += 1

    def resolve(self, reference: str) -> Path:
        """
        Map a stored reference to an absolute path.

        Relative references are resolved against the storage root and must
        stay inside it; absolute references are used as-is.
        """
        path = Path(reference)
        if path.is_absolute():
            return path
        resolved = (self.storage_root / path).resolve()
        if not resolved.is_relative_to(self.storage_root):
            raise FileStorageError(
                message="Invalid file path",
                context={"reference": reference},
            )
        return resolved

    # ── Ingestion ─────────────────────────────────────────────────────────

    async def _write_temp(self, content: bytes, extension: str) -> Tuple[Path, str]:
        """Write raw upload bytes into the temp directory. Returns (path, name)."""
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        while True:
            name = self._generate_name(extension)
            temp_path = self.temp_dir / name
            try:
                # "xb": another request may have claimed the same name meanwhile
                async with aiofiles.open(temp_path, "xb") as f:
                    await f.write(content)
                return temp_path, name
            except FileExistsError:
                continue
            except OSError as e:
                logger.error("Failed to write temp upload %s: %s", temp_path, str(e))
                raise FileStorageError(
                    message="Failed to save uploaded image. Please try again.",
                    context={"path": str(temp_path), "os_error": str(e)},
                )

    def _encode_jpeg(self, source: Path, target: Path) -> None:
        """Blocking Pillow work; run through asyncio.to_thread."""
        with Image.open(source) as image:
            if image.mode not in ("RGB", "L"):
                image = image.convert("RGB")
            image.save(target, format="JPEG", quality=self.quality)

    async def _discard_temp(self, temp_path: Path) -> None:
        try:
            await aiofiles.os.remove(temp_path)
            logger.debug("Temp file deleted: %s", temp_path.name)
        except OSError as e:
            logger.error("Error deleting temp file %s: %s", temp_path, str(e))

    async def ingest(self, filename: str, content: bytes) -> str:
        """
        Store one uploaded image and return its reference ("uploads/<name>").

        Raises:
            FileStorageError:     the temp file could not be written
            ImageProcessingError: Pillow could not decode or encode the image
        """
        extension = self._extension_for(filename)
        temp_path, name = await self._write_temp(content, extension)
        final_path = self.uploads_dir / name

        try:
            await asyncio.to_thread(self._encode_jpeg, temp_path, final_path)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            logger.error("Error during image processing of %s: %s", filename, str(e))
            await self._discard_temp(temp_path)
            raise ImageProcessingError(
                context={"filename": filename, "error": str(e)},
            )

        await self._discard_temp(temp_path)

        reference = f"{UPLOADS_PREFIX}/{name}"
        logger.info(
            "Image stored: %s (%d bytes uploaded, %d bytes stored)",
            reference,
            len(content),
            final_path.stat().st_size,
        )
        return reference

    # ── Removal ───────────────────────────────────────────────────────────

    async def remove_image(self, reference: Optional[str]) -> None:
        """
        Best-effort deletion of a stored image.

        A missing file is not an error (already removed, or never written).
        Any other failure is logged and swallowed: the database write that
        triggered the removal has already succeeded.
        """
        if not reference:
            return
        try:
            path = self.resolve(reference)
        except FileStorageError:
            logger.warning("Refusing to delete image outside storage root: %s", reference)
            return

        try:
            await aiofiles.os.remove(path)
            logger.info("Old image deleted: %s", reference)
        except FileNotFoundError:
            logger.debug("Image already gone: %s", reference)
        except OSError as e:
            logger.warning("Error deleting image %s: %s", reference, str(e))


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = FileService()
