"""
SightSharing Backend: Destination Service (Business Logic Orchestrator)
=======================================================================

What:  The CRUD workflows for destinations: record store access combined
       with image ingestion and cleanup of replaced files.
How:   Composes DestinationRepository (SQL) and FileService (disk).
Who:   Called by route handlers and the CLI; calls repository and file service.

Orchestration Flow (PUT /destinations/{id}):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────────┐
    │  Read    │───▶│  Ingest new │───▶│  UPDATE row  │───▶│ Remove old   │
    │  row     │    │  images     │    │  (repository)│    │ image files  │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────────┘

File/database consistency:
    Files and rows are not written atomically. Update and delete commit the
    row change first and only then remove old files, so a stored path always
    names an existing file. A crash between the two leaves an orphaned file
    on disk, which is accepted and not recovered.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sightsharing.exceptions import DatabaseError, NotFoundError, ValidationError
from sightsharing.models.destination import Destination
from sightsharing.repositories.destination import DestinationRepository
from sightsharing.schemas.destination import (
    DestinationDeletedResponse,
    DestinationFields,
    DestinationResponse,
    DestinationSavedResponse,
    ImageUpload,
)
from sightsharing.services.file_service import FileService, file_service

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "location", "description")

# ORM attribute for each multipart image field
IMAGE_FIELDS = {
    "backgroundImage": "background_image",
    "galleryImage": "gallery_image",
}


class DestinationService:
    """
    Business logic layer for destination operations.

    Error Handling Strategy:
        Engine errors are wrapped in DatabaseError with the engine message
        kept in the context for the log. Image failures propagate as
        ImageProcessingError / FileStorageError. NotFoundError is raised
        for ids with no row.
    """

    def __init__(self, files: Optional[FileService] = None):
        self.files = files or file_service

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _ingest_images(self, images: Dict[str, Optional[ImageUpload]]) -> Dict[str, str]:
        """
        Ingest every present upload, one after another.

        Returns ORM attribute → stored reference for the images that were
        supplied. A failure on a later image leaves earlier ones in place.
        """
        stored: Dict[str, str] = {}
        for field, attribute in IMAGE_FIELDS.items():
            upload = images.get(field)
            if upload is None or not upload.is_present:
                continue
            stored[attribute] = await self.files.ingest(upload.filename, upload.content)
        return stored

    async def _load(self, db: AsyncSession, destination_id: int) -> Destination:
        try:
            destination = await DestinationRepository.get_by_id(db, destination_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching destination %s: %s", destination_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the destination.",
                context={"destination_id": destination_id, "error": str(e)},
            )
        if destination is None:
            raise NotFoundError(resource="destination", resource_id=str(destination_id))
        return destination

    # ── Read ──────────────────────────────────────────────────────────────

    async def list_destinations(self, db: AsyncSession) -> List[DestinationResponse]:
        try:
            rows = await DestinationRepository.list_all(db)
        except SQLAlchemyError as e:
            logger.error("Database error listing destinations: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve destinations.",
                context={"error": str(e)},
            )
        return [DestinationResponse.model_validate(row) for row in rows]

    async def get_destination(self, db: AsyncSession, destination_id: int) -> DestinationResponse:
        destination = await self._load(db, destination_id)
        return DestinationResponse.model_validate(destination)

    # ── Write ─────────────────────────────────────────────────────────────

    async def create_destination(
        self,
        db: AsyncSession,
        fields: DestinationFields,
        images: Dict[str, Optional[ImageUpload]],
    ) -> DestinationSavedResponse:
        """
        Create a destination from a multipart submission.

        Workflow Steps:
            1. Presence check on name, location, description
            2. Ingest background image, then gallery image (each optional)
            3. INSERT the row
            4. Return the new id

        Raises:
            ValidationError:      a required text field is missing or blank
            ImageProcessingError: an upload could not be re-encoded
            DatabaseError:        the INSERT failed
        """
        for name in REQUIRED_FIELDS:
            value = getattr(fields, name)
            if value is None or not value.strip():
                raise ValidationError(message=f"'{name}' is required", field=name)

        stored = await self._ingest_images(images)

        values = {**fields.supplied(), **stored}
        try:
            new_id = await DestinationRepository.insert(db, values)
        except SQLAlchemyError as e:
            logger.error("Failed to add destination: %s", str(e))
            raise DatabaseError(
                message="Failed to add destination to the database.",
                context={"error": str(e), "images": list(stored.values())},
            )

        logger.info("Destination %s created (%d image(s))", new_id, len(stored))
        return DestinationSavedResponse(id=new_id, message="Destination added successfully.")

    async def update_destination(
        self,
        db: AsyncSession,
        destination_id: int,
        fields: DestinationFields,
        images: Dict[str, Optional[ImageUpload]],
    ) -> DestinationSavedResponse:
        """
        Update any subset of a destination's fields.

        Workflow Steps:
            1. Read the existing row (prior image paths)
            2. Ingest newly supplied images
            3. UPDATE supplied text fields plus each replaced image column
            4. COMMIT
            5. Remove the files the new images replaced (best effort)

        An update without new images keeps the stored image paths.
        """
        existing = await self._load(db, destination_id)
        previous = {attribute: getattr(existing, attribute) for attribute in IMAGE_FIELDS.values()}

        stored = await self._ingest_images(images)

        values = {**fields.supplied(), **stored}
        try:
            await DestinationRepository.update(db, destination_id, values)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to update destination %s: %s", destination_id, str(e))
            raise DatabaseError(
                message="Failed to update destination in the database.",
                context={"destination_id": destination_id, "error": str(e)},
            )

        for attribute in stored:
            old_reference = previous.get(attribute)
            if old_reference and old_reference != stored[attribute]:
                await self.files.remove_image(old_reference)

        logger.info(
            "Destination %s updated (fields=%s)", destination_id, sorted(values.keys())
        )
        return DestinationSavedResponse(
            id=destination_id, message="Destination updated successfully."
        )

    async def delete_destination(
        self, db: AsyncSession, destination_id: int
    ) -> DestinationDeletedResponse:
        """Delete and commit the row, then remove both image files (if any)."""
        existing = await self._load(db, destination_id)
        references = (existing.background_image, existing.gallery_image)

        try:
            changes = await DestinationRepository.delete_by_id(db, destination_id)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to delete destination %s: %s", destination_id, str(e))
            raise DatabaseError(
                message="Failed to delete destination from the database.",
                context={"destination_id": destination_id, "error": str(e)},
            )

        for reference in references:
            await self.files.remove_image(reference)

        logger.info("Destination %s deleted (%d row(s))", destination_id, changes)
        return DestinationDeletedResponse(changes=changes)


# ── Singleton Instance ────────────────────────────────────────────────────
destination_service = DestinationService()
