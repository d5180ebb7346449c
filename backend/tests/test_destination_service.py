"""
SightSharing Backend: Destination Service Tests
===============================================

What:  CRUD workflows against a real (temporary) SQLite table and a
       temporary storage root.
How:   DestinationService is built with its own FileService so image files
       can be checked on disk; engine failures are simulated with a mock
       session or a patched repository.

What we test:
    ✅ Create with both images stores two distinct JPEG files
    ✅ Missing or blank text fields raise ValidationError
    ✅ Update without images keeps the stored paths
    ✅ Update with a new image removes the replaced file, only after commit
    ✅ Delete removes both files and the row; ids are never reused
    ✅ A failed second image leaves the first one on disk
    ✅ Engine errors surface as DatabaseError and leave files in place
"""

from unittest.mock import AsyncMock, patch

import pytest
from PIL import Image
from sqlalchemy.exc import OperationalError

from sightsharing.exceptions import (
    DatabaseError,
    ImageProcessingError,
    NotFoundError,
    ValidationError,
)
from sightsharing.schemas.destination import DestinationFields, ImageUpload
from sightsharing.services.destination_service import DestinationService
from sightsharing.services.file_service import FileService


@pytest.fixture
def files(temp_storage):
    return FileService(storage_root=temp_storage)


@pytest.fixture
def service(files):
    return DestinationService(files=files)


def _fields(name="Kyoto", location="Japan", description="Temples and gardens"):
    return DestinationFields(name=name, location=location, description=description)


def _images(background=None, gallery=None):
    return {
        "backgroundImage": ImageUpload(filename="bg.png", content=background) if background else None,
        "galleryImage": ImageUpload(filename="card.jpg", content=gallery) if gallery else None,
    }


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_with_both_images(self, service, files, db_session, png_bytes, jpeg_bytes):
        saved = await service.create_destination(
            db_session, _fields(), _images(png_bytes, jpeg_bytes)
        )
        assert saved.message == "Destination added successfully."

        destination = await service.get_destination(db_session, saved.id)
        assert destination.name == "Kyoto"
        assert destination.location == "Japan"
        assert destination.description == "Temples and gardens"
        assert destination.background_image != destination.gallery_image

        for reference in (destination.background_image, destination.gallery_image):
            assert reference.startswith("uploads/")
            with Image.open(files.resolve(reference)) as image:
                assert image.format == "JPEG"

    @pytest.mark.asyncio
    async def test_create_without_images_stores_nulls(self, service, db_session):
        saved = await service.create_destination(db_session, _fields(), _images())

        destination = await service.get_destination(db_session, saved.id)
        assert destination.background_image is None
        assert destination.gallery_image is None

    @pytest.mark.asyncio
    async def test_empty_upload_counts_as_absent(self, service, db_session):
        images = {
            "backgroundImage": ImageUpload(filename="", content=b""),
            "galleryImage": ImageUpload(filename="card.jpg", content=b""),
        }
        saved = await service.create_destination(db_session, _fields(), images)

        destination = await service.get_destination(db_session, saved.id)
        assert destination.background_image is None
        assert destination.gallery_image is None

    @pytest.mark.asyncio
    async def test_missing_field_raises_validation_error(self, service, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_destination(
                db_session, DestinationFields(name="Oslo", location="Norway"), _images()
            )
        assert exc_info.value.field == "description"

    @pytest.mark.asyncio
    async def test_blank_field_raises_validation_error(self, service, db_session):
        with pytest.raises(ValidationError):
            await service.create_destination(db_session, _fields(name="   "), _images())

    @pytest.mark.asyncio
    async def test_ids_increase(self, service, db_session):
        first = await service.create_destination(db_session, _fields(), _images())
        second = await service.create_destination(db_session, _fields(name="Nara"), _images())
        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_deleted_id_is_never_reused(self, service, db_session):
        await service.create_destination(db_session, _fields(name="Nara"), _images())
        highest = await service.create_destination(db_session, _fields(name="Osaka"), _images())
        await service.delete_destination(db_session, highest.id)

        following = await service.create_destination(db_session, _fields(name="Kobe"), _images())
        assert following.id > highest.id

    @pytest.mark.asyncio
    async def test_failed_gallery_image_keeps_background_file(
        self, service, files, db_session, png_bytes
    ):
        with pytest.raises(ImageProcessingError):
            await service.create_destination(
                db_session, _fields(), _images(png_bytes, b"not an image")
            )

        stored = [p for p in files.uploads_dir.iterdir() if p.is_file()]
        assert len(stored) == 1
        assert list(files.temp_dir.iterdir()) == []
        assert await service.list_destinations(db_session) == []


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_without_images_preserves_paths(
        self, service, db_session, png_bytes, jpeg_bytes
    ):
        saved = await service.create_destination(
            db_session, _fields(), _images(png_bytes, jpeg_bytes)
        )
        before = await service.get_destination(db_session, saved.id)

        result = await service.update_destination(
            db_session, saved.id, DestinationFields(name="Kyoto City"), _images()
        )
        assert result.message == "Destination updated successfully."
        assert result.id == saved.id

        after = await service.get_destination(db_session, saved.id)
        assert after.name == "Kyoto City"
        assert after.location == "Japan"
        assert after.background_image == before.background_image
        assert after.gallery_image == before.gallery_image

    @pytest.mark.asyncio
    async def test_new_background_replaces_and_removes_old_file(
        self, service, files, db_session, png_bytes, jpeg_bytes
    ):
        saved = await service.create_destination(
            db_session, _fields(), _images(png_bytes, jpeg_bytes)
        )
        before = await service.get_destination(db_session, saved.id)
        old_path = files.resolve(before.background_image)
        assert old_path.exists()

        await service.update_destination(
            db_session, saved.id, DestinationFields(), _images(background=jpeg_bytes)
        )

        after = await service.get_destination(db_session, saved.id)
        assert after.background_image != before.background_image
        assert files.resolve(after.background_image).exists()
        assert after.gallery_image == before.gallery_image
        assert not old_path.exists()

        # Removing the already-removed file again is a silent no-op
        await files.remove_image(before.background_image)

    @pytest.mark.asyncio
    async def test_new_gallery_image_replaces_only_gallery(
        self, service, files, db_session, png_bytes, jpeg_bytes
    ):
        saved = await service.create_destination(
            db_session, _fields(), _images(png_bytes, jpeg_bytes)
        )
        before = await service.get_destination(db_session, saved.id)

        await service.update_destination(
            db_session, saved.id, DestinationFields(), _images(gallery=png_bytes)
        )

        after = await service.get_destination(db_session, saved.id)
        assert after.gallery_image != before.gallery_image
        assert files.resolve(after.gallery_image).exists()
        assert not files.resolve(before.gallery_image).exists()
        assert after.background_image == before.background_image
        assert files.resolve(after.background_image).exists()

    @pytest.mark.asyncio
    async def test_stored_path_survives_rollback_after_update(
        self, service, files, db_session, png_bytes, jpeg_bytes
    ):
        saved = await service.create_destination(db_session, _fields(), _images(png_bytes))
        await db_session.commit()

        await service.update_destination(
            db_session, saved.id, DestinationFields(), _images(background=jpeg_bytes)
        )
        await db_session.rollback()

        current = await service.get_destination(db_session, saved.id)
        assert files.resolve(current.background_image).exists()

    @pytest.mark.asyncio
    async def test_failed_commit_keeps_old_file(
        self, service, files, db_session, png_bytes, jpeg_bytes
    ):
        saved = await service.create_destination(db_session, _fields(), _images(png_bytes))
        await db_session.commit()
        before = await service.get_destination(db_session, saved.id)

        failing_commit = AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error")))
        with patch.object(db_session, "commit", failing_commit):
            with pytest.raises(DatabaseError):
                await service.update_destination(
                    db_session, saved.id, DestinationFields(), _images(background=jpeg_bytes)
                )
        await db_session.rollback()

        current = await service.get_destination(db_session, saved.id)
        assert current.background_image == before.background_image
        assert files.resolve(current.background_image).exists()

    @pytest.mark.asyncio
    async def test_update_missing_destination_raises_not_found(self, service, db_session):
        with pytest.raises(NotFoundError):
            await service.update_destination(
                db_session, 404, DestinationFields(name="Nowhere"), _images()
            )


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_files_and_row(
        self, service, files, db_session, png_bytes, jpeg_bytes
    ):
        saved = await service.create_destination(
            db_session, _fields(), _images(png_bytes, jpeg_bytes)
        )
        destination = await service.get_destination(db_session, saved.id)
        paths = [
            files.resolve(destination.background_image),
            files.resolve(destination.gallery_image),
        ]

        result = await service.delete_destination(db_session, saved.id)
        assert result.changes == 1
        assert result.message == "Destination successfully deleted"
        assert not any(path.exists() for path in paths)

        with pytest.raises(NotFoundError):
            await service.get_destination(db_session, saved.id)

    @pytest.mark.asyncio
    async def test_delete_with_files_already_gone(self, service, files, db_session, png_bytes):
        saved = await service.create_destination(
            db_session, _fields(), _images(background=png_bytes)
        )
        destination = await service.get_destination(db_session, saved.id)
        files.resolve(destination.background_image).unlink()

        result = await service.delete_destination(db_session, saved.id)
        assert result.changes == 1

    @pytest.mark.asyncio
    async def test_delete_missing_destination_raises_not_found(self, service, db_session):
        with pytest.raises(NotFoundError):
            await service.delete_destination(db_session, 12345)


class TestDatabaseErrors:
    @pytest.mark.asyncio
    async def test_list_wraps_engine_errors(self, service, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("locked"))

        with pytest.raises(DatabaseError) as exc_info:
            await service.list_destinations(mock_db_session)
        assert "locked" in exc_info.value.context["error"]

    @pytest.mark.asyncio
    async def test_get_wraps_engine_errors(self, service, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(DatabaseError):
            await service.get_destination(mock_db_session, 1)

    @pytest.mark.asyncio
    async def test_create_wraps_insert_errors(self, service, db_session):
        with patch(
            "sightsharing.services.destination_service.DestinationRepository.insert",
            AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("readonly"))),
        ):
            with pytest.raises(DatabaseError) as exc_info:
                await service.create_destination(db_session, _fields(), _images())
        assert exc_info.value.message == "Failed to add destination to the database."

    @pytest.mark.asyncio
    async def test_update_wraps_update_errors(self, service, files, db_session, png_bytes, jpeg_bytes):
        saved = await service.create_destination(db_session, _fields(), _images(png_bytes))
        before = await service.get_destination(db_session, saved.id)

        with patch(
            "sightsharing.services.destination_service.DestinationRepository.update",
            AsyncMock(side_effect=OperationalError("UPDATE", {}, Exception("locked"))),
        ):
            with pytest.raises(DatabaseError):
                await service.update_destination(
                    db_session, saved.id, DestinationFields(), _images(background=jpeg_bytes)
                )
        assert files.resolve(before.background_image).exists()

    @pytest.mark.asyncio
    async def test_delete_wraps_errors_and_keeps_files(
        self, service, files, db_session, png_bytes, jpeg_bytes
    ):
        saved = await service.create_destination(
            db_session, _fields(), _images(png_bytes, jpeg_bytes)
        )
        destination = await service.get_destination(db_session, saved.id)

        with patch(
            "sightsharing.services.destination_service.DestinationRepository.delete_by_id",
            AsyncMock(side_effect=OperationalError("DELETE", {}, Exception("locked"))),
        ):
            with pytest.raises(DatabaseError):
                await service.delete_destination(db_session, saved.id)

        assert files.resolve(destination.background_image).exists()
        assert files.resolve(destination.gallery_image).exists()
