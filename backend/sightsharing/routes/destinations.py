"""
SightSharing Backend: Destination Route Handlers
================================================

What:  CRUD endpoints under /destinations.
How:   Extracts form fields and uploaded files, delegates to
       DestinationService, returns JSON.
Who:   Called by the gallery client (browser forms and DestinationsClient).

Request Flow (POST / PUT):
    1. Client sends multipart/form-data: name, location, description,
       optional backgroundImage and galleryImage files
    2. Uploaded parts are read into memory and closed
    3. DestinationService ingests images and writes the row
    4. 201 (POST) or 200 (PUT) with {id, message}
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from sightsharing.database import get_db_session
from sightsharing.schemas.destination import (
    DestinationDeletedResponse,
    DestinationFields,
    DestinationResponse,
    DestinationSavedResponse,
    ErrorResponse,
    ImageUpload,
)
from sightsharing.services.destination_service import destination_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/destinations", tags=["Destinations"])


async def _read_upload(upload: Optional[UploadFile]) -> Optional[ImageUpload]:
    """Read an UploadFile into memory and close it. None when no part was sent."""
    if upload is None:
        return None
    try:
        content = await upload.read()
    finally:
        await upload.close()
    return ImageUpload(filename=upload.filename or "", content=content)


async def read_images(
    background_image: Optional[UploadFile],
    gallery_image: Optional[UploadFile],
) -> Dict[str, Optional[ImageUpload]]:
    return {
        "backgroundImage": await _read_upload(background_image),
        "galleryImage": await _read_upload(gallery_image),
    }


@router.get(
    "",
    response_model=List[DestinationResponse],
    responses={500: {"description": "Storage failure", "model": ErrorResponse}},
    summary="List all destinations",
)
async def list_destinations(
    db: AsyncSession = Depends(get_db_session),
) -> List[DestinationResponse]:
    return await destination_service.list_destinations(db)


@router.get(
    "/{destination_id}",
    response_model=DestinationResponse,
    responses={
        404: {"description": "Destination not found", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Get a single destination by ID",
)
async def get_destination(
    destination_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> DestinationResponse:
    return await destination_service.get_destination(db, destination_id)


@router.post(
    "",
    status_code=201,
    response_model=DestinationSavedResponse,
    responses={
        400: {"description": "Missing text field", "model": ErrorResponse},
        500: {"description": "Image processing or storage failure", "model": ErrorResponse},
    },
    summary="Create a destination with optional images",
)
async def create_destination(
    name: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    background_image: Optional[UploadFile] = File(default=None, alias="backgroundImage"),
    gallery_image: Optional[UploadFile] = File(default=None, alias="galleryImage"),
    db: AsyncSession = Depends(get_db_session),
) -> DestinationSavedResponse:
    images = await read_images(background_image, gallery_image)
    logger.info(
        "Received create request: name=%s, images=%s",
        name,
        [field for field, upload in images.items() if upload and upload.is_present],
    )
    return await destination_service.create_destination(
        db,
        DestinationFields(name=name, location=location, description=description),
        images,
    )


@router.put(
    "/{destination_id}",
    response_model=DestinationSavedResponse,
    responses={
        404: {"description": "Destination not found", "model": ErrorResponse},
        500: {"description": "Image processing or storage failure", "model": ErrorResponse},
    },
    summary="Update any subset of a destination's fields",
)
async def update_destination(
    destination_id: int,
    name: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    background_image: Optional[UploadFile] = File(default=None, alias="backgroundImage"),
    gallery_image: Optional[UploadFile] = File(default=None, alias="galleryImage"),
    db: AsyncSession = Depends(get_db_session),
) -> DestinationSavedResponse:
    images = await read_images(background_image, gallery_image)
    return await destination_service.update_destination(
        db,
        destination_id,
        DestinationFields(name=name, location=location, description=description),
        images,
    )


@router.delete(
    "/{destination_id}",
    response_model=DestinationDeletedResponse,
    responses={
        404: {"description": "Destination not found", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Delete a destination and its images",
)
async def delete_destination(
    destination_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> DestinationDeletedResponse:
    return await destination_service.delete_destination(db, destination_id)
