"""
SightSharing Backend: Gallery Page Routes
=========================================

What:  GET / renders the gallery page on the server; the contribution form
       posts to /gallery/destinations and is answered with a redirect.
How:   GET loads all destinations, replays the query parameters as gallery
       actions through the reducer, then renders the resulting view. Form
       handlers call DestinationService and redirect (303) back to the page
       the form was opened on, carrying a status or an error message.

Query parameters (GET /):
    page         1-based gallery page (clamped to the available pages)
    destination  id shown in the detail panel
    editor       "new" opens the add form; "edit" edits `destination`
    status       "submitted" or "deleted" after a successful form post
    error        message of a failed form post

Form Flow:
    contribution form ──POST──▶ /gallery/destinations[/{id}[/delete]]
                     ──303───▶ /?page=N&status=submitted (or &error=...)
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from sightsharing.database import get_db_session
from sightsharing.exceptions import SightSharingError
from sightsharing.gallery.render import render_page
from sightsharing.gallery.state import (
    DELETED_NOTICE,
    SUBMITTED_NOTICE,
    DestinationsLoaded,
    GalleryState,
    GoToPage,
    OpenEditor,
    RequestFailed,
    SelectDestination,
    SubmissionSucceeded,
    reduce,
)
from sightsharing.gallery.view import build_view
from sightsharing.routes.destinations import read_images
from sightsharing.schemas.destination import DestinationFields
from sightsharing.services.destination_service import destination_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Gallery"])

NOTICES = {
    "submitted": SUBMITTED_NOTICE,
    "deleted": DELETED_NOTICE,
}


def _back_to_gallery(page: int, **params) -> RedirectResponse:
    query = {"page": page, **{key: value for key, value in params.items() if value is not None}}
    return RedirectResponse(url="/?" + urlencode(query), status_code=303)


async def _form_failed(db: AsyncSession, page: int, exc: SightSharingError) -> RedirectResponse:
    await db.rollback()
    logger.warning("Gallery form rejected: %s | Context: %s", exc.message, exc.context)
    return _back_to_gallery(page, error=exc.message)


@router.get("/", response_class=HTMLResponse, summary="Gallery page")
async def gallery_page(
    page: int = Query(default=1, description="Gallery page (1-based)"),
    destination: Optional[int] = Query(default=None, description="Destination shown in detail"),
    editor: Optional[str] = Query(default=None, description="'new' or 'edit'"),
    status: Optional[str] = Query(default=None, description="'submitted' or 'deleted'"),
    error: Optional[str] = Query(default=None, description="Message of a failed form post"),
    db: AsyncSession = Depends(get_db_session),
) -> HTMLResponse:
    destinations = tuple(await destination_service.list_destinations(db))

    state = reduce(GalleryState(), DestinationsLoaded(destinations=destinations))
    state = reduce(state, GoToPage(page=page))
    if status in NOTICES:
        state = reduce(state, SubmissionSucceeded(destinations=destinations, notice=NOTICES[status]))
    if error:
        state = reduce(state, RequestFailed(message=error))
    if destination is not None:
        state = reduce(state, SelectDestination(destination_id=destination))
    if editor == "new":
        state = reduce(state, OpenEditor())
    elif editor == "edit" and destination is not None:
        state = reduce(state, OpenEditor(destination_id=destination))

    return HTMLResponse(render_page(build_view(state)))


# ══════════════════════════════════════════════════════════════════════════
# Contribution Form Handlers
# ══════════════════════════════════════════════════════════════════════════


@router.post("/gallery/destinations", summary="Add a destination from the gallery form")
async def submit_new_destination(
    page: int = Form(default=1),
    name: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    background_image: Optional[UploadFile] = File(default=None, alias="backgroundImage"),
    gallery_image: Optional[UploadFile] = File(default=None, alias="galleryImage"),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    images = await read_images(background_image, gallery_image)
    try:
        await destination_service.create_destination(
            db,
            DestinationFields(name=name, location=location, description=description),
            images,
        )
    except SightSharingError as e:
        return await _form_failed(db, page, e)
    return _back_to_gallery(page, status="submitted")


@router.post("/gallery/destinations/{destination_id}", summary="Save the gallery edit form")
async def submit_destination_edit(
    destination_id: int,
    page: int = Form(default=1),
    name: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    background_image: Optional[UploadFile] = File(default=None, alias="backgroundImage"),
    gallery_image: Optional[UploadFile] = File(default=None, alias="galleryImage"),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    # Browsers send empty text inputs as ""; an edit leaves those fields unchanged
    fields = DestinationFields(
        name=name or None,
        location=location or None,
        description=description or None,
    )
    images = await read_images(background_image, gallery_image)
    try:
        await destination_service.update_destination(db, destination_id, fields, images)
    except SightSharingError as e:
        return await _form_failed(db, page, e)
    return _back_to_gallery(page, status="submitted")


@router.post("/gallery/destinations/{destination_id}/delete", summary="Delete from the gallery form")
async def submit_destination_delete(
    destination_id: int,
    page: int = Form(default=1),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    try:
        await destination_service.delete_destination(db, destination_id)
    except SightSharingError as e:
        return await _form_failed(db, page, e)
    return _back_to_gallery(page, status="deleted")
