"""
SightSharing Gallery: View Model
================================

What:  Pure projection of GalleryState into what the page shows.
How:   build_view(state) slices the current page of cards, decides which
       navigation buttons are visible, and prepares the detail panel and
       contribution modal. render.py turns the result into HTML.

Title size tiers (detail panel heading):
    name longer than 20 chars  → text-6xl
    11 to 20 chars             → text-7xl
    10 chars or fewer          → text-8xl
"""

from typing import List, Optional
from urllib.parse import quote

from pydantic import BaseModel

from sightsharing.gallery.state import GalleryState, Screen, find
from sightsharing.schemas.destination import DestinationResponse

PLACEHOLDER_IMAGE = "/images/placeholder.jpg"
SEARCH_URL = "https://www.google.com/search?q="
FORM_ROOT = "/gallery/destinations"


class CardView(BaseModel):
    id: int
    name: str
    image_url: str


class DetailView(BaseModel):
    id: int
    name: str
    title_class: str
    location: str
    description: str
    background_url: str
    more_info_url: str


class EditorView(BaseModel):
    """Contribution form. Plain HTML form posts; every action answers with a redirect."""
    mode: str  # "create" | "edit"
    action: str
    page: int = 1
    delete_action: Optional[str] = None
    destination_id: Optional[int] = None
    name: str = ""
    location: str = ""
    description: str = ""


class GalleryView(BaseModel):
    screen: Screen
    cards: List[CardView]
    page: int
    page_count: int
    show_previous: bool
    show_next: bool
    show_intro: bool
    detail: Optional[DetailView] = None
    editor: Optional[EditorView] = None
    background_url: Optional[str] = None
    error: Optional[str] = None
    notice: Optional[str] = None


def title_size_class(name: str) -> str:
    length = len(name)
    if length > 20:
        return "text-6xl"
    if length > 10:
        return "text-7xl"
    return "text-8xl"


def image_url(reference: Optional[str]) -> str:
    """Browser URL for a stored reference; placeholder when there is none."""
    if not reference:
        return PLACEHOLDER_IMAGE
    segments = reference.replace("\\", "/").strip("/").split("/")
    return "/" + "/".join(quote(segment) for segment in segments)


def more_info_url(destination: DestinationResponse) -> str:
    query = f"{destination.name or ''} {destination.location or ''}"
    return SEARCH_URL + quote(query, safe="-_.!~*'()")


def page_slice(state: GalleryState) -> List[DestinationResponse]:
    start = (state.page - 1) * state.page_size
    return list(state.destinations[start:start + state.page_size])


def _detail(destination: DestinationResponse) -> DetailView:
    name = destination.name or ""
    return DetailView(
        id=destination.id,
        name=name,
        title_class=title_size_class(name),
        location=destination.location or "",
        description=destination.description or "",
        background_url=image_url(destination.background_image),
        more_info_url=more_info_url(destination),
    )


def _editor(state: GalleryState) -> Optional[EditorView]:
    if not state.editor_open:
        return None
    editing = find(state.destinations, state.editing_id)
    if editing is None:
        return EditorView(mode="create", action=FORM_ROOT, page=state.page)
    return EditorView(
        mode="edit",
        action=f"{FORM_ROOT}/{editing.id}",
        page=state.page,
        delete_action=f"{FORM_ROOT}/{editing.id}/delete",
        destination_id=editing.id,
        name=editing.name or "",
        location=editing.location or "",
        description=editing.description or "",
    )


def build_view(state: GalleryState) -> GalleryView:
    """Project `state` into a GalleryView. Pure: same state, same view."""
    selected = state.selected if state.screen == Screen.DETAIL else None
    detail = _detail(selected) if selected is not None else None

    return GalleryView(
        screen=state.screen,
        cards=[
            CardView(id=d.id, name=d.name or "", image_url=image_url(d.gallery_image))
            for d in page_slice(state)
        ],
        page=state.page,
        page_count=state.page_count,
        show_previous=state.page > 1,
        show_next=state.page < state.page_count,
        show_intro=detail is None,
        detail=detail,
        editor=_editor(state),
        background_url=detail.background_url if detail else None,
        error=state.error,
        notice=state.notice,
    )
