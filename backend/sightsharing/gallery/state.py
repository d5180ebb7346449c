"""
SightSharing Gallery: View State and Reducer
============================================

What:  The explicit state of one gallery page and the pure function that
       advances it: reduce(state, action) → new state.
How:   GalleryState is a frozen Pydantic model; every action returns a copy
       via model_copy(update=...). Nothing here touches the network or HTML,
       so the whole page behavior is testable without a browser.
Who:   GallerySession (client.py) and the GET / route (routes/gallery.py).
"""

from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, Field

from sightsharing.config import settings
from sightsharing.schemas.destination import DestinationResponse

SUBMITTED_NOTICE = "Your contribution has been submitted!"
DELETED_NOTICE = "The destination has been deleted."


class Screen(str, Enum):
    INITIAL = "initial"
    LISTING = "listing"
    DETAIL = "detail"


class GalleryState(BaseModel):
    """
    Attributes:
        screen:        which panel is showing (editing is the overlay below)
        destinations:  last list fetched from GET /destinations
        page:          1-based gallery page, always within [1, page_count]
        page_size:     cards per page
        selected_id:   destination shown in the detail panel
        editor_open:   contribution modal visible
        editing_id:    destination being edited; None while adding a new one
        error:         message of the last failed request, shown to the user
        notice:        confirmation after a successful submission or deletion
    """
    screen: Screen = Screen.INITIAL
    destinations: Tuple[DestinationResponse, ...] = ()
    page: int = 1
    page_size: int = Field(default_factory=lambda: settings.gallery_page_size, ge=1)
    selected_id: Optional[int] = None
    editor_open: bool = False
    editing_id: Optional[int] = None
    error: Optional[str] = None
    notice: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def page_count(self) -> int:
        return page_count(len(self.destinations), self.page_size)

    @property
    def selected(self) -> Optional[DestinationResponse]:
        return find(self.destinations, self.selected_id)


# ══════════════════════════════════════════════════════════════════════════
# Actions
# ══════════════════════════════════════════════════════════════════════════


class DestinationsLoaded(BaseModel):
    destinations: Tuple[DestinationResponse, ...]


class NextPage(BaseModel):
    pass


class PreviousPage(BaseModel):
    pass


class GoToPage(BaseModel):
    page: int


class SelectDestination(BaseModel):
    destination_id: int


class ExploreRandom(BaseModel):
    """'Start exploring': show one destination. The caller draws the index."""
    index: int


class OpenEditor(BaseModel):
    """Open the contribution modal; destination_id=None means a new entry."""
    destination_id: Optional[int] = None


class CloseEditor(BaseModel):
    pass


class SubmissionSucceeded(BaseModel):
    """A create/update/delete went through; carries the re-fetched list."""
    destinations: Tuple[DestinationResponse, ...]
    notice: Optional[str] = SUBMITTED_NOTICE


class RequestFailed(BaseModel):
    message: str


Action = Union[
    DestinationsLoaded,
    NextPage,
    PreviousPage,
    GoToPage,
    SelectDestination,
    ExploreRandom,
    OpenEditor,
    CloseEditor,
    SubmissionSucceeded,
    RequestFailed,
]


# ══════════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════════


def page_count(total: int, page_size: int) -> int:
    """Number of gallery pages; an empty gallery still has one (empty) page."""
    return max(1, -(-total // page_size))


def clamp_page(page: int, total: int, page_size: int) -> int:
    return min(max(page, 1), page_count(total, page_size))


def find(
    destinations: Tuple[DestinationResponse, ...], destination_id: Optional[int]
) -> Optional[DestinationResponse]:
    if destination_id is None:
        return None
    for destination in destinations:
        if destination.id == destination_id:
            return destination
    return None


def _with_destinations(
    state: GalleryState, destinations: Tuple[DestinationResponse, ...]
) -> dict:
    """Fields to update when a fresh list arrives: page clamped, stale selection dropped."""
    update = {
        "destinations": tuple(destinations),
        "page": clamp_page(state.page, len(destinations), state.page_size),
        "error": None,
        "notice": None,
    }
    if state.selected_id is not None and find(destinations, state.selected_id) is None:
        update["selected_id"] = None
        if state.screen == Screen.DETAIL:
            update["screen"] = Screen.LISTING
    if state.screen == Screen.INITIAL:
        update["screen"] = Screen.LISTING
    return update


# ══════════════════════════════════════════════════════════════════════════
# Reducer
# ══════════════════════════════════════════════════════════════════════════


def reduce(state: GalleryState, action: Action) -> GalleryState:
    """Return the state that follows `action`. Never mutates `state`."""
    total = len(state.destinations)

    if isinstance(action, DestinationsLoaded):
        return state.model_copy(update=_with_destinations(state, action.destinations))

    if isinstance(action, NextPage):
        return state.model_copy(update={"page": clamp_page(state.page + 1, total, state.page_size)})

    if isinstance(action, PreviousPage):
        return state.model_copy(update={"page": clamp_page(state.page - 1, total, state.page_size)})

    if isinstance(action, GoToPage):
        return state.model_copy(update={"page": clamp_page(action.page, total, state.page_size)})

    if isinstance(action, SelectDestination):
        if find(state.destinations, action.destination_id) is None:
            return state
        return state.model_copy(
            update={"screen": Screen.DETAIL, "selected_id": action.destination_id}
        )

    if isinstance(action, ExploreRandom):
        if not state.destinations:
            return state
        chosen = state.destinations[action.index % total]
        return state.model_copy(update={"screen": Screen.DETAIL, "selected_id": chosen.id})

    if isinstance(action, OpenEditor):
        if action.destination_id is not None and find(state.destinations, action.destination_id) is None:
            return state
        return state.model_copy(
            update={"editor_open": True, "editing_id": action.destination_id}
        )

    if isinstance(action, CloseEditor):
        return state.model_copy(
            update={
                "editor_open": False,
                "editing_id": None,
                "selected_id": None,
                "screen": Screen.LISTING,
            }
        )

    if isinstance(action, SubmissionSucceeded):
        update = _with_destinations(state, action.destinations)
        update.update(
            {
                "editor_open": False,
                "editing_id": None,
                "selected_id": None,
                "screen": Screen.LISTING,
                "notice": action.notice,
            }
        )
        return state.model_copy(update=update)

    if isinstance(action, RequestFailed):
        return state.model_copy(update={"error": action.message, "notice": None})

    raise TypeError(f"Unknown gallery action: {type(action).__name__}")
