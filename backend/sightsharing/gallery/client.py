"""
SightSharing Gallery: HTTP API Client
=====================================

What:  Async client for the /destinations API, plus GallerySession, which
       owns one GalleryState and feeds API results through the reducer.
How:   httpx.AsyncClient. Any non-2xx status or transport error is logged
       and raised as GalleryClientError; GallerySession turns that into a
       RequestFailed action so the page can show the message. No retries.
Who:   Scripts, tests, and any front end that drives the gallery from Python.

Example:
    async with DestinationsClient("http://localhost:3000") as api:
        session = GallerySession(api)
        await session.load()
        session.dispatch(SelectDestination(destination_id=3))
        view = session.view()
"""

import logging
from typing import Dict, List, Optional, Tuple

import httpx

from sightsharing.exceptions import SightSharingError
from sightsharing.gallery.state import (
    Action,
    DELETED_NOTICE,
    SUBMITTED_NOTICE,
    DestinationsLoaded,
    GalleryState,
    RequestFailed,
    SubmissionSucceeded,
    reduce,
)
from sightsharing.gallery.view import GalleryView, build_view
from sightsharing.schemas.destination import (
    DestinationDeletedResponse,
    DestinationResponse,
    DestinationSavedResponse,
)

logger = logging.getLogger(__name__)

# multipart field name → (filename, bytes, content type)
ImageFiles = Dict[str, Tuple[str, bytes, str]]


class GalleryClientError(SightSharingError):
    """A request to the destinations API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message=message, context={"status_code": status_code})
        self.status_code = status_code


class DestinationsClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "DestinationsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, url, str(e))
            raise GalleryClientError(f"Could not reach the server: {e}") from e

        if response.is_error:
            message = f"HTTP error! status: {response.status_code}"
            try:
                message = response.json().get("message", message)
            except ValueError:
                pass
            logger.error("%s %s → %d: %s", method, url, response.status_code, response.text)
            raise GalleryClientError(message, status_code=response.status_code)
        return response

    async def list_destinations(self) -> List[DestinationResponse]:
        response = await self._request("GET", "/destinations")
        return [DestinationResponse.model_validate(item) for item in response.json()]

    async def get_destination(self, destination_id: int) -> DestinationResponse:
        response = await self._request("GET", f"/destinations/{destination_id}")
        return DestinationResponse.model_validate(response.json())

    async def create_destination(
        self,
        name: str,
        location: str,
        description: str,
        files: Optional[ImageFiles] = None,
    ) -> DestinationSavedResponse:
        data = {"name": name, "location": location, "description": description}
        response = await self._request("POST", "/destinations", data=data, files=files or None)
        return DestinationSavedResponse.model_validate(response.json())

    async def update_destination(
        self,
        destination_id: int,
        fields: Optional[Dict[str, str]] = None,
        files: Optional[ImageFiles] = None,
    ) -> DestinationSavedResponse:
        response = await self._request(
            "PUT",
            f"/destinations/{destination_id}",
            data=fields or {},
            files=files or None,
        )
        return DestinationSavedResponse.model_validate(response.json())

    async def delete_destination(self, destination_id: int) -> DestinationDeletedResponse:
        response = await self._request("DELETE", f"/destinations/{destination_id}")
        return DestinationDeletedResponse.model_validate(response.json())


class GallerySession:
    """
    One gallery page: the current GalleryState plus the API it talks to.

    State changes only through dispatch(); the async helpers perform the
    request and then dispatch the matching action.
    """

    def __init__(self, api: DestinationsClient, state: Optional[GalleryState] = None):
        self.api = api
        self.state = state or GalleryState()

    def dispatch(self, action: Action) -> GalleryState:
        self.state = reduce(self.state, action)
        return self.state

    def view(self) -> GalleryView:
        return build_view(self.state)

    async def load(self) -> GalleryState:
        try:
            destinations = await self.api.list_destinations()
        except GalleryClientError as e:
            return self.dispatch(RequestFailed(message=e.message))
        return self.dispatch(DestinationsLoaded(destinations=tuple(destinations)))

    async def _after_write(self, notice: str) -> GalleryState:
        destinations = await self.api.list_destinations()
        return self.dispatch(
            SubmissionSucceeded(destinations=tuple(destinations), notice=notice)
        )

    async def submit(
        self,
        fields: Dict[str, str],
        files: Optional[ImageFiles] = None,
    ) -> GalleryState:
        """Send the open editor: create when adding, update when editing."""
        try:
            if self.state.editing_id is None:
                await self.api.create_destination(
                    name=fields.get("name", ""),
                    location=fields.get("location", ""),
                    description=fields.get("description", ""),
                    files=files,
                )
            else:
                await self.api.update_destination(self.state.editing_id, fields, files)
            return await self._after_write(SUBMITTED_NOTICE)
        except GalleryClientError as e:
            return self.dispatch(RequestFailed(message=e.message))

    async def delete(self, destination_id: int) -> GalleryState:
        try:
            await self.api.delete_destination(destination_id)
            return await self._after_write(DELETED_NOTICE)
        except GalleryClientError as e:
            return self.dispatch(RequestFailed(message=e.message))
