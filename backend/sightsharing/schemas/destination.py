"""
SightSharing Backend: Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract between gallery and backend.
How:   FastAPI uses these models to serialize responses and generate the
       OpenAPI documentation. Multipart request bodies are read with Form()
       and File() parameters in the route, then packed into DestinationFields.
Who:   Route handlers (responses), DestinationService (inputs), and the
       gallery client (parsing responses).

Field naming:
    The JSON keys `backgroundImage` and `galleryImage` are camelCase on the
    wire; Python attributes are snake_case with an alias. Responses are
    serialized by alias (FastAPI default).
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class DestinationResponse(BaseModel):
    """
    What:  Full representation of one destination row.
    Who:   Returned by GET /destinations (as array items) and GET /destinations/{id}.
    """
    id: int = Field(description="Store-assigned destination identifier")
    name: Optional[str] = Field(default=None, description="Destination name")
    location: Optional[str] = Field(default=None, description="Where the destination is")
    description: Optional[str] = Field(default=None, description="Free-text description")
    background_image: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("background_image", "backgroundImage"),
        serialization_alias="backgroundImage",
        description="Relative path of the full-page background image (null = placeholder)",
    )
    gallery_image: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gallery_image", "galleryImage"),
        serialization_alias="galleryImage",
        description="Relative path of the gallery card image (null = placeholder)",
    )

    model_config = {"from_attributes": True}


class DestinationSavedResponse(BaseModel):
    """Returned by POST (201) and PUT (200) /destinations."""
    id: int = Field(description="Identifier of the created or updated destination")
    message: str = Field(description="Human-readable success message")


class DestinationDeletedResponse(BaseModel):
    """Returned by DELETE /destinations/{id}."""
    message: str = Field(default="Destination successfully deleted")
    changes: int = Field(description="Number of rows removed from the store")


# ══════════════════════════════════════════════════════════════════════════
# Input Models
# ══════════════════════════════════════════════════════════════════════════


class DestinationFields(BaseModel):
    """
    Text fields of a create or update submission.

    None means "not supplied": on update the stored value is kept.
    """
    name: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    def supplied(self) -> dict:
        """Column values for the fields the client actually sent."""
        return self.model_dump(exclude_none=True)


class ImageUpload(BaseModel):
    """An uploaded image part, already read into memory."""
    filename: str
    content: bytes

    @property
    def is_present(self) -> bool:
        """Browsers send an empty part when no file was chosen."""
        return bool(self.filename) and len(self.content) > 0


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "destination with ID '42' was not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    storage: str = Field(description="Upload directory: writable, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
