"""
SightSharing Backend: Destination SQLAlchemy Model
==================================================

What:  ORM model representing the `destinations` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by DestinationRepository for CRUD statements and by Alembic.

Table Design:
    - Integer primary key with SQLite AUTOINCREMENT: ids are never handed
      out twice, even after the highest row is deleted
    - backgroundImage / galleryImage: column names kept in camelCase, the
      same keys the client reads from the JSON payload
    - Image columns hold paths relative to STORAGE_ROOT ("uploads/<name>");
      NULL means no image was provided
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from sightsharing.database import Base


class Destination(Base):
    """
    A travel destination contributed by a user.

    Lifecycle:
        1. Created by POST /destinations with name, location, description
        2. Updated by PUT /destinations/{id}; replaced image files are removed
        3. Deleted by DELETE /destinations/{id} together with both image files
    """

    __tablename__ = "destinations"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ── Image References ──────────────────────────────────────────────────
    # Format: uploads/<millisecond timestamp><original extension>
    background_image: Mapped[Optional[str]] = mapped_column(
        "backgroundImage", Text, nullable=True
    )
    gallery_image: Mapped[Optional[str]] = mapped_column(
        "galleryImage", Text, nullable=True
    )

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, name='{self.name}')>"
