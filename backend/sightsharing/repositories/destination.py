"""
SightSharing Backend: Destination Repository (Record Store)
===========================================================

What:  The only module that issues SQL against the `destinations` table.
How:   Static async methods taking the request's AsyncSession. Writes are
       flushed, never committed; the session owner (get_db_session or
       session_scope) commits once the whole request has succeeded.
Who:   Called by DestinationService.

Engine errors (sqlalchemy.exc.SQLAlchemyError) propagate unchanged; the
service layer turns them into DatabaseError.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from sightsharing.models.destination import Destination


class DestinationRepository:
    @staticmethod
    async def list_all(session: AsyncSession) -> List[Destination]:
        # No ORDER BY: rows come back in storage order (rowid for SQLite)
        result = await session.execute(select(Destination))
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(session: AsyncSession, destination_id: int) -> Optional[Destination]:
        result = await session.execute(
            select(Destination).where(Destination.id == destination_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def insert(session: AsyncSession, fields: Dict[str, Any]) -> int:
        destination = Destination(**fields)
        session.add(destination)
        await session.flush()  # assigns the autoincrement id
        return destination.id

    @staticmethod
    async def update(
        session: AsyncSession, destination_id: int, fields: Dict[str, Any]
    ) -> int:
        """Apply `fields` (ORM attribute name → value); returns affected row count."""
        if not fields:
            return 0
        values = {getattr(Destination, key): value for key, value in fields.items()}
        result = await session.execute(
            update(Destination)
            .where(Destination.id == destination_id)
            .values(values)
        )
        return result.rowcount

    @staticmethod
    async def delete_by_id(session: AsyncSession, destination_id: int) -> int:
        result = await session.execute(
            delete(Destination).where(Destination.id == destination_id)
        )
        return result.rowcount
