"""
SightSharing Backend: Application Package Initializer
=====================================================

What: Marks the `sightsharing` directory as a Python package.
Who:  Imported by uvicorn, Alembic, pytest, and the `sightsharing` CLI.

Architecture Note:
    The backend follows the same layering throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Orchestration + Files)  │  ← ingestion, cleanup, CRUD flow
    ├─────────────────────────────────────┤
    │     Repository (Record Store)       │  ← SQL statements, one table
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The gallery package sits beside this stack: it holds the client-side
    view state and talks to the routes over HTTP.
"""

__version__ = "1.0.0"
