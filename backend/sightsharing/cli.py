"""
SightSharing Command Line
=========================

Usage:
    sightsharing init-db             Create the destinations table if missing
    sightsharing delete 3 7 12       Delete destinations and their images
    sightsharing serve [--port N]    Run the API and gallery with uvicorn
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from sightsharing.config import settings
from sightsharing.database import dispose_engine, init_db, session_scope
from sightsharing.exceptions import SightSharingError
from sightsharing.main import setup_logging
from sightsharing.services.destination_service import destination_service

logger = logging.getLogger(__name__)


async def _init_db() -> int:
    try:
        await init_db()
    finally:
        await dispose_engine()
    print(f"Database ready: {settings.database_url}")
    return 0


async def _delete(ids: List[int]) -> int:
    """Delete each id in its own transaction; keep going after a failure."""
    failed = 0
    try:
        for destination_id in ids:
            try:
                async with session_scope() as db:
                    result = await destination_service.delete_destination(db, destination_id)
            except SightSharingError as e:
                failed += 1
                logger.error("Could not delete destination %s: %s", destination_id, e.message)
                print(f"{destination_id}: {e.message}", file=sys.stderr)
                continue
            print(f"{destination_id}: {result.message} (changes: {result.changes})")
    finally:
        await dispose_engine()
    return 1 if failed else 0


def _serve(host: str, port: int, reload: bool) -> int:
    import uvicorn

    uvicorn.run(
        "sightsharing.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sightsharing",
        description="SightSharing travel destination gallery",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create the destinations table if missing")

    delete = subparsers.add_parser("delete", help="Delete destinations and their images")
    delete.add_argument("ids", nargs="+", type=int, metavar="ID", help="Destination id")

    serve = subparsers.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=settings.backend_host)
    serve.add_argument("--port", type=int, default=settings.backend_port)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    if args.command == "init-db":
        return asyncio.run(_init_db())
    if args.command == "delete":
        return asyncio.run(_delete(args.ids))
    return _serve(args.host, args.port, args.reload)


if __name__ == "__main__":
    sys.exit(main())
