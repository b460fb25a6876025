"""Import products from a CSV file on disk, bypassing the HTTP layer.

Usage:
    python scripts/import_products.py path/to/products.csv
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from inventory_api.core.config import Settings, get_settings
from inventory_api.db.session_async import Database
from inventory_api.schemas.importing import ImportSummary
from inventory_api.services import import_service
from inventory_api.services.exceptions import ServiceError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import products from a CSV file.")
    parser.add_argument("csv_path", type=Path, help="CSV file with a header row (name, unit, category, ...).")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL for this run.",
    )
    return parser


async def import_products(csv_path: Path, database: Database | None = None) -> ImportSummary:
    logger = logging.getLogger("import_products")
    owns_database = database is None
    database = database or Database.from_settings(get_settings())
    logger.info("Importing %s into %s", csv_path, database.url)
    try:
        await database.create_all()
        async with database.session_factory() as session:
            return await import_service.import_csv_file(session, csv_path)
    finally:
        if owns_database:
            await database.dispose()


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.csv_path.is_file():
        print(json.dumps({"detail": f"File not found: {args.csv_path}"}), file=sys.stderr)
        return 2

    database = None
    if args.database_url:
        database = Database.from_settings(Settings(DATABASE_URL=args.database_url, ASYNC_DATABASE_URL=None))

    try:
        summary = await import_products(args.csv_path, database)
    except ServiceError as exc:
        print(json.dumps({"detail": exc.detail}), file=sys.stderr)
        return 1
    finally:
        if database is not None:
            await database.dispose()

    print(json.dumps(summary.model_dump(exclude_none=True), indent=2))
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass
