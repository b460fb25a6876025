"""CSV product import.

Rows are processed one after another and each successful insert is committed
on its own, so a failing row never undoes the rows around it.
"""

from __future__ import annotations

import csv
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.core.logging import get_logger
from inventory_api.db.operations import commit_async
from inventory_api.models.product import Product
from inventory_api.schemas.importing import ImportRowError, ImportSummary
from inventory_api.schemas.product import MAX_STOCK, ProductCreate
from inventory_api.services import product_service
from inventory_api.services.exceptions import (
    CsvParseError,
    EmptyImportFileError,
    InvalidUploadError,
)

logger = get_logger(__name__)

CSV_CONTENT_TYPE = "text/csv"
OPTIONAL_FIELDS = ("unit", "category", "brand", "status", "image")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True, slots=True)
class ImportCandidate:
    name: str
    stock: int
    unit: str | None = None
    category: str | None = None
    brand: str | None = None
    status: str | None = None
    image: str | None = None


@dataclass(frozen=True, slots=True)
class RowOutcome:
    row: int
    status: Literal["added", "skipped", "error"]
    error: str | None = None


# ---------------- Parsing ----------------
def is_csv_upload(filename: str | None, content_type: str | None) -> bool:
    if (content_type or "").split(";")[0].strip().lower() == CSV_CONTENT_TYPE:
        return True
    return Path(filename or "").suffix.lower() == ".csv"


def _pick(row: Mapping[str | None, object], key: str) -> str | None:
    for candidate in (key, key.capitalize()):
        value = row.get(candidate)
        if isinstance(value, str) and value:
            return value
    return None


def parse_stock(raw: str | None) -> int:
    """Leading integer of the cell, 0 when there is none."""
    if not raw:
        return 0
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def resolve_row(row: Mapping[str | None, object]) -> ImportCandidate:
    optional = {field: _pick(row, field) for field in OPTIONAL_FIELDS}
    return ImportCandidate(
        name=_pick(row, "name") or "",
        stock=parse_stock(_pick(row, "stock")),
        **optional,
    )


def read_rows(path: Path) -> list[dict[str | None, object]]:
    try:
        with path.open(newline="", encoding="utf-8-sig") as fh:
            return list(csv.DictReader(fh))
    except (UnicodeDecodeError, csv.Error) as exc:
        raise CsvParseError(f"Error parsing CSV file: {exc}") from exc


# ---------------- Import ----------------
def _validation_message(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


async def import_row(db: AsyncSession, index: int, row: Mapping[str | None, object]) -> RowOutcome:
    candidate = resolve_row(row)

    if not candidate.name:
        return RowOutcome(index, "error", "Missing product name")
    if candidate.stock < 0:
        return RowOutcome(index, "error", "Stock must be a non-negative integer")
    if candidate.stock > MAX_STOCK:
        return RowOutcome(index, "error", "Stock is out of range")

    try:
        payload = ProductCreate(
            name=candidate.name,
            unit=candidate.unit,
            category=candidate.category,
            brand=candidate.brand,
            stock=candidate.stock,
            status=candidate.status,
            image=candidate.image,
        )
    except ValidationError as exc:
        return RowOutcome(index, "error", _validation_message(exc))

    try:
        if await product_service.get_product_by_name(db, payload.name):
            return RowOutcome(index, "skipped")

        db.add(Product(**payload.model_dump()))
        await commit_async(db)
    except SQLAlchemyError as exc:
        message = str(getattr(exc, "orig", None) or exc)
        logger.warning("Import row failed", extra={"row": index, "error": message})
        return RowOutcome(index, "error", message)

    return RowOutcome(index, "added")


def summarize(outcomes: Sequence[RowOutcome]) -> ImportSummary:
    added = sum(1 for outcome in outcomes if outcome.status == "added")
    errors = [
        ImportRowError(row=outcome.row, error=outcome.error or "")
        for outcome in outcomes
        if outcome.status == "error"
    ]
    return ImportSummary(
        added=added,
        skipped=len(outcomes) - added,
        errors=errors or None,
    )


async def import_rows(db: AsyncSession, rows: Sequence[Mapping[str | None, object]]) -> ImportSummary:
    if not rows:
        raise EmptyImportFileError()

    logger.info("Import started", extra={"rows": len(rows)})
    outcomes = [await import_row(db, index, row) for index, row in enumerate(rows, start=1)]
    summary = summarize(outcomes)
    logger.info(
        "Import completed",
        extra={
            "added": summary.added,
            "skipped": summary.skipped,
            "errors": len(summary.errors or []),
        },
    )
    return summary


async def import_csv_file(db: AsyncSession, path: Path) -> ImportSummary:
    return await import_rows(db, read_rows(path))


# ---------------- Uploads ----------------
def stage_upload(data: bytes, filename: str | None, upload_dir: Path) -> Path:
    upload_dir.mkdir(parents=True, exist_ok=True)
    safe_name = Path(filename or "upload.csv").name
    target = upload_dir / f"{time.time_ns()}-{safe_name}"
    target.write_bytes(data)
    return target


async def import_upload(
    db: AsyncSession,
    data: bytes,
    filename: str | None,
    content_type: str | None,
    upload_dir: Path,
) -> ImportSummary:
    """Stage the upload, import it and always remove the staged copy."""
    if not is_csv_upload(filename, content_type):
        raise InvalidUploadError()

    path = stage_upload(data, filename, upload_dir)
    try:
        return await import_csv_file(db, path)
    finally:
        path.unlink(missing_ok=True)
