# src/csv_io/importer.py
"""CSV import pipeline: raw rows to validated, stored trades."""
import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import aiofiles

from src.csv_io.settings import CsvSettings
from src.journal.models import TRADE_FIELDS, Trade
from src.journal.parsing import (
    BOOL_FIELDS,
    DATE_FIELDS,
    ENUM_FIELDS,
    FLOAT_FIELDS,
    TIME_FIELDS,
    is_blank,
    normalize_time,
    parse_bool,
    parse_enum,
    parse_float,
    parse_int,
)
from src.journal.trade_store import TradeStore

logger = logging.getLogger(__name__)

# Identity columns are reassigned by the store on import.
RECOGNIZED_HEADERS = frozenset(TRADE_FIELDS) - {"id", "user_id"}

_DATE_TIME_MARKERS = ("date", "time", "timestamp")


class TradeImportError(RuntimeError):
    """Raised when no row of an import could be stored."""


@dataclass
class ImportFailure:
    """A processed row that could not be stored, with the reason."""

    trade: dict[str, Any]
    error: str

    @property
    def is_date_time_error(self) -> bool:
        message = self.error.lower()
        return any(marker in message for marker in _DATE_TIME_MARKERS)


@dataclass
class ImportResult:
    """Outcome of importing a batch of rows."""

    results: list[Trade] = field(default_factory=list)
    errors: list[ImportFailure] = field(default_factory=list)


@dataclass
class ImportSummary:
    """Counts and hints reported back to the user after an import."""

    successful: int
    failed: int
    first_error: str | None
    has_date_time_errors: bool

    @property
    def message(self) -> str:
        """User-facing description of the import outcome."""
        if self.failed == 0:
            return f"{self.successful} trades imported successfully!"

        description = f"Imported {self.successful} trades. {self.failed} trades failed."
        if self.has_date_time_errors:
            description += (
                " Some entries had date/time format issues that couldn't be"
                " automatically corrected."
            )
        if self.first_error:
            description += f" Error: {self.first_error}"
        return description


def read_csv_rows(text: str) -> list[list[str]]:
    """Split CSV text into a 2-D list of cells, skipping blank lines."""
    reader = csv.reader(io.StringIO(text))
    return [row for row in reader if any(cell.strip() for cell in row)]


def process_field(header: str, value: str) -> Any:
    """Convert one CSV cell according to its column.

    Args:
        header: Column name from the header row.
        value: Raw cell text.

    Returns:
        The coerced value; None for empty or unreadable optional cells.
    """
    if header in TIME_FIELDS:
        return normalize_time(value)

    if header in DATE_FIELDS:
        return None if is_blank(value) else value

    if header in FLOAT_FIELDS:
        return parse_float(value)

    if header == "analysis_count":
        return parse_int(value, default=0)

    if header in ENUM_FIELDS:
        enum_cls, default = ENUM_FIELDS[header]
        parsed = parse_enum(enum_cls, value, default)
        return parsed.value if parsed is not None else None

    if header in BOOL_FIELDS:
        return parse_bool(value)

    return None if is_blank(value) else value


def process_csv_row(row: list[str], headers: list[str]) -> dict[str, Any]:
    """Map one CSV row onto a trade record using the header row.

    Unrecognized headers are ignored. A creation timestamp of now is added
    when the row has none.
    """
    record: dict[str, Any] = {}

    for index, raw_header in enumerate(headers):
        header = raw_header.strip()
        if header not in RECOGNIZED_HEADERS or index >= len(row):
            continue
        record[header] = process_field(header, row[index])

    if not record.get("timestamp"):
        record["timestamp"] = datetime.now().isoformat()

    return record


def is_importable(record: dict[str, Any]) -> bool:
    """True when a processed row has both a symbol and an entry price."""
    return bool(record.get("symbol")) and record.get("entry_price") is not None


async def import_trades(
    csv_data: list[list[str]], store: TradeStore, user_id: str
) -> ImportResult:
    """Process CSV rows and store them one at a time.

    Rows without a symbol or entry price are dropped silently. A row that
    fails to store is recorded in ``errors`` and the import continues.

    Args:
        csv_data: Rows of cells; the first row holds the headers.
        store: Trade store to insert into.
        user_id: Owner of the imported trades.

    Returns:
        ImportResult with the stored trades and per-row failures.
    """
    result = ImportResult()
    if not csv_data:
        return result

    headers = csv_data[0]
    processed = [process_csv_row(row, headers) for row in csv_data[1:]]
    importable = [record for record in processed if is_importable(record)]

    dropped = len(processed) - len(importable)
    if dropped:
        logger.info(f"Skipping {dropped} rows without symbol or entry_price")

    for record in importable:
        try:
            trade = await store.insert(record, user_id)
        except Exception as e:
            logger.warning(f"Failed to import trade {record.get('symbol')}: {e}")
            result.errors.append(ImportFailure(trade=record, error=str(e)))
        else:
            result.results.append(trade)

    logger.info(
        f"Imported {len(result.results)} trades for user {user_id}, "
        f"{len(result.errors)} failed"
    )
    return result


def summarize_import(result: ImportResult) -> ImportSummary:
    """Apply the reporting policy to an import result.

    Raises:
        TradeImportError: If rows were attempted and every one failed.
    """
    if result.errors:
        date_time_errors = [e for e in result.errors if e.is_date_time_error]
        if date_time_errors:
            logger.warning(f"Found {len(date_time_errors)} date/time format errors")

        if not result.results:
            raise TradeImportError(
                f"All trades failed to import. First error: {result.errors[0].error}"
            )

    return ImportSummary(
        successful=len(result.results),
        failed=len(result.errors),
        first_error=result.errors[0].error if result.errors else None,
        has_date_time_errors=any(e.is_date_time_error for e in result.errors),
    )


def describe_import_error(error: Exception) -> str:
    """User-facing text for an import that failed outright."""
    message = str(error)
    if any(marker in message.lower() for marker in _DATE_TIME_MARKERS):
        return (
            "Failed to import trades due to date/time format issues. Please ensure"
            " dates are in DD-MM-YYYY format and times are in HH:MM format."
            f" Error: {message}"
        )
    return f"Failed to import trades: {message}"


class TradeImporter:
    """Imports CSV files into a user's journal."""

    def __init__(self, store: TradeStore, settings: CsvSettings) -> None:
        self._store = store
        self._settings = settings

    async def import_file(self, path: Path, user_id: str) -> ImportSummary:
        """Read a CSV file and import every row.

        Raises:
            TradeImportError: If every row failed to store.
        """
        async with aiofiles.open(path, "r", encoding=self._settings.encoding, newline="") as f:
            content = await f.read()

        rows = read_csv_rows(content)
        logger.info(f"Read {max(len(rows) - 1, 0)} rows from {path}")

        result = await import_trades(rows, self._store, user_id)
        return summarize_import(result)
