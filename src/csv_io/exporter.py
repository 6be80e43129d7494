# src/csv_io/exporter.py
"""CSV export of a user's full trade set."""
import csv
import io
import logging
from datetime import date
from pathlib import Path

import aiofiles

from src.csv_io.settings import CsvSettings
from src.journal.models import TRADE_FIELDS, Trade
from src.journal.parsing import trade_to_record
from src.journal.trade_store import TradeStore

logger = logging.getLogger(__name__)


def export_filename(today: date | None = None) -> str:
    """Download name for an export, e.g. trades_2026-01-17.csv."""
    return f"trades_{(today or date.today()).isoformat()}.csv"


def export_trades_csv(trades: list[Trade], encoding: str = "utf-8") -> bytes | None:
    """Serialize trades to CSV bytes with every trade column.

    Columns follow the trade record order and keep their field names. None
    values become empty cells.

    Returns:
        Encoded CSV content, or None when there is nothing to export.
    """
    if not trades:
        logger.info("No trades to export")
        return None

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=TRADE_FIELDS, lineterminator="\n")
    writer.writeheader()
    for trade in trades:
        writer.writerow(trade_to_record(trade))

    return buffer.getvalue().encode(encoding)


class TradeExporter:
    """Writes a user's trades to a CSV file."""

    def __init__(self, store: TradeStore, settings: CsvSettings) -> None:
        self._store = store
        self._settings = settings

    async def export(self, user_id: str, path: Path | None = None) -> Path | None:
        """Export a user's trades, newest entry first.

        Args:
            user_id: Owner of the trades.
            path: Target file; defaults to a dated file in the export dir.

        Returns:
            The written path, or None when the user has no trades.
        """
        trades = await self._store.list_trades(user_id, newest_first=True)
        content = export_trades_csv(trades, encoding=self._settings.encoding)
        if content is None:
            logger.warning(f"No trades to export for user {user_id}")
            return None

        if path is None:
            export_dir = Path(self._settings.export_dir)
            export_dir.mkdir(parents=True, exist_ok=True)
            path = export_dir / export_filename()

        async with aiofiles.open(path, "wb") as f:
            await f.write(content)

        logger.info(f"Exported {len(trades)} trades to {path}")
        return path
