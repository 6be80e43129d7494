# src/journal/trade_store.py
"""Trade store persisting each user's journal to a JSON file."""
import json
import logging
import uuid
from datetime import date, datetime
from pathlib import Path
from typing import Any

import aiofiles

from src.journal.models import Trade
from src.journal.parsing import (
    entry_datetime,
    format_trade_date,
    parse_trade_date,
    parse_trade_time,
    trade_from_record,
    trade_to_record,
)
from src.journal.settings import JournalSettings

logger = logging.getLogger(__name__)


class DailyTradeLimitError(ValueError):
    """Raised when a user has already logged the allowed trades for a day."""


class TradeStore:
    """Store for persisting trades to JSON files.

    Stores trades in one JSON file per user: {data_dir}/{user_id}.json
    Trade IDs are random uuid4 hex strings.
    """

    def __init__(self, settings: JournalSettings) -> None:
        """Initialize the trade store.

        Args:
            settings: Journal configuration settings.
        """
        self._settings = settings
        self._data_dir = Path(settings.data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def _get_file_path(self, user_id: str) -> Path:
        """Get the JSON file path for a user."""
        if not user_id or "/" in user_id or "\\" in user_id or user_id.startswith("."):
            raise ValueError(f"Invalid user id: {user_id!r}")
        return self._data_dir / f"{user_id}.json"

    async def _read_records(self, user_id: str) -> list[dict[str, Any]]:
        """Read raw trade records for a user."""
        file_path = self._get_file_path(user_id)
        if not file_path.exists():
            return []

        async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
            content = await f.read()
            return json.loads(content) if content.strip() else []

    async def _write_records(self, user_id: str, records: list[dict[str, Any]]) -> None:
        """Write raw trade records for a user."""
        file_path = self._get_file_path(user_id)
        async with aiofiles.open(file_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(records, indent=2, default=str, ensure_ascii=False))

    def _generate_trade_id(self) -> str:
        return uuid.uuid4().hex

    def _validate(self, trade: Trade) -> None:
        """Check the fields a stored trade must carry.

        Raises:
            ValueError: On a non-positive entry price or a malformed
                date or time string.
        """
        if trade.entry_price <= 0:
            raise ValueError(f"entry_price must be positive, got {trade.entry_price}")

        for name in ("entry_date", "exit_date"):
            value = getattr(trade, name)
            if value and parse_trade_date(value) is None:
                raise ValueError(f"Invalid {name} '{value}': expected date format DD-MM-YYYY")

        for name in ("entry_time", "exit_time"):
            value = getattr(trade, name)
            if value and parse_trade_time(value) is None:
                raise ValueError(f"Invalid {name} '{value}': expected time format HH:MM[:SS]")

    async def insert(self, record: dict[str, Any], user_id: str) -> Trade:
        """Insert one trade record for a user.

        Args:
            record: Flat trade record, typically from a form or CSV row.
            user_id: Owner of the trade.

        Returns:
            The stored Trade with id, user and timestamp assigned.

        Raises:
            ValueError: If the record is incomplete or malformed.
        """
        trade = trade_from_record(record)
        self._validate(trade)

        trade.id = trade.id or self._generate_trade_id()
        trade.user_id = user_id
        trade.timestamp = trade.timestamp or datetime.now().isoformat()

        records = await self._read_records(user_id)
        records.append(trade_to_record(trade))
        await self._write_records(user_id, records)

        logger.info(f"Stored trade {trade.id} ({trade.symbol}) for user {user_id}")
        return trade

    async def count_trades_on(self, user_id: str, day: date) -> int:
        """Count a user's trades whose entry date is the given day."""
        trades = await self.list_trades(user_id)
        return sum(1 for t in trades if parse_trade_date(t.entry_date) == day)

    async def add_trade(self, record: dict[str, Any], user_id: str) -> Trade:
        """Log a trade through the journal, applying the daily trade limit.

        The entry date defaults to today when not given.

        Raises:
            DailyTradeLimitError: If the user already reached the limit that day.
            ValueError: If the record is incomplete or malformed.
        """
        record = dict(record)
        if not record.get("entry_date"):
            record["entry_date"] = format_trade_date(date.today())

        day = parse_trade_date(record["entry_date"])
        if self._settings.enforce_daily_limit and day is not None:
            existing = await self.count_trades_on(user_id, day)
            if existing >= self._settings.max_trades_per_day:
                raise DailyTradeLimitError(
                    f"Daily trade limit reached ({self._settings.max_trades_per_day} per day)"
                )

        return await self.insert(record, user_id)

    async def update_trade(self, user_id: str, trade_id: str, changes: dict[str, Any]) -> Trade:
        """Apply a partial update to a stored trade.

        Raises:
            KeyError: If no trade with that id exists for the user.
            ValueError: If the updated trade is incomplete or malformed.
        """
        records = await self._read_records(user_id)

        for index, existing in enumerate(records):
            if existing.get("id") == trade_id:
                merged = {**existing, **changes, "id": trade_id, "user_id": user_id}
                trade = trade_from_record(merged)
                self._validate(trade)
                records[index] = trade_to_record(trade)
                await self._write_records(user_id, records)
                logger.info(f"Updated trade {trade_id} for user {user_id}")
                return trade

        raise KeyError(trade_id)

    async def delete_trade(self, user_id: str, trade_id: str) -> None:
        """Delete a stored trade.

        Raises:
            KeyError: If no trade with that id exists for the user.
        """
        records = await self._read_records(user_id)
        remaining = [r for r in records if r.get("id") != trade_id]
        if len(remaining) == len(records):
            raise KeyError(trade_id)

        await self._write_records(user_id, remaining)
        logger.info(f"Deleted trade {trade_id} for user {user_id}")

    async def get_trade(self, user_id: str, trade_id: str) -> Trade | None:
        """Get a single trade by id, or None if it does not exist."""
        for record in await self._read_records(user_id):
            if record.get("id") == trade_id:
                return trade_from_record(record)
        return None

    async def list_trades(self, user_id: str, newest_first: bool = False) -> list[Trade]:
        """Get all of a user's trades ordered by entry time.

        Args:
            user_id: Owner of the trades.
            newest_first: Sort by entry time descending instead of ascending.

        Returns:
            List of Trade objects.
        """
        trades = [trade_from_record(r) for r in await self._read_records(user_id)]
        return sorted(
            trades,
            key=lambda t: (entry_datetime(t) or datetime.min, t.timestamp),
            reverse=newest_first,
        )
