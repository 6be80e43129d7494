# src/journal/parsing.py
"""Conversion of free-form strings into typed trade values.

Every value that enters the journal as text (form input, CSV cells, stored
JSON) passes through this module. Unrecognized enum values become ``None``
(or the field default) here and nowhere else.
"""
import re
from datetime import date, datetime, time
from enum import Enum
from typing import Any, TypeVar

from src.journal.models import (
    TRADE_FIELDS,
    Direction,
    EmaPosition,
    EntryEmotion,
    ExitEmotion,
    ExitReason,
    MarketCondition,
    OptionType,
    Outcome,
    TimePressure,
    Timeframe,
    Trade,
    TradeType,
    VwapPosition,
)

E = TypeVar("E", bound=Enum)

DATE_FORMAT = "%d-%m-%Y"

_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")
_TIME_PATTERN = re.compile(
    r"^(\d{1,2}):(\d{2})(?::(\d{2}))?(?:\.\d+)?\s*([AaPp][Mm])?$"
)
_MERIDIEM_SUFFIX = re.compile(r"\s?[AaPp][Mm]$")

ENUM_FIELDS: dict[str, tuple[type[Enum], Enum | None]] = {
    "trade_type": (TradeType, TradeType.OPTIONS),
    "outcome": (Outcome, Outcome.BREAKEVEN),
    "trade_direction": (Direction, None),
    "option_type": (OptionType, None),
    "market_condition": (MarketCondition, None),
    "timeframe": (Timeframe, None),
    "exit_reason": (ExitReason, None),
    "entry_emotion": (EntryEmotion, None),
    "exit_emotion": (ExitEmotion, None),
    "vwap_position": (VwapPosition, None),
    "ema_position": (EmaPosition, None),
    "time_pressure": (TimePressure, None),
}

FLOAT_FIELDS = frozenset({
    "entry_price",
    "exit_price",
    "quantity",
    "stop_loss",
    "planned_risk_reward",
    "actual_risk_reward",
    "planned_target",
    "slippage",
    "post_exit_price",
    "exit_efficiency",
    "strike_price",
    "vix",
    "call_iv",
    "put_iv",
    "pcr",
    "confidence_level",
    "confidence_level_score",
    "emotional_score",
    "stress_level",
    "satisfaction_score",
})

BOOL_FIELDS = frozenset({"is_impulsive", "plan_deviation"})

DATE_FIELDS = frozenset({"entry_date", "exit_date"})
TIME_FIELDS = frozenset({"entry_time", "exit_time"})


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def parse_enum(enum_cls: type[E], value: Any, default: E | None = None) -> E | None:
    """Parse a case-insensitive enum value, falling back to ``default``."""
    if isinstance(value, enum_cls):
        return value
    if is_blank(value):
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return default


def parse_float(value: Any) -> float | None:
    """Parse the leading number of a string, like JavaScript's parseFloat.

    Returns None when no number can be read or the result is not finite.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None

    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def parse_int(value: Any, default: int = 0) -> int:
    """Parse the leading integer of a string, returning ``default`` on failure."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else default
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if match:
            return int(match.group(0))
    return default


def parse_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if is_blank(value):
        return None
    text = str(value).strip().lower()
    if text in ("true", "yes", "y", "1"):
        return True
    if text in ("false", "no", "n", "0"):
        return False
    return None


def parse_trade_date(value: str | None) -> date | None:
    """Parse a DD-MM-YYYY date string."""
    if is_blank(value):
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def format_trade_date(value: date) -> str:
    """Format a date as DD-MM-YYYY."""
    return value.strftime(DATE_FORMAT)


def parse_trade_time(value: str | None) -> time | None:
    """Parse HH:MM[:SS][ AM/PM] into a time of day.

    A 12-hour suffix is honoured when present. Full ISO datetimes are
    accepted and reduced to their clock time.
    """
    if is_blank(value):
        return None

    text = value.strip()
    match = _TIME_PATTERN.match(text)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        seconds = int(match.group(3) or 0)
        meridiem = (match.group(4) or "").lower()
        if meridiem == "pm" and hours != 12:
            hours += 12
        elif meridiem == "am" and hours == 12:
            hours = 0
        try:
            return time(hours, minutes, seconds)
        except ValueError:
            return None

    parsed = parse_timestamp(text)
    return parsed.time() if parsed else None


def normalize_time(value: str | None) -> str | None:
    """Normalize an imported time cell to HH:MM:SS.

    A trailing AM/PM marker is stripped (the clock value is kept as written)
    and seconds are appended to HH:MM values. Unrecognized text is returned
    trimmed so the store can reject it.
    """
    if is_blank(value):
        return None

    cleaned = _MERIDIEM_SUFFIX.sub("", value.strip()).strip()
    parts = cleaned.split(":")
    if len(parts) in (2, 3) and all(p.isdigit() for p in parts):
        parts[0] = parts[0].zfill(2)
        if len(parts) == 2:
            parts.append("00")
        return ":".join(parts)
    return cleaned


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp, dropping any timezone information."""
    if is_blank(value):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


def entry_datetime(trade: Trade) -> datetime | None:
    """Best-known entry moment of a trade.

    Uses entry date and entry time together, then the bare entry date at
    midnight, then the creation timestamp.
    """
    entry_day = parse_trade_date(trade.entry_date)
    if entry_day:
        entry_clock = parse_trade_time(trade.entry_time) or time()
        return datetime.combine(entry_day, entry_clock)

    return parse_timestamp(trade.timestamp)


def exit_datetime(trade: Trade) -> datetime | None:
    """Exit moment of a trade, assuming the entry date when no exit date is set."""
    exit_clock = parse_trade_time(trade.exit_time)
    if exit_clock is None:
        return None
    exit_day = parse_trade_date(trade.exit_date) or parse_trade_date(trade.entry_date)
    if exit_day is None:
        return None
    return datetime.combine(exit_day, exit_clock)


def trade_day(trade: Trade) -> date | None:
    """Calendar day a trade belongs to: its entry date, else its creation day."""
    entry_day = parse_trade_date(trade.entry_date)
    if entry_day is not None:
        return entry_day
    created = parse_timestamp(trade.timestamp)
    return created.date() if created else None


def coerce_field(name: str, value: Any) -> Any:
    """Coerce one raw value into the type of the named trade field."""
    if name in ENUM_FIELDS:
        enum_cls, default = ENUM_FIELDS[name]
        return parse_enum(enum_cls, value, default)
    if name in FLOAT_FIELDS:
        return parse_float(value)
    if name in BOOL_FIELDS:
        return parse_bool(value)
    if name == "analysis_count":
        return parse_int(value, default=0)
    if is_blank(value):
        return None
    return str(value).strip() if isinstance(value, str) else str(value)


def trade_from_record(record: dict[str, Any]) -> Trade:
    """Build a Trade from a flat record, ignoring unknown keys.

    Raises:
        ValueError: If the record has no symbol or no usable entry price.
    """
    values = {
        name: coerce_field(name, record[name])
        for name in TRADE_FIELDS
        if name in record
    }

    if not values.get("symbol"):
        raise ValueError("Trade record is missing a symbol")
    if values.get("entry_price") is None:
        raise ValueError("Trade record is missing a numeric entry_price")

    for name in ("id", "user_id", "timestamp"):
        if values.get(name) is None:
            values.pop(name, None)
    for name, (_, default) in ENUM_FIELDS.items():
        if values.get(name) is None and default is not None:
            values[name] = default

    return Trade(**values)


def trade_to_record(trade: Trade) -> dict[str, Any]:
    """Flatten a Trade into a JSON/CSV friendly dict in field order."""
    record: dict[str, Any] = {}
    for name in TRADE_FIELDS:
        value = getattr(trade, name)
        record[name] = value.value if isinstance(value, Enum) else value
    return record
