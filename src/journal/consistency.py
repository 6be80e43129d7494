# src/journal/consistency.py
"""Heuristic discipline score for a set of trades."""
from collections import defaultdict
from datetime import date, time

from src.journal.models import Trade
from src.journal.parsing import parse_timestamp, parse_trade_time, trade_day

MAX_SCORE = 100.0
MIN_SCORE = 0.0

OVERTRADING_THRESHOLD = 3
OVERTRADING_PENALTY_PER_TRADE = 5.0
MISSING_STOP_LOSS_PENALTY = 15.0
OFF_HOURS_PENALTY = 20.0

# 09:15 to 15:30 expressed in minutes since midnight.
MARKET_OPEN_MINUTE = 555
MARKET_CLOSE_MINUTE = 930

EMPTY_SCORE = "0.0"


def _entry_clock(trade: Trade) -> time | None:
    """Time of day the trade was entered, if known."""
    clock = parse_trade_time(trade.entry_time)
    if clock is not None:
        return clock
    created = parse_timestamp(trade.timestamp)
    return created.time() if created else None


def is_outside_market_hours(trade: Trade) -> bool:
    """True when the entry time falls outside 09:15-15:30.

    Trades without any known entry time are not penalized.
    """
    clock = _entry_clock(trade)
    if clock is None:
        return False
    minute_of_day = clock.hour * 60 + clock.minute
    return minute_of_day < MARKET_OPEN_MINUTE or minute_of_day > MARKET_CLOSE_MINUTE


def group_by_day(trades: list[Trade]) -> dict[date | None, list[Trade]]:
    """Group trades by calendar day, keeping undated trades under None."""
    by_day: dict[date | None, list[Trade]] = defaultdict(list)
    for trade in trades:
        by_day[trade_day(trade)].append(trade)
    return dict(by_day)


def calculate_day_penalty(day_trades: list[Trade]) -> float:
    """Total penalty points for one trading day."""
    count = len(day_trades)
    penalty = 0.0

    if count > OVERTRADING_THRESHOLD:
        penalty += OVERTRADING_PENALTY_PER_TRADE * (count - OVERTRADING_THRESHOLD)

    without_stop_loss = sum(1 for t in day_trades if not t.stop_loss)
    penalty += (without_stop_loss / count) * MISSING_STOP_LOSS_PENALTY

    off_hours = sum(1 for t in day_trades if is_outside_market_hours(t))
    penalty += (off_hours / count) * OFF_HOURS_PENALTY

    return penalty


def calculate_consistency_score(trades: list[Trade]) -> str:
    """Discipline score in [0, 100] as a one-decimal string.

    Starts at 100 and subtracts, per trading day, overtrading, missing
    stop-loss and off-hours penalties. An empty trade list scores "0.0".
    """
    if not trades:
        return EMPTY_SCORE

    score = MAX_SCORE
    for day_trades in group_by_day(trades).values():
        score -= calculate_day_penalty(day_trades)

    clamped = max(MIN_SCORE, min(MAX_SCORE, score))
    return f"{clamped:.1f}"
