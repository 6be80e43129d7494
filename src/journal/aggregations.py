# src/journal/aggregations.py
"""Time-series views over a trade list: equity, drawdown, streaks, durations."""
from collections import defaultdict
from datetime import date

from src.journal.models import (
    DailyPnL,
    DrawdownPoint,
    DurationStat,
    EquityPoint,
    StreakRecord,
    Trade,
)
from src.journal.parsing import entry_datetime, exit_datetime, format_trade_date, trade_day
from src.journal.pnl import calculate_trade_pnl, is_realized


def calculate_trade_duration_stats(trades: list[Trade]) -> list[DurationStat]:
    """Average holding time and P&L per trading day.

    Only trades with entry and exit times and a realized P&L are used.

    Returns:
        One DurationStat per day, oldest day first.
    """
    by_day: dict[date, list[tuple[float, float]]] = defaultdict(list)

    for trade in trades:
        if not (trade.entry_time and trade.exit_time and is_realized(trade)):
            continue

        entered = entry_datetime(trade)
        exited = exit_datetime(trade)
        if entered is None or exited is None:
            continue

        duration_minutes = (exited - entered).total_seconds() / 60.0
        by_day[entered.date()].append((duration_minutes, calculate_trade_pnl(trade)))

    stats: list[DurationStat] = []
    for day in sorted(by_day):
        samples = by_day[day]
        avg_duration = sum(d for d, _ in samples) / len(samples)
        total_pnl = sum(p for _, p in samples)
        stats.append(
            DurationStat(
                date=format_trade_date(day),
                avg_duration_minutes=float(round(avg_duration)),
                total_pnl=round(total_pnl, 2),
                avg_pnl=round(total_pnl / len(samples), 2),
                trade_count=len(samples),
            )
        )
    return stats


def calculate_equity_curve(trades: list[Trade]) -> list[EquityPoint]:
    """Running balance after each realized trade.

    Trades are taken in the order given. Open trades produce no point, so a
    chart shows a gap rather than a flat segment while positions are open.
    """
    balance = 0.0
    curve: list[EquityPoint] = []

    for trade in trades:
        if not is_realized(trade):
            continue
        pnl = calculate_trade_pnl(trade)
        balance += pnl
        curve.append(
            EquityPoint(
                trade_id=trade.id,
                date=trade.entry_date,
                pnl=round(pnl, 2),
                balance=round(balance, 2),
            )
        )
    return curve


def calculate_drawdowns(trades: list[Trade]) -> list[DrawdownPoint]:
    """Percentage decline from the running peak after each realized trade.

    The drawdown is 0 while the peak balance is not positive.
    """
    balance = 0.0
    peak = 0.0
    series: list[DrawdownPoint] = []

    for trade in trades:
        if not is_realized(trade):
            continue
        balance += calculate_trade_pnl(trade)
        if balance > peak:
            peak = balance

        drawdown = ((peak - balance) / peak) * 100 if peak > 0 else 0.0
        series.append(
            DrawdownPoint(
                trade_id=trade.id,
                date=trade.entry_date,
                balance=round(balance, 2),
                peak=round(peak, 2),
                drawdown_percent=round(drawdown, 2),
            )
        )
    return series


def calculate_max_drawdown(trades: list[Trade]) -> float:
    """Largest drawdown percentage over the series, 0.0 when empty."""
    series = calculate_drawdowns(trades)
    return max((p.drawdown_percent for p in series), default=0.0)


def calculate_streaks(trades: list[Trade]) -> list[StreakRecord]:
    """Runs of consecutive identical outcomes, in the order given."""
    streaks: list[StreakRecord] = []

    for trade in trades:
        if streaks and streaks[-1].outcome == trade.outcome:
            streaks[-1].length += 1
        else:
            streaks.append(StreakRecord(outcome=trade.outcome, length=1))

    return streaks


def calculate_daily_pnl(trades: list[Trade]) -> list[DailyPnL]:
    """Realized P&L and trade count per trading day, oldest day first.

    Trades without a known day are left out.
    """
    pnl_by_day: dict[date, float] = defaultdict(float)
    count_by_day: dict[date, int] = defaultdict(int)

    for trade in trades:
        day = trade_day(trade)
        if day is None:
            continue
        pnl_by_day[day] += calculate_trade_pnl(trade)
        count_by_day[day] += 1

    return [
        DailyPnL(
            date=format_trade_date(day),
            pnl=round(pnl_by_day[day], 2),
            trade_count=count_by_day[day],
        )
        for day in sorted(count_by_day)
    ]
