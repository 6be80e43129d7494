# src/journal/risk_metrics.py
"""Risk-adjusted return and expectancy calculations."""
import math
from collections import defaultdict
from datetime import date

from src.journal.models import Outcome, Trade
from src.journal.parsing import trade_day
from src.journal.pnl import calculate_trade_pnl

TRADING_DAYS_PER_YEAR = 252


def calculate_sharpe_ratio(returns: list[float]) -> float:
    """Annualized Sharpe-like ratio of per-period returns.

    Uses the population variance (divides by N). Returns 0.0 for an empty
    series or a series with zero deviation.
    """
    if not returns:
        return 0.0

    avg_return = sum(returns) / len(returns)
    variance = sum((r - avg_return) ** 2 for r in returns) / len(returns)
    std_dev = math.sqrt(variance)

    if std_dev == 0:
        return 0.0

    return (avg_return / std_dev) * math.sqrt(TRADING_DAYS_PER_YEAR)


def completed_trades(trades: list[Trade]) -> list[Trade]:
    """Trades with both exit price and quantity set."""
    return [t for t in trades if not t.is_open]


def calculate_expectancy(trades: list[Trade]) -> float:
    """Probability-weighted average gain per completed trade.

    Winners and losers are taken from the user-asserted outcome, not from
    the sign of the P&L. Breakeven trades count toward the total only.
    """
    completed = completed_trades(trades)
    if not completed:
        return 0.0

    winners = [t for t in completed if t.outcome == Outcome.PROFIT]
    losers = [t for t in completed if t.outcome == Outcome.LOSS]

    avg_win = (
        sum(abs(calculate_trade_pnl(t)) for t in winners) / len(winners)
        if winners
        else 0.0
    )
    avg_loss = (
        sum(abs(calculate_trade_pnl(t)) for t in losers) / len(losers)
        if losers
        else 0.0
    )

    win_rate = len(winners) / len(completed)
    return (win_rate * avg_win) - ((1 - win_rate) * avg_loss)


def calculate_profit_factor(trades: list[Trade]) -> float:
    """Gross profit divided by gross loss, 0.0 when there are no losses."""
    pnls = [calculate_trade_pnl(t) for t in trades]
    gross_profit = sum(p for p in pnls if p > 0)
    gross_loss = abs(sum(p for p in pnls if p < 0))
    return gross_profit / gross_loss if gross_loss > 0 else 0.0


def calculate_daily_returns(trades: list[Trade]) -> list[float]:
    """Realized P&L summed per calendar day, oldest day first."""
    daily: dict[date, float] = defaultdict(float)
    for trade in completed_trades(trades):
        day = trade_day(trade)
        if day is not None:
            daily[day] += calculate_trade_pnl(trade)

    return [daily[day] for day in sorted(daily)]
