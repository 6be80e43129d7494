# src/journal/pnl.py
"""Direction-aware profit and loss for single trades and trade lists."""
from src.journal.models import Direction, Trade


def direction_multiplier(trade: Trade) -> int:
    """-1 for short trades, +1 for long or unset direction."""
    return -1 if trade.trade_direction == Direction.SHORT else 1


def calculate_trade_pnl(trade: Trade) -> float:
    """Realized P&L of a trade.

    Returns 0.0 when exit price, entry price or quantity is missing, i.e.
    the trade has no realized P&L yet.
    """
    if not is_realized(trade):
        return 0.0

    return direction_multiplier(trade) * (trade.exit_price - trade.entry_price) * trade.quantity


def calculate_total_pnl(trades: list[Trade]) -> float:
    """Sum of realized P&L over a trade list."""
    return sum((calculate_trade_pnl(t) for t in trades), 0.0)


def calculate_profit(trade: Trade) -> float:
    """Positive component of a trade's P&L, 0.0 otherwise."""
    pnl = calculate_trade_pnl(trade)
    return pnl if pnl > 0 else 0.0


def calculate_loss(trade: Trade) -> float:
    """Absolute negative component of a trade's P&L, 0.0 otherwise."""
    pnl = calculate_trade_pnl(trade)
    return abs(pnl) if pnl < 0 else 0.0


def calculate_profit_percentage(trade: Trade) -> float:
    """Percentage move from entry to exit, signed by direction.

    Divides by entry price only. An unrealized trade and a zero entry
    price both give 0.0.
    """
    if not is_realized(trade) or trade.entry_price == 0:
        return 0.0

    return direction_multiplier(trade) * ((trade.exit_price - trade.entry_price) / trade.entry_price) * 100


def is_realized(trade: Trade) -> bool:
    """True when the trade carries enough data for a P&L figure.

    A zero exit price counts as realized, e.g. an option expiring worthless.
    """
    return trade.entry_price is not None and not trade.is_open


def format_pnl(trade: Trade) -> str:
    """Display string for a trade's P&L, "N/A" while unrealized."""
    if not is_realized(trade):
        return "N/A"
    return f"{calculate_trade_pnl(trade):.2f}"
