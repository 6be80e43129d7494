# src/journal/journal_manager.py
"""Manager for orchestrating all journal components."""
from datetime import date
from typing import Any

from src.journal.aggregations import (
    calculate_daily_pnl,
    calculate_drawdowns,
    calculate_equity_curve,
    calculate_streaks,
    calculate_trade_duration_stats,
)
from src.journal.metrics_calculator import MetricsCalculator
from src.journal.models import Outcome, Trade
from src.journal.parsing import parse_trade_date
from src.journal.pattern_analyzer import PatternAnalyzer
from src.journal.pnl import calculate_total_pnl
from src.journal.settings import JournalSettings
from src.journal.trade_store import TradeStore


class JournalManager:
    """Orchestrates all journal components for trade logging and analysis.

    Coordinates TradeStore, MetricsCalculator, and PatternAnalyzer to provide
    a unified interface for trade journaling and performance analysis.
    """

    def __init__(self, settings: JournalSettings, store: TradeStore | None = None) -> None:
        """Initialize the journal manager with all components.

        Args:
            settings: Journal configuration settings.
            store: Trade store to use; one is built from settings if omitted.
        """
        self._settings = settings
        self._store = store or TradeStore(settings)
        self._metrics_calculator = MetricsCalculator()
        self._pattern_analyzer = PatternAnalyzer()

    @property
    def store(self) -> TradeStore:
        return self._store

    async def log_trade(self, user_id: str, record: dict[str, Any]) -> Trade | None:
        """Log a trade submitted through the journal form.

        Args:
            user_id: Owner of the trade.
            record: Flat trade record with string or typed values.

        Returns:
            The stored Trade, or None if journaling is disabled.
        """
        if not self._settings.enabled:
            return None

        return await self._store.add_trade(record, user_id)

    async def update_trade(
        self, user_id: str, trade_id: str, changes: dict[str, Any]
    ) -> Trade | None:
        """Apply an edit-form update to a trade.

        Returns:
            The updated Trade, or None if journaling is disabled.
        """
        if not self._settings.enabled:
            return None

        return await self._store.update_trade(user_id, trade_id, changes)

    async def delete_trade(self, user_id: str, trade_id: str) -> None:
        """Delete a trade by id."""
        if not self._settings.enabled:
            return

        await self._store.delete_trade(user_id, trade_id)

    async def get_trades(self, user_id: str) -> list[Trade]:
        """Get a user's trades in chronological order."""
        return await self._store.list_trades(user_id)

    async def get_daily_summary(self, user_id: str, query_date: date) -> dict:
        """Get a summary of trading activity for a specific date.

        Args:
            user_id: Owner of the trades.
            query_date: The date to summarize.

        Returns:
            Dict with date, total_trades, winning_trades, losing_trades,
            total_pnl, and win_rate.
        """
        trades = await self._store.list_trades(user_id)
        day_trades = [t for t in trades if parse_trade_date(t.entry_date) == query_date]

        winning_trades = [t for t in day_trades if t.outcome == Outcome.PROFIT]
        losing_trades = [t for t in day_trades if t.outcome == Outcome.LOSS]

        total_trades = len(day_trades)
        win_rate = len(winning_trades) / total_trades if total_trades > 0 else 0.0

        return {
            "date": query_date,
            "total_trades": total_trades,
            "winning_trades": len(winning_trades),
            "losing_trades": len(losing_trades),
            "total_pnl": calculate_total_pnl(day_trades),
            "win_rate": win_rate,
        }

    async def get_dashboard(self, user_id: str) -> dict:
        """Compute every dashboard view from the user's current trades.

        Returns:
            Dict with metrics (TradingMetrics), display (formatted strings),
            patterns (PatternAnalysis), equity_curve, drawdowns, streaks,
            durations and daily_pnl series.
        """
        trades = await self._store.list_trades(user_id)
        metrics = self._metrics_calculator.calculate(trades)

        return {
            "metrics": metrics,
            "display": metrics.to_display(self._settings.currency_symbol),
            "patterns": self._pattern_analyzer.analyze(trades),
            "equity_curve": calculate_equity_curve(trades),
            "drawdowns": calculate_drawdowns(trades),
            "streaks": calculate_streaks(trades),
            "durations": calculate_trade_duration_stats(trades),
            "daily_pnl": calculate_daily_pnl(trades),
        }
