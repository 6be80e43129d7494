# src/journal/pattern_analyzer.py
"""Analyzer for identifying trading patterns."""
from collections import defaultdict

from src.journal.models import ExitReason, Outcome, PatternAnalysis, Trade, WinLossStats
from src.journal.parsing import parse_trade_time
from src.journal.pnl import calculate_total_pnl, calculate_trade_pnl

SMALL_POSITION_MAX = 10
MEDIUM_POSITION_MAX = 50


class PatternAnalyzer:
    """Analyzes trading patterns from journal trades."""

    def analyze(self, trades: list[Trade]) -> PatternAnalysis:
        """Break trades down by context, behaviour, time and size.

        Args:
            trades: Trades to analyze.

        Returns:
            PatternAnalysis with identified patterns.
        """
        if not trades:
            return self._empty_analysis()

        total_trades = len(trades)
        winning = sum(1 for t in trades if t.outcome == Outcome.PROFIT)
        total_pnl = calculate_total_pnl(trades)

        return PatternAnalysis(
            total_trades=total_trades,
            win_rate=winning / total_trades * 100,
            total_pnl=total_pnl,
            avg_trade_pnl=total_pnl / total_trades,
            profit_factor=self._profit_factor(trades),
            strategy_performance=self._analyze_strategies(trades),
            market_condition_performance=self._group(
                trades, lambda t: t.market_condition.value if t.market_condition else None
            ),
            emotion_analysis=self._group(
                trades, lambda t: t.entry_emotion.value if t.entry_emotion else None
            ),
            time_analysis=self._analyze_hours(trades),
            position_sizing=self._analyze_position_sizing(trades),
            direction_performance=self._group(
                trades, lambda t: t.trade_direction.value if t.trade_direction else None
            ),
            impulsive_vs_planned=self._analyze_impulsiveness(trades),
            stop_loss_usage=self._exit_reason_usage(trades, ExitReason.STOP_LOSS),
            target_usage=self._exit_reason_usage(trades, ExitReason.TARGET),
            manual_overrides=self._exit_reason_usage(trades, ExitReason.MANUAL),
        )

    def _empty_analysis(self) -> PatternAnalysis:
        """Return analysis with default values for empty trade list."""
        return PatternAnalysis(
            total_trades=0,
            win_rate=0.0,
            total_pnl=0.0,
            avg_trade_pnl=0.0,
            profit_factor=0.0,
        )

    def _profit_factor(self, trades: list[Trade]) -> float | None:
        """Gross profit over gross loss; None stands for an unbounded factor."""
        pnls = [calculate_trade_pnl(t) for t in trades]
        sum_profits = sum(p for p in pnls if p > 0)
        sum_losses = abs(sum(p for p in pnls if p < 0))
        if sum_losses > 0:
            return sum_profits / sum_losses
        return None

    def _tally(self, stats: WinLossStats, trade: Trade) -> None:
        stats.count += 1
        if trade.outcome == Outcome.PROFIT:
            stats.wins += 1
        else:
            stats.losses += 1
        stats.total_pnl += calculate_trade_pnl(trade)

    def _group(self, trades: list[Trade], key) -> dict[str, WinLossStats]:
        """Tally trades per key, skipping trades whose key is None."""
        groups: dict[str, WinLossStats] = defaultdict(WinLossStats)
        for trade in trades:
            bucket = key(trade)
            if bucket is not None:
                self._tally(groups[bucket], trade)
        return dict(groups)

    def _analyze_strategies(self, trades: list[Trade]) -> dict[str, WinLossStats]:
        """Tally trades per strategy, with unnamed strategies grouped together."""
        return self._group(trades, lambda t: t.strategy or "Unspecified")

    def _analyze_hours(self, trades: list[Trade]) -> dict[str, WinLossStats]:
        """Tally trades per one-hour entry slot, e.g. "9:00-10:00"."""

        def slot(trade: Trade) -> str | None:
            clock = parse_trade_time(trade.entry_time)
            if clock is None:
                return None
            return f"{clock.hour}:00-{clock.hour + 1}:00"

        return self._group(trades, slot)

    def _analyze_position_sizing(self, trades: list[Trade]) -> dict[str, WinLossStats]:
        """Tally trades per position size bucket (small, medium, large)."""

        def size_bucket(trade: Trade) -> str | None:
            if not trade.quantity:
                return None
            if trade.quantity <= SMALL_POSITION_MAX:
                return "small"
            if trade.quantity <= MEDIUM_POSITION_MAX:
                return "medium"
            return "large"

        return self._group(trades, size_bucket)

    def _analyze_impulsiveness(self, trades: list[Trade]) -> dict[str, WinLossStats]:
        """Tally impulsive against planned trades, skipping unrecorded ones."""

        def label(trade: Trade) -> str | None:
            if trade.is_impulsive is None:
                return None
            return "impulsive" if trade.is_impulsive else "planned"

        return self._group(trades, label)

    def _exit_reason_usage(self, trades: list[Trade], reason: ExitReason) -> float:
        """Percentage of trades closed for the given reason."""
        return sum(1 for t in trades if t.exit_reason == reason) / len(trades) * 100
