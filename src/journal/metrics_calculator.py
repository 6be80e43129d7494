# src/journal/metrics_calculator.py
"""Calculator for trading performance metrics."""
from src.journal.aggregations import calculate_max_drawdown
from src.journal.consistency import calculate_consistency_score, group_by_day
from src.journal.models import Outcome, Trade, TradingMetrics
from src.journal.pnl import calculate_total_pnl, calculate_trade_pnl
from src.journal.risk_metrics import (
    calculate_daily_returns,
    calculate_expectancy,
    calculate_profit_factor,
    calculate_sharpe_ratio,
    completed_trades,
)


class MetricsCalculator:
    """Calculates trading performance metrics from journal trades."""

    def calculate(self, trades: list[Trade]) -> TradingMetrics:
        """Calculate trading metrics from a trade list.

        Args:
            trades: Trades to analyze, in chronological order.

        Returns:
            TradingMetrics with all calculated values.
        """
        completed = completed_trades(trades)

        if not completed:
            return self._empty_metrics(len(trades))

        winners = [t for t in completed if t.outcome == Outcome.PROFIT]
        losers = [t for t in completed if t.outcome == Outcome.LOSS]

        avg_daily_win_rate, avg_profit_day, avg_loss_day = self._calculate_daily_stats(trades)
        risk_reward = avg_profit_day / avg_loss_day if avg_loss_day else 0.0

        best_trade = max(completed, key=calculate_trade_pnl)
        worst_trade = min(completed, key=calculate_trade_pnl)

        return TradingMetrics(
            total_trades=len(trades),
            completed_trades=len(completed),
            winning_trades=len(winners),
            losing_trades=len(losers),
            win_rate=len(winners) / len(completed),
            avg_daily_win_rate=avg_daily_win_rate,
            profit_factor=calculate_profit_factor(completed),
            expectancy=calculate_expectancy(completed),
            avg_profit_day=avg_profit_day,
            avg_loss_day=avg_loss_day,
            risk_reward=risk_reward,
            total_pnl=calculate_total_pnl(completed),
            max_drawdown_percent=calculate_max_drawdown(trades),
            sharpe_ratio=calculate_sharpe_ratio(calculate_daily_returns(trades)),
            consistency_score=calculate_consistency_score(trades),
            best_trade=best_trade,
            worst_trade=worst_trade,
        )

    def _empty_metrics(self, total_trades: int) -> TradingMetrics:
        """Return metrics with zero values when nothing is realized."""
        return TradingMetrics(
            total_trades=total_trades,
            completed_trades=0,
            winning_trades=0,
            losing_trades=0,
            win_rate=0.0,
            avg_daily_win_rate=0.0,
            profit_factor=0.0,
            expectancy=0.0,
            avg_profit_day=0.0,
            avg_loss_day=0.0,
            risk_reward=0.0,
            total_pnl=0.0,
            max_drawdown_percent=0.0,
            sharpe_ratio=0.0,
            consistency_score="0.0",
            best_trade=None,
            worst_trade=None,
        )

    def _calculate_daily_stats(self, trades: list[Trade]) -> tuple[float, float, float]:
        """Calculate per-day win rate and average profit/loss day.

        Args:
            trades: All trades, open ones included.

        Returns:
            Tuple of (avg_daily_win_rate, avg_profit_day, avg_loss_day), with
            the loss figure as a positive amount.
        """
        daily_win_rates: list[float] = []
        daily_pnls: list[float] = []

        for day_trades in group_by_day(trades).values():
            profit_trades = [t for t in day_trades if t.outcome == Outcome.PROFIT]
            daily_win_rates.append(len(profit_trades) / len(day_trades))
            daily_pnls.append(calculate_total_pnl(day_trades))

        profit_days = [p for p in daily_pnls if p > 0]
        loss_days = [p for p in daily_pnls if p < 0]

        avg_daily_win_rate = sum(daily_win_rates) / len(daily_win_rates)
        avg_profit_day = sum(profit_days) / len(profit_days) if profit_days else 0.0
        avg_loss_day = abs(sum(loss_days) / len(loss_days)) if loss_days else 0.0

        return avg_daily_win_rate, avg_profit_day, avg_loss_day
