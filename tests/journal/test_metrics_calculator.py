# tests/journal/test_metrics_calculator.py
"""Tests for MetricsCalculator."""
import math

import pytest

from src.journal.metrics_calculator import MetricsCalculator
from src.journal.models import Outcome, Trade, TradingMetrics


def make_closed_trade(
    trade_id: str,
    pnl: float,
    outcome: Outcome,
    entry_date: str = "01-06-2023",
    entry_time: str = "10:00:00",
) -> Trade:
    """Create a closed single-unit trade with a stop loss."""
    return Trade(
        id=trade_id,
        symbol="NIFTY",
        entry_price=100.0,
        exit_price=100.0 + pnl,
        quantity=1.0,
        outcome=outcome,
        entry_date=entry_date,
        entry_time=entry_time,
        stop_loss=95.0,
    )


def make_open_trade(trade_id: str) -> Trade:
    """Create an open trade for testing."""
    return Trade(
        id=trade_id,
        symbol="NIFTY",
        entry_price=100.0,
        quantity=1.0,
        entry_date="01-06-2023",
        entry_time="10:00:00",
    )


def make_sample_trades() -> list[Trade]:
    """Two trading days: +100 and -40 on day one, +50 on day two."""
    return [
        make_closed_trade("1", 100.0, Outcome.PROFIT, entry_time="10:00:00"),
        make_closed_trade("2", -40.0, Outcome.LOSS, entry_time="11:00:00"),
        make_closed_trade("3", 50.0, Outcome.PROFIT, entry_date="02-06-2023"),
    ]


class TestMetricsCalculator:
    """Tests for MetricsCalculator."""

    def test_calculate_with_no_trades(self) -> None:
        """calculate should return zero metrics when no trades provided."""
        metrics = MetricsCalculator().calculate([])

        assert isinstance(metrics, TradingMetrics)
        assert metrics.total_trades == 0
        assert metrics.completed_trades == 0
        assert metrics.win_rate == 0.0
        assert metrics.profit_factor == 0.0
        assert metrics.expectancy == 0.0
        assert metrics.consistency_score == "0.0"
        assert metrics.best_trade is None
        assert metrics.worst_trade is None

    def test_open_trades_only_gives_zero_metrics(self) -> None:
        metrics = MetricsCalculator().calculate([make_open_trade("1"), make_open_trade("2")])

        assert metrics.total_trades == 2
        assert metrics.completed_trades == 0
        assert metrics.total_pnl == 0.0

    def test_calculate_counts_and_win_rate(self) -> None:
        metrics = MetricsCalculator().calculate(make_sample_trades() + [make_open_trade("4")])

        assert metrics.total_trades == 4
        assert metrics.completed_trades == 3
        assert metrics.winning_trades == 2
        assert metrics.losing_trades == 1
        assert metrics.win_rate == pytest.approx(2 / 3)

    def test_calculate_daily_figures(self) -> None:
        """Win rate and profit/loss days are averaged per calendar day."""
        metrics = MetricsCalculator().calculate(make_sample_trades())

        # day one wins 1 of 2, day two wins 1 of 1
        assert metrics.avg_daily_win_rate == pytest.approx(0.75)
        # daily P&L is +60 and +50, no losing day
        assert metrics.avg_profit_day == pytest.approx(55.0)
        assert metrics.avg_loss_day == 0.0
        assert metrics.risk_reward == 0.0

    def test_calculate_risk_metrics(self) -> None:
        metrics = MetricsCalculator().calculate(make_sample_trades())

        assert metrics.profit_factor == pytest.approx(3.75)
        assert metrics.expectancy == pytest.approx(36.67, abs=0.01)
        assert metrics.total_pnl == pytest.approx(110.0)
        assert metrics.max_drawdown_percent == pytest.approx(40.0)
        # daily returns 60 and 50: mean 55, deviation 5
        assert metrics.sharpe_ratio == pytest.approx(11.0 * math.sqrt(252))
        assert metrics.consistency_score == "100.0"

    def test_calculate_risk_reward_with_losing_day(self) -> None:
        trades = [
            make_closed_trade("1", 90.0, Outcome.PROFIT),
            make_closed_trade("2", -30.0, Outcome.LOSS, entry_date="02-06-2023"),
        ]

        metrics = MetricsCalculator().calculate(trades)

        assert metrics.avg_loss_day == pytest.approx(30.0)
        assert metrics.risk_reward == pytest.approx(3.0)

    def test_calculate_best_worst_trades(self) -> None:
        metrics = MetricsCalculator().calculate(make_sample_trades())

        assert metrics.best_trade is not None
        assert metrics.best_trade.id == "1"
        assert metrics.worst_trade is not None
        assert metrics.worst_trade.id == "2"


class TestTradingMetricsDisplay:
    """Tests for TradingMetrics.to_display."""

    def test_display_without_completed_trades(self) -> None:
        display = MetricsCalculator().calculate([]).to_display()

        assert display == {
            "win_rate": "0%",
            "avg_profit": "₹0",
            "avg_loss": "₹0",
            "risk_reward": "0",
            "max_drawdown": "0%",
            "consistency_score": "0%",
        }

    def test_display_formats_values(self) -> None:
        display = MetricsCalculator().calculate(make_sample_trades()).to_display("$")

        assert display["win_rate"] == "75.0%"
        assert display["avg_profit"] == "$55.00"
        assert display["avg_loss"] == "$0.00"
        assert display["risk_reward"] == "0"
        assert display["max_drawdown"] == "40.0%"
        assert display["consistency_score"] == "100.0%"
