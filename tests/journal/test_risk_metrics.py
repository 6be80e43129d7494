# tests/journal/test_risk_metrics.py
"""Tests for risk metrics."""
import math

import pytest

from src.journal.models import Outcome, Trade
from src.journal.risk_metrics import (
    TRADING_DAYS_PER_YEAR,
    calculate_daily_returns,
    calculate_expectancy,
    calculate_profit_factor,
    calculate_sharpe_ratio,
    completed_trades,
)


def make_trade(
    pnl: float,
    outcome: Outcome,
    entry_date: str = "01-06-2023",
    quantity: float | None = 1.0,
) -> Trade:
    """Create a long trade with the given P&L on one unit."""
    return Trade(
        symbol="BANKNIFTY",
        entry_price=100.0,
        exit_price=100.0 + pnl,
        quantity=quantity,
        outcome=outcome,
        entry_date=entry_date,
        entry_time="10:00:00",
    )


class TestSharpeRatio:
    """Tests for calculate_sharpe_ratio."""

    def test_empty_returns_zero(self) -> None:
        assert calculate_sharpe_ratio([]) == 0.0

    def test_constant_returns_zero(self) -> None:
        """Zero deviation must not divide by zero."""
        assert calculate_sharpe_ratio([5.0, 5.0, 5.0]) == 0.0

    def test_uses_population_deviation(self) -> None:
        # mean 2, population variance 1, deviation 1
        expected = 2.0 * math.sqrt(TRADING_DAYS_PER_YEAR)
        assert calculate_sharpe_ratio([1.0, 3.0]) == pytest.approx(expected)


class TestExpectancy:
    """Tests for calculate_expectancy."""

    def test_two_wins_one_loss(self) -> None:
        """Wins of 100 and 50 with a loss of 40 give 2/3*75 - 1/3*40."""
        trades = [
            make_trade(100.0, Outcome.PROFIT),
            make_trade(50.0, Outcome.PROFIT),
            make_trade(-40.0, Outcome.LOSS),
        ]

        assert calculate_expectancy(trades) == pytest.approx(36.67, abs=0.01)

    def test_no_completed_trades_is_zero(self) -> None:
        trades = [make_trade(100.0, Outcome.PROFIT, quantity=None)]
        assert calculate_expectancy(trades) == 0.0

    def test_outcome_label_decides_winners(self) -> None:
        """A trade labelled as a loss counts as a loss whatever its P&L sign."""
        trades = [
            make_trade(20.0, Outcome.LOSS),
            make_trade(20.0, Outcome.PROFIT),
        ]
        # 0.5 * 20 - 0.5 * 20
        assert calculate_expectancy(trades) == pytest.approx(0.0)

    def test_breakeven_counts_toward_total_only(self) -> None:
        trades = [
            make_trade(60.0, Outcome.PROFIT),
            make_trade(0.0, Outcome.BREAKEVEN),
        ]
        # win rate 0.5, avg win 60, no losers
        assert calculate_expectancy(trades) == pytest.approx(30.0)

    def test_worthless_exit_counts_as_completed(self) -> None:
        trades = [
            make_trade(60.0, Outcome.PROFIT),
            make_trade(-100.0, Outcome.LOSS),
        ]

        assert len(completed_trades(trades)) == 2
        # 0.5 * 60 - 0.5 * 100
        assert calculate_expectancy(trades) == pytest.approx(-20.0)


class TestProfitFactor:
    """Tests for calculate_profit_factor."""

    def test_gross_profit_over_gross_loss(self) -> None:
        trades = [
            make_trade(100.0, Outcome.PROFIT),
            make_trade(50.0, Outcome.PROFIT),
            make_trade(-40.0, Outcome.LOSS),
        ]
        assert calculate_profit_factor(trades) == pytest.approx(3.75)

    def test_no_losses_is_zero(self) -> None:
        assert calculate_profit_factor([make_trade(100.0, Outcome.PROFIT)]) == 0.0


class TestDailyReturns:
    """Tests for calculate_daily_returns and completed_trades."""

    def test_sums_per_day_in_date_order(self) -> None:
        trades = [
            make_trade(50.0, Outcome.PROFIT, entry_date="02-06-2023"),
            make_trade(100.0, Outcome.PROFIT, entry_date="01-06-2023"),
            make_trade(-40.0, Outcome.LOSS, entry_date="01-06-2023"),
        ]

        assert calculate_daily_returns(trades) == pytest.approx([60.0, 50.0])

    def test_open_trades_are_skipped(self) -> None:
        trades = [
            make_trade(100.0, Outcome.PROFIT),
            make_trade(30.0, Outcome.PROFIT, quantity=None),
        ]

        assert len(completed_trades(trades)) == 1
        assert calculate_daily_returns(trades) == pytest.approx([100.0])
