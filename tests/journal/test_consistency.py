# tests/journal/test_consistency.py
"""Tests for the consistency score."""
import pytest

from src.journal.consistency import (
    calculate_consistency_score,
    calculate_day_penalty,
    group_by_day,
    is_outside_market_hours,
)
from src.journal.models import Trade


def make_trade(
    entry_date: str | None = "01-06-2023",
    entry_time: str | None = "10:00:00",
    stop_loss: float | None = 95.0,
    timestamp: str = "",
) -> Trade:
    """Create a Trade for testing."""
    return Trade(
        symbol="NIFTY",
        entry_price=100.0,
        exit_price=105.0,
        quantity=10.0,
        entry_date=entry_date,
        entry_time=entry_time,
        stop_loss=stop_loss,
        timestamp=timestamp,
    )


class TestConsistencyScore:
    """Tests for calculate_consistency_score."""

    def test_empty_list_scores_zero(self) -> None:
        assert calculate_consistency_score([]) == "0.0"

    def test_disciplined_day_scores_full(self) -> None:
        trades = [make_trade() for _ in range(3)]
        assert calculate_consistency_score(trades) == "100.0"

    def test_four_trades_in_one_day_triggers_overtrading(self) -> None:
        trades = [make_trade() for _ in range(4)]
        assert calculate_consistency_score(trades) == "95.0"

    def test_three_trades_in_one_day_is_not_overtrading(self) -> None:
        assert calculate_day_penalty([make_trade() for _ in range(3)]) == 0.0

    def test_overtrading_is_counted_per_day(self) -> None:
        """Trades spread over two days do not add up to overtrading."""
        trades = [make_trade(entry_date="01-06-2023") for _ in range(3)]
        trades += [make_trade(entry_date="02-06-2023") for _ in range(3)]
        assert calculate_consistency_score(trades) == "100.0"

    def test_missing_stop_loss_is_proportional(self) -> None:
        trades = [make_trade(), make_trade(stop_loss=None)]
        # half the day's trades without stop loss: 15 * 0.5
        assert calculate_consistency_score(trades) == "92.5"

    def test_off_hours_trade_is_penalized(self) -> None:
        assert calculate_consistency_score([make_trade(entry_time="09:00:00")]) == "80.0"

    def test_score_is_clamped_at_zero(self) -> None:
        trades = [
            make_trade(entry_date=f"0{day}-06-2023", entry_time="16:00:00", stop_loss=None)
            for day in range(1, 4)
        ]
        # three days of 35 penalty points each
        assert calculate_consistency_score(trades) == "0.0"

    @pytest.mark.parametrize("count", [1, 5, 12, 40])
    def test_score_stays_within_bounds(self, count) -> None:
        trades = [make_trade(entry_time="20:00:00", stop_loss=None) for _ in range(count)]
        score = float(calculate_consistency_score(trades))
        assert 0.0 <= score <= 100.0


class TestMarketHours:
    """Tests for is_outside_market_hours."""

    @pytest.mark.parametrize(
        "entry_time,outside",
        [
            ("09:14:00", True),
            ("09:15:00", False),
            ("12:00:00", False),
            ("15:30:00", False),
            ("15:31:00", True),
            ("02:30 PM", False),
        ],
    )
    def test_window_boundaries(self, entry_time, outside) -> None:
        assert is_outside_market_hours(make_trade(entry_time=entry_time)) is outside

    def test_falls_back_to_creation_timestamp(self) -> None:
        trade = make_trade(entry_time=None, timestamp="2023-06-01T08:00:00")
        assert is_outside_market_hours(trade) is True

    def test_unknown_time_is_not_penalized(self) -> None:
        assert is_outside_market_hours(make_trade(entry_time=None)) is False


class TestGroupByDay:
    """Tests for group_by_day."""

    def test_undated_trades_are_grouped_together(self) -> None:
        trades = [
            make_trade(entry_date="01-06-2023"),
            make_trade(entry_date=None),
            make_trade(entry_date=None),
        ]

        groups = group_by_day(trades)

        assert len(groups[None]) == 2
        assert len(groups) == 2
