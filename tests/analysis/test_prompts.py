# tests/analysis/test_prompts.py
"""Tests for analysis prompt construction."""
import json

import pytest

from src.analysis.prompts import (
    DEFAULT_PROMPT,
    PROMPT_VARIABLES,
    build_analysis_prompt,
    format_profit_factor,
    prompt_variables,
)
from src.journal.models import (
    Direction,
    EntryEmotion,
    ExitReason,
    MarketCondition,
    Outcome,
    Trade,
)
from src.journal.pattern_analyzer import PatternAnalyzer


def make_trade(
    pnl: float,
    outcome: Outcome,
    strategy: str = "breakout",
    entry_emotion: EntryEmotion | None = EntryEmotion.CONFIDENT,
    exit_reason: ExitReason | None = ExitReason.TARGET,
) -> Trade:
    """Create a closed single-unit trade."""
    return Trade(
        symbol="NIFTY",
        entry_price=100.0,
        exit_price=100.0 + pnl,
        quantity=1.0,
        outcome=outcome,
        strategy=strategy,
        entry_date="01-06-2023",
        entry_time="10:15:00",
        market_condition=MarketCondition.TRENDING,
        entry_emotion=entry_emotion,
        exit_reason=exit_reason,
    )


def make_trades() -> list[Trade]:
    return [
        make_trade(100.0, Outcome.PROFIT),
        make_trade(50.0, Outcome.PROFIT, strategy="reversal"),
        make_trade(-40.0, Outcome.LOSS, entry_emotion=EntryEmotion.FOMO, exit_reason=ExitReason.STOP_LOSS),
    ]


class TestDefaultPrompt:
    """Tests for the default analysis prompt."""

    def test_summary_section(self) -> None:
        trades = make_trades()
        prompt = build_analysis_prompt(PatternAnalyzer().analyze(trades), trades)

        assert prompt.startswith("As a trading analyst, analyze these trading patterns:")
        assert "- Total Trades: 3" in prompt
        assert "- Win Rate: 66.7%" in prompt
        assert "- Total P&L: 110.00" in prompt
        assert "- Average Trade P&L: 36.67" in prompt
        assert "- Profit Factor: 3.75" in prompt

    def test_breakdown_sections(self) -> None:
        trades = make_trades()
        prompt = build_analysis_prompt(PatternAnalyzer().analyze(trades), trades)

        assert "breakout: 1 wins, 1 losses, P&L: 60.00" in prompt
        assert "trending: 2 wins, 1 losses, Win Rate: 66.7%" in prompt
        assert "fomo: 0 wins, 1 losses, Win Rate: 0.0%" in prompt
        assert "10:00-11:00: 2 wins, 1 losses, P&L: 110.00" in prompt
        assert "small: 3 trades, Win Rate: 66.7%, P&L: 110.00" in prompt
        assert "Stop loss usage: 33.3%" in prompt
        assert "Take profit usage: 66.7%" in prompt
        assert "Manual overrides: 0.0%" in prompt
        assert "5. How emotions are affecting trading decisions" in prompt
        assert "{{" not in prompt

    def test_direction_and_impulsiveness_sections(self) -> None:
        trades = make_trades()
        trades[0].trade_direction = Direction.LONG
        trades[2].trade_direction = Direction.LONG
        trades[2].is_impulsive = True

        prompt = build_analysis_prompt(PatternAnalyzer().analyze(trades), trades)

        assert "long: 1 wins, 1 losses, P&L: 60.00" in prompt
        assert "impulsive: 0 wins, 1 losses, Win Rate: 0.0%" in prompt

    def test_trade_sample_is_limited(self) -> None:
        trades = [make_trade(float(i), Outcome.PROFIT) for i in range(1, 8)]
        prompt = build_analysis_prompt(PatternAnalyzer().analyze(trades), trades)

        sample = json.loads(prompt.split("Trades data (sample): ", 1)[1])
        assert len(sample) == 5
        assert sample[0]["outcome"] == "profit"

    def test_blank_custom_prompt_uses_default(self) -> None:
        trades = make_trades()
        stats = PatternAnalyzer().analyze(trades)

        assert build_analysis_prompt(stats, trades, "   ") == build_analysis_prompt(stats, trades)


class TestCustomPrompt:
    """Tests for custom prompt substitution."""

    def test_variables_are_substituted(self) -> None:
        trades = make_trades()
        stats = PatternAnalyzer().analyze(trades)

        prompt = build_analysis_prompt(
            stats, trades, "{{totalTrades}} trades, P&L {{totalPnL}}, PF {{profitFactor}}"
        )

        assert prompt == "3 trades, P&L 110.00, PF 3.75"

    def test_repeated_and_unknown_placeholders(self) -> None:
        trades = make_trades()
        stats = PatternAnalyzer().analyze(trades)

        prompt = build_analysis_prompt(stats, trades, "{{winRate}} / {{winRate}} / {{mood}}")

        assert prompt == "66.7 / 66.7 / {{mood}}"

    def test_every_variable_is_rendered(self) -> None:
        trades = make_trades()
        values = prompt_variables(PatternAnalyzer().analyze(trades), trades)

        assert set(values) == set(PROMPT_VARIABLES)
        assert all("{{" + name + "}}" in DEFAULT_PROMPT for name in PROMPT_VARIABLES)


class TestFormatProfitFactor:
    """Tests for format_profit_factor."""

    @pytest.mark.parametrize("value,expected", [(None, "∞"), (1.5, "1.50"), (0.0, "0.00")])
    def test_format(self, value, expected) -> None:
        assert format_profit_factor(value) == expected
