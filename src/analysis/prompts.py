# src/analysis/prompts.py
"""Prompt construction for the AI trade analysis."""
import json

from src.journal.models import PatternAnalysis, Trade, WinLossStats
from src.journal.parsing import trade_to_record

SYSTEM_PROMPT = (
    "You are a professional trading analyst. "
    "Provide clear, actionable insights in a concise format."
)

DEFAULT_SAMPLE_SIZE = 5

DEFAULT_PROMPT = """As a trading analyst, analyze these trading patterns:

Trading Summary:
- Total Trades: {{totalTrades}}
- Win Rate: {{winRate}}%
- Total P&L: {{totalPnL}}
- Average Trade P&L: {{avgTradePnL}}
- Profit Factor: {{profitFactor}}

Strategy Performance:
{{strategyPerformance}}

Market Conditions:
{{marketConditionPerformance}}

Emotional Analysis:
{{emotionAnalysis}}

Time Analysis:
{{timeAnalysis}}

Position Sizing:
{{positionSizing}}

Trade Direction:
{{directionPerformance}}

Impulsive vs Planned:
{{impulsiveVsPlanned}}

Risk Management:
{{riskMetrics}}

Provide specific insights on:
1. Pattern analysis of winning vs losing trades
2. Strategy effectiveness
3. Risk management suggestions
4. Concrete recommendations for improvement
5. How emotions are affecting trading decisions

Trades data (sample): {{tradesData}}"""

PROMPT_VARIABLES = (
    "totalTrades",
    "winRate",
    "totalPnL",
    "avgTradePnL",
    "profitFactor",
    "strategyPerformance",
    "marketConditionPerformance",
    "emotionAnalysis",
    "timeAnalysis",
    "positionSizing",
    "directionPerformance",
    "impulsiveVsPlanned",
    "riskMetrics",
    "tradesData",
)


def _pnl_lines(groups: dict[str, WinLossStats]) -> str:
    return "\n".join(
        f"{name}: {s.wins} wins, {s.losses} losses, P&L: {s.total_pnl:.2f}"
        for name, s in groups.items()
    )


def _win_rate_lines(groups: dict[str, WinLossStats]) -> str:
    return "\n".join(
        f"{name}: {s.wins} wins, {s.losses} losses, Win Rate: {s.win_rate:.1f}%"
        for name, s in groups.items()
    )


def _sizing_lines(groups: dict[str, WinLossStats]) -> str:
    lines = []
    for size, s in groups.items():
        win_rate = s.wins / s.count * 100 if s.count else 0.0
        lines.append(
            f"{size}: {s.count} trades, Win Rate: {win_rate:.1f}%, P&L: {s.total_pnl:.2f}"
        )
    return "\n".join(lines)


def format_profit_factor(profit_factor: float | None) -> str:
    """Two decimals, or the infinity sign when there were no losses."""
    if profit_factor is None:
        return "∞"
    return f"{profit_factor:.2f}"


def prompt_variables(
    stats: PatternAnalysis, trades: list[Trade], sample_size: int = DEFAULT_SAMPLE_SIZE
) -> dict[str, str]:
    """Render every prompt variable from pattern statistics and trades."""
    sample = [trade_to_record(t) for t in trades[:sample_size]]
    return {
        "totalTrades": str(stats.total_trades),
        "winRate": f"{stats.win_rate:.1f}",
        "totalPnL": f"{stats.total_pnl:.2f}",
        "avgTradePnL": f"{stats.avg_trade_pnl:.2f}",
        "profitFactor": format_profit_factor(stats.profit_factor),
        "strategyPerformance": _pnl_lines(stats.strategy_performance),
        "marketConditionPerformance": _win_rate_lines(stats.market_condition_performance),
        "emotionAnalysis": _win_rate_lines(stats.emotion_analysis),
        "timeAnalysis": _pnl_lines(stats.time_analysis),
        "positionSizing": _sizing_lines(stats.position_sizing),
        "directionPerformance": _pnl_lines(stats.direction_performance),
        "impulsiveVsPlanned": _win_rate_lines(stats.impulsive_vs_planned),
        "riskMetrics": (
            f"Stop loss usage: {stats.stop_loss_usage:.1f}%\n"
            f"Take profit usage: {stats.target_usage:.1f}%\n"
            f"Manual overrides: {stats.manual_overrides:.1f}%"
        ),
        "tradesData": json.dumps(sample, ensure_ascii=False),
    }


def build_analysis_prompt(
    stats: PatternAnalysis,
    trades: list[Trade],
    custom_prompt: str | None = None,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> str:
    """Build the user prompt for the analysis request.

    A custom prompt may reference any of the ``{{name}}`` placeholders in
    PROMPT_VARIABLES; every occurrence is substituted. Unknown placeholders
    are left as written.

    Args:
        stats: Pattern statistics for the trades.
        trades: Trades being analyzed; the first ``sample_size`` are embedded.
        custom_prompt: Template to use instead of the default prompt.
        sample_size: Number of trades included as raw data.

    Returns:
        The prompt text.
    """
    template = custom_prompt if custom_prompt and custom_prompt.strip() else DEFAULT_PROMPT
    prompt = template
    for name, value in prompt_variables(stats, trades, sample_size).items():
        prompt = prompt.replace("{{" + name + "}}", value)
    return prompt
