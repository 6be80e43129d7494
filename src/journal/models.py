# src/journal/models.py
"""Data models for the trading journal."""
from dataclasses import dataclass, field, fields
from enum import Enum


class Direction(str, Enum):
    """Trade direction enumeration."""

    LONG = "long"
    SHORT = "short"


class Outcome(str, Enum):
    """User-asserted result of a trade."""

    PROFIT = "profit"
    LOSS = "loss"
    BREAKEVEN = "breakeven"


class TradeType(str, Enum):
    """Instrument class of a trade."""

    OPTIONS = "options"
    FUTURES = "futures"
    EQUITY = "equity"


class OptionType(str, Enum):
    CALL = "call"
    PUT = "put"


class MarketCondition(str, Enum):
    TRENDING = "trending"
    RANGING = "ranging"
    NEWS_DRIVEN = "news_driven"
    VOLATILE = "volatile"


class Timeframe(str, Enum):
    ONE_MIN = "1min"
    FIVE_MIN = "5min"
    FIFTEEN_MIN = "15min"
    ONE_HOUR = "1hr"


class ExitReason(str, Enum):
    STOP_LOSS = "stop_loss"
    TARGET = "target"
    MANUAL = "manual"
    TIME_BASED = "time_based"


class EntryEmotion(str, Enum):
    FEAR = "fear"
    GREED = "greed"
    FOMO = "fomo"
    REVENGE = "revenge"
    NEUTRAL = "neutral"
    CONFIDENT = "confident"


class ExitEmotion(str, Enum):
    SATISFIED = "satisfied"
    REGRETFUL = "regretful"
    RELIEVED = "relieved"
    FRUSTRATED = "frustrated"


class VwapPosition(str, Enum):
    ABOVE = "above_vwap"
    BELOW = "below_vwap"


class EmaPosition(str, Enum):
    ABOVE = "above_20ema"
    BELOW = "below_20ema"


class TimePressure(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class Trade:
    """A single logged trade.

    Dates are kept as DD-MM-YYYY strings and times as HH:MM[:SS] strings,
    exactly as they are stored. Use ``src.journal.parsing`` to turn them
    into ``date``/``datetime`` values before comparing them.
    """

    symbol: str
    entry_price: float

    id: str = ""
    user_id: str = ""

    # Pricing
    exit_price: float | None = None
    quantity: float | None = None

    # Classification
    trade_type: TradeType = TradeType.OPTIONS
    trade_direction: Direction | None = None
    strategy: str | None = None
    outcome: Outcome = Outcome.BREAKEVEN

    # Timing
    entry_date: str | None = None
    entry_time: str | None = None
    exit_date: str | None = None
    exit_time: str | None = None
    timestamp: str = ""

    # Risk management
    stop_loss: float | None = None
    planned_risk_reward: float | None = None
    actual_risk_reward: float | None = None
    planned_target: float | None = None
    slippage: float | None = None
    post_exit_price: float | None = None
    exit_efficiency: float | None = None
    exit_reason: ExitReason | None = None

    # Options context
    strike_price: float | None = None
    option_type: OptionType | None = None
    vix: float | None = None
    call_iv: float | None = None
    put_iv: float | None = None
    pcr: float | None = None

    # Market context
    market_condition: MarketCondition | None = None
    timeframe: Timeframe | None = None
    vwap_position: VwapPosition | None = None
    ema_position: EmaPosition | None = None

    # Behaviour
    entry_emotion: EntryEmotion | None = None
    exit_emotion: ExitEmotion | None = None
    confidence_level: float | None = None
    confidence_level_score: float | None = None
    emotional_score: float | None = None
    stress_level: float | None = None
    satisfaction_score: float | None = None
    is_impulsive: bool | None = None
    plan_deviation: bool | None = None
    time_pressure: TimePressure | None = None

    # Free text
    notes: str | None = None
    chart_link: str | None = None
    ai_feedback: str | None = None
    analysis_count: int = 0

    @property
    def is_open(self) -> bool:
        """Check if the trade has no realized exit yet."""
        return self.exit_price is None or self.quantity is None


TRADE_FIELDS: list[str] = [f.name for f in fields(Trade)]


@dataclass
class EquityPoint:
    """Running balance after one realized trade."""

    trade_id: str
    date: str | None
    pnl: float
    balance: float


@dataclass
class DrawdownPoint:
    """Drawdown from the running peak after one realized trade."""

    trade_id: str
    date: str | None
    balance: float
    peak: float
    drawdown_percent: float


@dataclass
class StreakRecord:
    """A run of consecutive trades sharing the same outcome."""

    outcome: Outcome
    length: int


@dataclass
class DurationStat:
    """Holding-time statistics for one trading day."""

    date: str
    avg_duration_minutes: float
    total_pnl: float
    avg_pnl: float
    trade_count: int


@dataclass
class DailyPnL:
    """Realized P&L for one trading day."""

    date: str
    pnl: float
    trade_count: int


@dataclass
class TradingMetrics:
    """Calculated trading performance metrics."""

    total_trades: int
    completed_trades: int
    winning_trades: int
    losing_trades: int

    win_rate: float
    avg_daily_win_rate: float
    profit_factor: float
    expectancy: float

    avg_profit_day: float
    avg_loss_day: float
    risk_reward: float

    total_pnl: float
    max_drawdown_percent: float
    sharpe_ratio: float
    consistency_score: str

    best_trade: Trade | None
    worst_trade: Trade | None

    def to_display(self, currency_symbol: str = "₹") -> dict[str, str]:
        """Format the headline metrics for direct display."""
        if self.completed_trades == 0:
            return {
                "win_rate": "0%",
                "avg_profit": f"{currency_symbol}0",
                "avg_loss": f"{currency_symbol}0",
                "risk_reward": "0",
                "max_drawdown": "0%",
                "consistency_score": "0%",
            }

        return {
            "win_rate": f"{self.avg_daily_win_rate * 100:.1f}%",
            "avg_profit": f"{currency_symbol}{self.avg_profit_day:.2f}",
            "avg_loss": f"{currency_symbol}{self.avg_loss_day:.2f}",
            "risk_reward": f"{self.risk_reward:.2f}" if self.avg_loss_day else "0",
            "max_drawdown": f"{self.max_drawdown_percent:.1f}%",
            "consistency_score": f"{self.consistency_score}%",
        }


@dataclass
class WinLossStats:
    """Win/loss tally for one bucket of trades."""

    wins: int = 0
    losses: int = 0
    total_pnl: float = 0.0
    count: int = 0

    @property
    def win_rate(self) -> float:
        """Win rate in percent over decided trades."""
        decided = self.wins + self.losses
        return self.wins / decided * 100 if decided else 0.0


@dataclass
class PatternAnalysis:
    """Breakdown of trading behaviour across contextual dimensions."""

    total_trades: int
    win_rate: float
    total_pnl: float
    avg_trade_pnl: float
    profit_factor: float | None

    strategy_performance: dict[str, WinLossStats] = field(default_factory=dict)
    market_condition_performance: dict[str, WinLossStats] = field(default_factory=dict)
    emotion_analysis: dict[str, WinLossStats] = field(default_factory=dict)
    time_analysis: dict[str, WinLossStats] = field(default_factory=dict)
    position_sizing: dict[str, WinLossStats] = field(default_factory=dict)
    direction_performance: dict[str, WinLossStats] = field(default_factory=dict)
    impulsive_vs_planned: dict[str, WinLossStats] = field(default_factory=dict)

    stop_loss_usage: float = 0.0
    target_usage: float = 0.0
    manual_overrides: float = 0.0
