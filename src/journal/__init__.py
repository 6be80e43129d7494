"""Journal module for trade records, persistence and analytics."""

from .journal_manager import JournalManager
from .metrics_calculator import MetricsCalculator
from .models import Direction, Outcome, PatternAnalysis, Trade, TradeType, TradingMetrics
from .pattern_analyzer import PatternAnalyzer
from .settings import JournalSettings
from .trade_store import DailyTradeLimitError, TradeStore

__all__ = [
    "DailyTradeLimitError",
    "Direction",
    "JournalManager",
    "JournalSettings",
    "MetricsCalculator",
    "Outcome",
    "PatternAnalysis",
    "PatternAnalyzer",
    "Trade",
    "TradeStore",
    "TradeType",
    "TradingMetrics",
]
