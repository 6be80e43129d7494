"""AI analysis of journal trades."""

from .prompts import SYSTEM_PROMPT, build_analysis_prompt
from .settings import AnalysisSettings
from .trade_analyzer import AnalysisError, TradeAnalyzer

__all__ = [
    "AnalysisError",
    "AnalysisSettings",
    "SYSTEM_PROMPT",
    "TradeAnalyzer",
    "build_analysis_prompt",
]
