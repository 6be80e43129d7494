# src/analysis/trade_analyzer.py
"""AI feedback on journal trades via the OpenAI chat completion API."""
import logging

from openai import AsyncOpenAI

from src.analysis.prompts import SYSTEM_PROMPT, build_analysis_prompt
from src.analysis.settings import AnalysisSettings
from src.journal.models import Trade
from src.journal.pattern_analyzer import PatternAnalyzer

logger = logging.getLogger(__name__)


class AnalysisError(RuntimeError):
    """Raised when an AI analysis cannot be produced."""


class TradeAnalyzer:
    """Turns trade statistics into written feedback from a language model."""

    def __init__(
        self,
        settings: AnalysisSettings,
        client: AsyncOpenAI | None = None,
        pattern_analyzer: PatternAnalyzer | None = None,
    ):
        """Initialize the analyzer.

        Args:
            settings: Model and credential settings.
            client: Preconfigured client; built from settings when omitted.
            pattern_analyzer: Statistics source for the prompt.
        """
        self._settings = settings
        self._client = client
        self._patterns = pattern_analyzer or PatternAnalyzer()

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._settings.api_key,
                base_url=self._settings.base_url,
            )
        return self._client

    async def analyze(self, trades: list[Trade], custom_prompt: str | None = None) -> str:
        """Request an analysis of the given trades.

        Args:
            trades: Trades to analyze.
            custom_prompt: Optional prompt template with ``{{variables}}``.

        Returns:
            The model's analysis text.

        Raises:
            AnalysisError: If the API key is missing, there are no trades,
                the API call fails, or the response has no content.
        """
        if not self._settings.is_configured:
            raise AnalysisError("OpenAI API key is not configured")
        if not trades:
            raise AnalysisError("No trades to analyze")

        stats = self._patterns.analyze(trades)
        prompt = build_analysis_prompt(
            stats, trades, custom_prompt, sample_size=self._settings.sample_size
        )

        logger.info(f"Requesting analysis of {len(trades)} trades from {self._settings.model}")
        try:
            response = await self._get_client().chat.completions.create(
                model=self._settings.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise AnalysisError(f"OpenAI API error: {e}") from e

        if not response.choices:
            raise AnalysisError("Invalid response from OpenAI")

        content = response.choices[0].message.content
        if not content:
            raise AnalysisError("Invalid response from OpenAI")

        logger.info("Received analysis from OpenAI")
        return content
