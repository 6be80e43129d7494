# src/journal/settings.py
"""Settings for the journal module."""
from pydantic import BaseModel, Field, field_validator


class JournalSettings(BaseModel):
    """Configuration settings for the trading journal.

    Attributes:
        enabled: Whether journaling is enabled.
        data_dir: Directory to store per-user trade JSON files.
        enforce_daily_limit: Reject journal entries beyond the daily limit.
        max_trades_per_day: Trades a user may log per calendar day.
        currency_symbol: Symbol used when formatting money for display.
    """

    enabled: bool = True
    data_dir: str = "data/trades"

    enforce_daily_limit: bool = True
    max_trades_per_day: int = Field(default=1, ge=1, le=50)

    currency_symbol: str = "₹"

    @field_validator("currency_symbol")
    @classmethod
    def validate_currency_symbol(cls, v: str) -> str:
        """Validate that currency_symbol is a short non-empty string."""
        stripped = v.strip()
        if not stripped or len(stripped) > 3:
            raise ValueError(f"Invalid currency symbol: {v!r}. Must be 1-3 characters")
        return stripped
