# src/analysis/settings.py
"""Settings for the AI trade analysis."""
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """OpenAI connection settings, read from OPENAI_* environment variables.

    Attributes:
        api_key: OpenAI API key; analysis is disabled while empty.
        model: Chat completion model.
        base_url: Alternative API endpoint, None for the default.
        sample_size: Number of trades embedded in the prompt as raw data.
    """

    model_config = SettingsConfigDict(env_prefix="OPENAI_")

    api_key: str = ""
    model: str = "gpt-4o-mini"
    base_url: str | None = None
    sample_size: int = Field(default=5, ge=1, le=50)

    @computed_field
    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip())
