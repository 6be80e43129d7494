# src/config/settings.py
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from src.analysis.settings import AnalysisSettings
from src.csv_io.settings import CsvSettings
from src.journal.settings import JournalSettings


class SystemConfig(BaseModel):
    name: str = "Trading Journal"
    version: str = "1.0.0"
    default_user: str = "default"


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    csv: CsvSettings = Field(default_factory=CsvSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides.

        Values under ``analysis`` are used as defaults; OPENAI_* environment
        variables take precedence over them.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        analysis_data = data.pop("analysis", None) or {}
        # Init kwargs outrank the environment, so re-apply what the env sets.
        env_overrides = AnalysisSettings().model_dump(
            exclude={"is_configured"}, exclude_defaults=True
        )
        analysis = AnalysisSettings(**{**analysis_data, **env_overrides})

        return cls(
            **data,
            analysis=analysis,
        )
