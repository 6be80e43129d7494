# tests/analysis/test_settings.py
"""Tests for analysis settings."""
import pytest

from src.analysis.settings import AnalysisSettings


class TestAnalysisSettings:
    """Tests for AnalysisSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("OPENAI_API_KEY", "OPENAI_MODEL", "OPENAI_BASE_URL", "OPENAI_SAMPLE_SIZE"):
            monkeypatch.delenv(name, raising=False)

        settings = AnalysisSettings()

        assert settings.api_key == ""
        assert settings.model == "gpt-4o-mini"
        assert settings.base_url is None
        assert settings.sample_size == 5
        assert settings.is_configured is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")

        settings = AnalysisSettings()

        assert settings.api_key == "sk-test"
        assert settings.model == "gpt-4o"
        assert settings.is_configured is True

    def test_blank_key_is_not_configured(self):
        assert AnalysisSettings(api_key="   ").is_configured is False

    @pytest.mark.parametrize("value", [0, 51])
    def test_sample_size_bounds(self, value):
        with pytest.raises(ValueError):
            AnalysisSettings(sample_size=value)
