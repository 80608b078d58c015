"""
Unit tests for settings.
"""

import pytest
from pydantic import ValidationError

from config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PATHFINDER_GEMINI_MODEL", raising=False)
        monkeypatch.delenv("PATHFINDER_RETRY_DELAYS_MS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.gemini_model == "gemini-2.5-flash-preview-09-2025"
        assert settings.retry_delays_ms == [1000, 2000, 4000]
        assert settings.progress_file.name == "progress.json"

    def test_env_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PATHFINDER_GEMINI_API_KEY", "secret")
        monkeypatch.setenv("PATHFINDER_PROGRESS_FILE", str(tmp_path / "p.json"))
        monkeypatch.setenv("PATHFINDER_RETRY_DELAYS_MS", "[10, 20]")

        settings = Settings(_env_file=None)

        assert settings.gemini_api_key == "secret"
        assert settings.progress_file == tmp_path / "p.json"
        assert settings.retry_delays_ms == [10, 20]

    @pytest.mark.parametrize("level", ["info", "Info", " warning "])
    def test_log_level_case_insensitive(self, monkeypatch, level):
        monkeypatch.setenv("PATHFINDER_LOG_LEVEL", level)

        settings = Settings(_env_file=None)

        assert settings.log_level == level.strip().upper()

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="loud")

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, retry_delays_ms=[1000, -1])

    def test_mentor_config_hides_key(self):
        config = Settings(_env_file=None, gemini_api_key="secret").get_mentor_config()

        assert config["api_key_configured"] is True
        assert "secret" not in str(config)
