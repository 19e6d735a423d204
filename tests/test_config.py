"""Tests for AppSettings."""

import pytest
from pydantic import ValidationError

from core.config import DEFAULT_DOMAINS, DEFAULT_FACTS_TO_DISPLAY, AppSettings, load_settings
from core.domain.errors import ConfigurationError


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.domains == DEFAULT_DOMAINS
        assert settings.default_facts == DEFAULT_FACTS_TO_DISPLAY
        assert settings.rack_timeout_seconds == 2.0
        assert settings.vnc_base_port == 5900
        assert settings.puppetdb_url.startswith("http://")

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WHATIS_PUPPETDB_URL", "http://puppetdb.example.org:8080")
        monkeypatch.setenv("WHATIS_DOMAINS", '["example.org", ".lab.example.org"]')
        monkeypatch.setenv("WHATIS_RACK_TIMEOUT_SECONDS", "0.5")

        settings = AppSettings()

        assert settings.puppetdb_url == "http://puppetdb.example.org:8080"
        assert settings.domains == [".example.org", ".lab.example.org"]
        assert settings.rack_timeout_seconds == 0.5

    def test_dotenv_in_working_directory(self, tmp_path):
        (tmp_path / ".env").write_text("WHATIS_COBBLER_URL=https://cobbler.lab/cobbler_api\n")
        assert AppSettings().cobbler_url == "https://cobbler.lab/cobbler_api"

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            AppSettings(http_timeout_seconds=0)


class TestLoadSettings:
    def test_valid_environment(self, monkeypatch):
        monkeypatch.setenv("WHATIS_VNC_BASE_PORT", "6000")
        assert load_settings().vnc_base_port == 6000

    def test_validation_error_becomes_configuration_error(self, monkeypatch):
        monkeypatch.setenv("WHATIS_HTTP_TIMEOUT_SECONDS", "0")
        with pytest.raises(ConfigurationError) as excinfo:
            load_settings()
        assert "http_timeout_seconds" in str(excinfo.value)

    def test_undecodable_list_becomes_configuration_error(self, monkeypatch):
        monkeypatch.setenv("WHATIS_DOMAINS", "notjson")
        with pytest.raises(ConfigurationError):
            load_settings()
