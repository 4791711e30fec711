# tests/test_config.py
import pytest
from pydantic import ValidationError

from site_api.core.config import Settings
from site_api.services.industry_matcher import MatcherConfig


def test_matcher_config_from_settings(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    monkeypatch.setenv("MATCHER_FALLBACK_SLUG", "advisory")
    monkeypatch.setenv("MATCHER_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("MATCHER_MAX_DESCRIPTION_LENGTH", "500")

    config = MatcherConfig.from_settings(Settings(_env_file=None))

    assert config.api_key == "sk-test"
    assert config.fallback_slug == "advisory"
    assert config.timeout_seconds == 7.5
    assert config.max_description_length == 500


def test_matcher_defaults(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    s = Settings(_env_file=None)

    assert s.anthropic_api_key is None
    assert s.matcher_fallback_slug == "professional-services"
    assert s.anthropic_max_tokens == 300


@pytest.mark.parametrize(
    "name, value",
    [
        ("ENVIRONMENT", "prod"),
        ("LOG_LEVEL", "verbose"),
        ("LOG_FORMAT", "xml"),
        ("MATCHER_TIMEOUT_SECONDS", "0"),
        ("MATCHER_MAX_DESCRIPTION_LENGTH", "0"),
    ],
)
def test_invalid_settings_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_list_settings_are_split(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("ALLOWED_HOSTS", "")

    s = Settings(_env_file=None)

    assert s.origins() == ["https://a.example", "https://b.example"]
    assert s.hosts() == ["*"]
