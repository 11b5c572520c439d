from pathlib import Path

import pytest

from credit_activity.config import Settings, load_settings
from credit_activity.domain.errors import ConfigurationError


def test_defaults_when_nothing_is_configured():
    settings = load_settings({})

    assert settings == Settings()
    assert settings.trade_endpoint is None
    assert settings.large_threshold == 300


def test_values_are_read_from_environment():
    settings = load_settings(
        {
            "CREDIT_ACTIVITY_TRADE_ENDPOINT": "https://trade.example/activity",
            "CREDIT_ACTIVITY_CONFIRMATION_ENDPOINT": " ",
            "CREDIT_ACTIVITY_CALLER_ID": "WEB",
            "CREDIT_ACTIVITY_REQUEST_TIMEOUT": "12.5",
            "CREDIT_ACTIVITY_MAX_WORKERS": "8",
            "CREDIT_ACTIVITY_LOG_LEVEL": "debug",
        }
    )

    assert settings.trade_endpoint == "https://trade.example/activity"
    assert settings.confirmation_endpoint is None
    assert settings.request_timeout == 12.5
    assert settings.max_workers == 8
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["many", "0", "-1"])
def test_bad_numbers_are_rejected(value):
    with pytest.raises(ConfigurationError):
        load_settings({"CREDIT_ACTIVITY_MAX_WORKERS": value})


def test_dotenv_file_seeds_environment(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("CREDIT_ACTIVITY_CALLER_ID", "placeholder")
    monkeypatch.delenv("CREDIT_ACTIVITY_CALLER_ID", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("CREDIT_ACTIVITY_CALLER_ID=FROM_FILE\n", encoding="utf-8")

    settings = load_settings(env_file=env_file)

    assert settings.caller_id == "FROM_FILE"
