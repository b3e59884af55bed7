"""
Unit tests for environment configuration.
"""

import pytest

from receiptbot.config import Config

REQUIRED_ENV = {
    "BEDROCK_MODEL_ID": "apac.anthropic.claude-3-5-sonnet-20241022-v2:0",
    "ALLOWED_SENDER_EMAILS": "Owner@Example.com,accounting@example.com",
    "SPREADSHEET_ID": "sheet-id",
    "SHEET_NAME": "経費",
    "AWS_SECRET_GOOGLE_CREDENTIALS_ID": "credential",
}


@pytest.fixture
def env(monkeypatch):
    for name in list(REQUIRED_ENV) + ["LEDGER_TIMEZONE", "BEDROCK_MAX_TOKENS", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    for name, value in REQUIRED_ENV.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


class TestConfig:

    def test_from_env(self, env):
        config = Config.from_env()

        assert config.model_id == REQUIRED_ENV["BEDROCK_MODEL_ID"]
        assert config.spreadsheet_id == "sheet-id"
        assert config.sheet_name == "経費"
        assert config.credentials_secret_id == "credential"
        assert config.allowed_senders == ["owner@example.com", "accounting@example.com"]
        assert config.timezone == "Asia/Tokyo"
        assert config.max_tokens == 1000
        assert config.log_level == "INFO"

    def test_optional_overrides(self, env):
        env.setenv("LEDGER_TIMEZONE", "UTC")
        env.setenv("BEDROCK_MAX_TOKENS", "2000")
        env.setenv("LOG_LEVEL", "DEBUG")

        config = Config.from_env()

        assert config.timezone == "UTC"
        assert config.max_tokens == 2000
        assert config.log_level == "DEBUG"

    def test_missing_variables_are_all_reported(self, env):
        env.delenv("SPREADSHEET_ID")
        env.delenv("BEDROCK_MODEL_ID")

        with pytest.raises(ValueError) as exc_info:
            Config.from_env()

        message = str(exc_info.value)
        assert "SPREADSHEET_ID" in message
        assert "BEDROCK_MODEL_ID" in message
        assert "SHEET_NAME" not in message

    def test_empty_value_counts_as_missing(self, env):
        env.setenv("ALLOWED_SENDER_EMAILS", "")

        with pytest.raises(ValueError, match="ALLOWED_SENDER_EMAILS"):
            Config.from_env()
