"""Configuration management for the receipt bot."""

import os
from dataclasses import dataclass

from .processing.content import parse_allowed_senders


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Inference
    model_id: str

    # Sender allow-list (raw comma-separated value)
    allowed_senders_raw: str

    # Ledger
    spreadsheet_id: str
    sheet_name: str

    # Secrets Manager
    credentials_secret_id: str

    # Optional settings
    timezone: str = "Asia/Tokyo"
    max_tokens: int = 1000
    log_level: str = "INFO"

    @property
    def allowed_senders(self) -> list[str]:
        """Normalized allow-list (lower-cased, blanks removed)."""
        return parse_allowed_senders(self.allowed_senders_raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Returns:
            Config: Configuration object

        Raises:
            ValueError: If required environment variables are missing
        """
        required_vars = [
            "BEDROCK_MODEL_ID",
            "ALLOWED_SENDER_EMAILS",
            "SPREADSHEET_ID",
            "SHEET_NAME",
            "AWS_SECRET_GOOGLE_CREDENTIALS_ID",
        ]

        missing = [var for var in required_vars if not os.getenv(var)]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

        return cls(
            model_id=os.getenv("BEDROCK_MODEL_ID"),
            allowed_senders_raw=os.getenv("ALLOWED_SENDER_EMAILS"),
            spreadsheet_id=os.getenv("SPREADSHEET_ID"),
            sheet_name=os.getenv("SHEET_NAME"),
            credentials_secret_id=os.getenv("AWS_SECRET_GOOGLE_CREDENTIALS_ID"),
            timezone=os.getenv("LEDGER_TIMEZONE", "Asia/Tokyo"),
            max_tokens=int(os.getenv("BEDROCK_MAX_TOKENS", "1000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
