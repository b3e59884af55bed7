"""AWS Lambda entry point for S3 object-created notifications."""

import logging

from .config import Config
from .models import GoogleCredentials
from .pipeline import ReceiptPipeline
from .semantic import BedrockClient
from .storage import S3Client, SecretsClient, SheetsLedger

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Set the root log level; Lambda installs its own handler."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if not root.handlers:
        logging.basicConfig(
            level=level.upper(),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


def build_pipeline(config: Config) -> ReceiptPipeline:
    """Wire the pipeline to AWS and Google Sheets."""

    def ledger_factory(credentials: GoogleCredentials) -> SheetsLedger:
        return SheetsLedger(
            spreadsheet_id=config.spreadsheet_id,
            sheet_name=config.sheet_name,
            credentials=credentials,
        )

    return ReceiptPipeline(
        config=config,
        mailbox=S3Client(),
        inference=BedrockClient(model_id=config.model_id, max_tokens=config.max_tokens),
        secrets=SecretsClient(),
        ledger_factory=ledger_factory,
    )


def handler(event: dict, context=None) -> dict:
    """Process an S3 event. Collaborator failures propagate to the runtime."""
    config = Config.from_env()
    configure_logging(config.log_level)

    pipeline = build_pipeline(config)
    try:
        results = pipeline.handle_event(event)
    except Exception as e:
        logger.error(f"Processing failed: {e}")
        raise

    return {
        "processed": len(results),
        "results": [
            {"key": r.key, "status": r.status, "rows_written": r.rows_written}
            for r in results
        ],
    }
