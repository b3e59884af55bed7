"""Receipt extraction pipeline - stored email in, ledger rows out."""

import logging
from typing import Callable, Optional

from .config import Config
from .metrics import MetricsCollector
from .models import ExtractedData, GoogleCredentials, ProcessingMetrics, ProcessingResult
from .processing import EmailParser, is_allowed_sender, select_content, select_images
from .semantic import build_request, deduplicate, sanitize
from .storage import decode_credentials, next_row_offset, parse_s3_event, prepare_rows

logger = logging.getLogger(__name__)

STATUS_RECORDED = "recorded"
STATUS_UNAUTHORIZED = "unauthorized"
STATUS_EMPTY = "empty"
STATUS_NO_ITEMS = "no_items"


def log_extracted_data(data: ExtractedData) -> None:
    """Log a human-readable summary of extracted items."""
    if not data.items:
        logger.info("商品情報が見つかりませんでした。")
        return

    logger.info(f"{len(data.items)}件の商品が見つかりました:")
    for index, item in enumerate(data.items, start=1):
        logger.info(f"  {index}. {item.name}: ¥{item.amount} ({item.account_category})")

    if data.total is not None:
        logger.info(f"合計金額: ¥{data.total}")


class ReceiptPipeline:
    """Extract receipt line items from stored emails and append them to the ledger.

    Every collaborator is passed in explicitly. One call to ``process_object``
    runs all steps in order; credentials and the ledger row count are read
    again on every call.
    """

    def __init__(
        self,
        config: Config,
        mailbox,
        inference,
        secrets,
        ledger_factory: Callable[[GoogleCredentials], object],
        parser: Optional[EmailParser] = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Application configuration
            mailbox: Object with ``get_email(bucket, key) -> bytes``
            inference: Object with ``invoke(ExtractionRequest) -> str``
            secrets: Object with ``get_secret_binary(secret_id) -> bytes | None``
            ledger_factory: Builds a ledger (``read_existing_row_count``,
                ``write_rows``) from Google credentials
            parser: Email parser (defaults to EmailParser)
        """
        self.config = config
        self.mailbox = mailbox
        self.inference = inference
        self.secrets = secrets
        self.ledger_factory = ledger_factory
        self.parser = parser or EmailParser()
        self.allowed_senders = config.allowed_senders

    def handle_event(self, event: dict) -> list[ProcessingResult]:
        """Process every object referenced by an S3 notification, in order."""
        return [self.process_object(bucket, key) for bucket, key in parse_s3_event(event)]

    def process_object(self, bucket: str, key: str) -> ProcessingResult:
        """Process a single stored email through the full pipeline.

        Args:
            bucket: S3 bucket name
            key: Decoded S3 object key

        Returns:
            ProcessingResult: Outcome with extracted data and metrics
        """
        logger.info(f"Processing s3://{bucket}/{key}")
        collector = MetricsCollector()

        def result(status: str, **kwargs) -> ProcessingResult:
            data = kwargs.get("data")
            metrics = collector.create_email_metrics(
                num_images=kwargs.pop("num_images", 0),
                num_items=len(data.items) if data else 0,
            )
            return ProcessingResult(
                bucket=bucket,
                key=key,
                status=status,
                metrics=ProcessingMetrics(**metrics),
                **kwargs,
            )

        # Stage 1: Retrieve and parse email
        collector.start_timer("parse")
        parsed = self.parser.parse(self.mailbox.get_email(bucket, key))
        collector.stop_timer("parse")

        if not is_allowed_sender(parsed, self.allowed_senders):
            logger.warning(f"Sender not allowed, skipping: {parsed.from_address!r}")
            return result(STATUS_UNAUTHORIZED)

        content = select_content(parsed)
        images = select_images(parsed)
        if content is None and not images:
            logger.info("Email has no body and no usable images, skipping")
            return result(STATUS_EMPTY)

        # Stage 2: Extract items with the model
        collector.start_timer("extraction")
        request = build_request(content, images)
        raw_text = self.inference.invoke(request)
        data = sanitize(raw_text)
        data.items = deduplicate(data.items)
        collector.stop_timer("extraction")

        log_extracted_data(data)
        if not data.items:
            return result(STATUS_NO_ITEMS, data=data, num_images=len(images))

        # Stage 3: Append rows to the ledger
        collector.start_timer("ledger")
        credentials = decode_credentials(
            self.secrets.get_secret_binary(self.config.credentials_secret_id)
        )
        ledger = self.ledger_factory(credentials)
        start_row = next_row_offset(ledger.read_existing_row_count())
        rows = prepare_rows(data.items, timezone=self.config.timezone)
        rows_written = ledger.write_rows(start_row, rows)
        collector.stop_timer("ledger")

        logger.info(f"Recorded {rows_written} row(s) starting at row {start_row}")
        return result(
            STATUS_RECORDED,
            data=data,
            start_row=start_row,
            rows_written=rows_written,
            num_images=len(images),
        )
