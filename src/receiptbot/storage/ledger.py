"""Google Sheets ledger: row mapping and persistence."""

import logging
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..models import ExtractedItem, GoogleCredentials
from ..taxonomy import DEFAULT_ACCOUNT_CATEGORY, DEFAULT_ITEM_NAME, DEFAULT_PAYMENT_METHOD

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# Date, name, amount, payment method, account category
LEDGER_COLUMNS = 5

# Leading characters that USER_ENTERED input parses as a formula
FORMULA_PREFIXES = ("=", "+", "-", "@")


def escape_cell_text(value: str) -> str:
    """Force text that would be parsed as a formula to be stored literally."""
    if value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value


def format_ledger_date(day: date) -> str:
    """Format a date the way the ja-JP locale does (e.g. 2024/1/5)."""
    return f"{day.year}/{day.month}/{day.day}"


def today_in(timezone: str = "Asia/Tokyo") -> date:
    """Current calendar date in the given timezone."""
    return datetime.now(ZoneInfo(timezone)).date()


def prepare_rows(
    items: list[ExtractedItem],
    today: Optional[date] = None,
    timezone: str = "Asia/Tokyo",
) -> list[list]:
    """Map items to ledger rows.

    Args:
        items: Validated items, in the order they should be written
        today: Date to stamp on every row (defaults to today in ``timezone``)
        timezone: Ledger timezone used when ``today`` is not given

    Returns:
        list[list]: One ``[date, name, amount, payment method, category]`` per item
    """
    stamp = format_ledger_date(today or today_in(timezone))

    return [
        [
            stamp,
            escape_cell_text(item.name or DEFAULT_ITEM_NAME),
            item.amount or 0,
            item.payment_method or DEFAULT_PAYMENT_METHOD,
            item.account_category or DEFAULT_ACCOUNT_CATEGORY,
        ]
        for item in items
    ]


def next_row_offset(existing_row_count: int) -> int:
    """First empty 1-based row after ``existing_row_count`` filled rows."""
    return 1 + existing_row_count


def row_range(sheet_name: str, start_row: int, num_rows: int) -> str:
    """A1 range covering ``num_rows`` ledger rows starting at ``start_row``."""
    end_row = start_row + num_rows - 1
    return f"{sheet_name}!A{start_row}:E{end_row}"


class SheetsLedger:
    """Ledger stored in a Google Sheets worksheet.

    Rows are written to a fixed range computed from the current row count,
    so two invocations running at the same time can pick the same offset and
    overwrite each other's rows. Writes are not serialized here.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        credentials: Optional[GoogleCredentials] = None,
        service=None,
    ):
        """Initialize Sheets client.

        Args:
            spreadsheet_id: Target spreadsheet ID
            sheet_name: Worksheet name
            credentials: Service account credentials
            service: Optional pre-built Sheets API resource (for testing)
        """
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name

        if service is None:
            if credentials is None:
                raise ValueError("SheetsLedger needs credentials or a service")
            google_credentials = service_account.Credentials.from_service_account_info(
                credentials.model_dump(), scopes=SCOPES
            )
            service = build("sheets", "v4", credentials=google_credentials, cache_discovery=False)

        self._values = service.spreadsheets().values()
        logger.info(f"Sheets ledger initialized for sheet: {sheet_name}")

    def read_existing_row_count(self) -> int:
        """Count filled rows in column A (header included)."""
        try:
            response = self._values.get(
                spreadsheetId=self.spreadsheet_id,
                range=f"{self.sheet_name}!A:A",
            ).execute()
        except HttpError as e:
            logger.error(f"Error reading ledger {self.sheet_name}: {e}")
            raise

        return len(response.get("values", []))

    def write_rows(self, start_row: int, rows: list[list]) -> int:
        """Write a contiguous block of rows starting at ``start_row``.

        Args:
            start_row: 1-based row of the first written row
            rows: Ledger rows

        Returns:
            Number of rows updated
        """
        if not rows:
            return 0

        target = row_range(self.sheet_name, start_row, len(rows))
        try:
            response = self._values.update(
                spreadsheetId=self.spreadsheet_id,
                range=target,
                valueInputOption="USER_ENTERED",
                body={"values": rows},
            ).execute()
        except HttpError as e:
            logger.error(f"Error writing ledger range {target}: {e}")
            raise

        updated = response.get("updatedRows", len(rows))
        logger.info(f"Wrote {updated} row(s) to {target}")
        return updated
