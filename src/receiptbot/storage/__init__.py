"""Storage layer for S3, Secrets Manager and the Sheets ledger."""

from .mailbox import S3Client, parse_s3_event
from .secrets import CredentialsError, SecretsClient, decode_credentials
from .ledger import SheetsLedger, next_row_offset, prepare_rows, row_range

__all__ = [
    "S3Client",
    "parse_s3_event",
    "CredentialsError",
    "SecretsClient",
    "decode_credentials",
    "SheetsLedger",
    "next_row_offset",
    "prepare_rows",
    "row_range",
]
