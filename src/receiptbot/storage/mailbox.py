"""S3 retrieval of inbound emails using boto3."""

import logging
from urllib.parse import unquote_plus

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


def parse_s3_event(event: dict) -> list[tuple[str, str]]:
    """Extract (bucket, key) pairs from an S3 object-created notification.

    Object keys arrive URL-encoded with spaces as ``+``.

    Args:
        event: S3 event notification payload

    Returns:
        list[tuple[str, str]]: One (bucket, key) pair per record
    """
    locations = []
    for record in event.get("Records", []):
        bucket = record["s3"]["bucket"]["name"]
        key = unquote_plus(record["s3"]["object"]["key"])
        locations.append((bucket, key))
    return locations


class S3Client:
    """Read raw RFC822 emails deposited in S3 by SES."""

    def __init__(self, client=None):
        """Initialize S3 client.

        Args:
            client: Optional pre-built boto3 S3 client (for testing)
        """
        self.s3_client = client or boto3.client("s3")

    def get_email(self, bucket: str, key: str) -> bytes:
        """Download an email object.

        Args:
            bucket: S3 bucket name
            key: S3 object key

        Returns:
            Raw email bytes
        """
        try:
            response = self.s3_client.get_object(Bucket=bucket, Key=key)
            data = response["Body"].read()
            logger.debug(f"Downloaded email: s3://{bucket}/{key} ({len(data)} bytes)")
            return data
        except ClientError as e:
            logger.error(f"Error downloading email s3://{bucket}/{key}: {e}")
            raise
