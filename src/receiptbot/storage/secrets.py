"""Google service account credentials from AWS Secrets Manager."""

import base64
import binascii
import json
import logging
from typing import Optional, Union

import boto3
from botocore.exceptions import ClientError
from pydantic import ValidationError

from ..models import GoogleCredentials

logger = logging.getLogger(__name__)


class CredentialsError(ValueError):
    """Raised when the credentials secret is missing or cannot be decoded."""


def _parse_json(payload: Union[bytes, str]):
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def decode_credentials(payload: Optional[Union[bytes, str]]) -> GoogleCredentials:
    """Decode a secret payload into Google service account credentials.

    The secret may hold the key file as raw JSON or as base64-encoded JSON,
    depending on how it was provisioned. Raw JSON is tried first. A payload
    that parses either way is accepted as-is, so a base64 string that
    happens to be valid JSON is read as JSON.

    Args:
        payload: SecretBinary contents

    Returns:
        GoogleCredentials: Parsed credentials

    Raises:
        CredentialsError: If the payload is absent or not decodable
    """
    if not payload:
        raise CredentialsError("Credentials secret has no binary payload")

    data = _parse_json(payload)
    if data is None:
        try:
            decoded = base64.b64decode(payload.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise CredentialsError(f"Credentials secret is neither JSON nor base64: {e}") from e
        data = _parse_json(decoded)
        if data is None:
            raise CredentialsError("Base64-decoded credentials secret is not valid JSON")

    if not isinstance(data, dict):
        raise CredentialsError("Credentials secret must be a JSON object")

    try:
        return GoogleCredentials(**data)
    except ValidationError as e:
        raise CredentialsError(f"Credentials secret is missing fields: {e}") from e


class SecretsClient:
    """Thin wrapper around the Secrets Manager API."""

    def __init__(self, client=None):
        """Initialize Secrets Manager client.

        Args:
            client: Optional pre-built boto3 secretsmanager client (for testing)
        """
        self.client = client or boto3.client("secretsmanager")

    def get_secret_binary(self, secret_id: str) -> Optional[bytes]:
        """Fetch the binary payload of a secret.

        Args:
            secret_id: Secret name or ARN

        Returns:
            SecretBinary bytes, or None if the secret has no binary value
        """
        try:
            response = self.client.get_secret_value(SecretId=secret_id)
        except ClientError as e:
            logger.error(f"Error reading secret {secret_id}: {e}")
            raise
        return response.get("SecretBinary")

    def get_google_credentials(self, secret_id: str) -> GoogleCredentials:
        """Fetch and decode Google credentials. Never cached."""
        return decode_credentials(self.get_secret_binary(secret_id))
