"""
Unit tests for credential decoding and Secrets Manager access.
"""

import base64
import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from conftest import MOCK_CREDENTIALS
from receiptbot.models import GoogleCredentials
from receiptbot.storage.secrets import CredentialsError, SecretsClient, decode_credentials


class TestDecodeCredentials:

    def test_raw_json_bytes(self, credentials_json):
        credentials = decode_credentials(credentials_json)
        assert credentials.model_dump() == MOCK_CREDENTIALS

    def test_base64_json_bytes(self, credentials_json):
        credentials = decode_credentials(base64.b64encode(credentials_json))
        assert credentials.model_dump() == MOCK_CREDENTIALS

    def test_both_encodings_yield_identical_credentials(self, credentials_json):
        direct = decode_credentials(credentials_json)
        wrapped = decode_credentials(base64.b64encode(credentials_json))
        assert direct == wrapped

    def test_base64_with_trailing_newline(self, credentials_json):
        credentials = decode_credentials(base64.b64encode(credentials_json) + b"\n")
        assert credentials.project_id == "test-project"

    def test_str_payload(self, credentials_json):
        credentials = decode_credentials(credentials_json.decode("utf-8"))
        assert isinstance(credentials, GoogleCredentials)

    def test_extra_fields_are_preserved(self):
        payload = json.dumps({**MOCK_CREDENTIALS, "universe_domain": "googleapis.com"}).encode()
        assert decode_credentials(payload).model_dump()["universe_domain"] == "googleapis.com"

    @pytest.mark.parametrize("payload", [None, b""])
    def test_missing_payload_raises(self, payload):
        with pytest.raises(CredentialsError):
            decode_credentials(payload)

    def test_garbage_raises(self):
        with pytest.raises(CredentialsError):
            decode_credentials(b"not json and not base64!")

    def test_base64_of_garbage_raises(self):
        with pytest.raises(CredentialsError):
            decode_credentials(base64.b64encode(b"not json"))

    def test_non_object_json_raises(self):
        with pytest.raises(CredentialsError):
            decode_credentials(b"[1, 2, 3]")

    def test_missing_fields_raise(self):
        with pytest.raises(CredentialsError):
            decode_credentials(json.dumps({"type": "service_account"}).encode())


class TestSecretsClient:

    def test_get_secret_binary(self, credentials_json):
        mock_client = MagicMock()
        mock_client.get_secret_value.return_value = {"SecretBinary": credentials_json}

        secrets = SecretsClient(client=mock_client)

        assert secrets.get_secret_binary("credential") == credentials_json
        mock_client.get_secret_value.assert_called_once_with(SecretId="credential")

    def test_get_google_credentials(self, credentials_json):
        mock_client = MagicMock()
        mock_client.get_secret_value.return_value = {"SecretBinary": base64.b64encode(credentials_json)}

        credentials = SecretsClient(client=mock_client).get_google_credentials("credential")

        assert credentials.client_email == "test@test.com"

    def test_missing_binary_raises(self):
        mock_client = MagicMock()
        mock_client.get_secret_value.return_value = {"SecretString": "{}"}

        with pytest.raises(CredentialsError):
            SecretsClient(client=mock_client).get_google_credentials("credential")

    def test_client_error_propagates(self):
        mock_client = MagicMock()
        mock_client.get_secret_value.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "missing"}}, "GetSecretValue"
        )

        with pytest.raises(ClientError):
            SecretsClient(client=mock_client).get_secret_binary("credential")
