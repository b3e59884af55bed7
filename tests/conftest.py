"""Shared fixtures for receiptbot tests."""

import json
from email.message import EmailMessage
from typing import Optional

import pytest

from receiptbot.config import Config
from receiptbot.models import EmailAttachment, ParsedEmail


MOCK_CREDENTIALS = {
    "type": "service_account",
    "project_id": "test-project",
    "private_key_id": "key-id",
    "private_key": "private-key",
    "client_email": "test@test.com",
    "client_id": "client-id",
    "auth_uri": "auth-uri",
    "token_uri": "token-uri",
    "auth_provider_x509_cert_url": "cert-url",
    "client_x509_cert_url": "client-cert-url",
}


def make_attachment(content_type: str, size: int = 10, filename: Optional[str] = None) -> EmailAttachment:
    """Build an attachment of ``size`` bytes."""
    extension = content_type.split("/")[-1]
    return EmailAttachment(
        filename=filename or f"file.{extension}",
        content_type=content_type,
        data=b"x" * size,
        size_bytes=size,
    )


def make_parsed_email(
    body_text: Optional[str] = "Receipt body",
    body_html: Optional[str] = None,
    from_address: Optional[str] = "test@example.com",
    attachments: Optional[list[EmailAttachment]] = None,
) -> ParsedEmail:
    return ParsedEmail(
        subject="Receipt",
        from_header=from_address or "",
        from_address=from_address,
        body_text=body_text,
        body_html=body_html,
        attachments=attachments or [],
    )


def make_raw_email(
    sender: str = "Test User <test@example.com>",
    text: Optional[str] = "タクシー代 1200円",
    html: Optional[str] = None,
    images: Optional[list[tuple[str, bytes]]] = None,
) -> bytes:
    """Build RFC822 bytes with optional HTML alternative and image attachments."""
    msg = EmailMessage()
    msg["Subject"] = "領収書"
    msg["From"] = sender
    msg["To"] = "receipts@example.com"

    if text is not None:
        msg.set_content(text)
    if html is not None:
        if text is None:
            msg.set_content(html, subtype="html")
        else:
            msg.add_alternative(html, subtype="html")

    for filename, data in images or []:
        subtype = filename.rsplit(".", 1)[-1]
        msg.add_attachment(data, maintype="image", subtype=subtype, filename=filename)

    return msg.as_bytes()


def model_reply(payload) -> str:
    """Serialize a model reply the way the model would return it."""
    return json.dumps(payload, ensure_ascii=False)


@pytest.fixture
def config() -> Config:
    return Config(
        model_id="test-model",
        allowed_senders_raw="Test@Example.com, admin@example.com",
        spreadsheet_id="sheet-id",
        sheet_name="debug",
        credentials_secret_id="credential",
    )


@pytest.fixture
def credentials_json() -> bytes:
    return json.dumps(MOCK_CREDENTIALS).encode("utf-8")


def make_inline_image_email(
    sender: str = "Test User <test@example.com>",
    text: str = "領収書を添付します",
    images: Optional[list[tuple[str, bytes, Optional[str]]]] = None,
) -> bytes:
    """Build a multipart/related email whose images carry no filename.

    ``images`` holds ``(subtype, data, content_id)`` tuples.
    """
    msg = EmailMessage()
    msg["Subject"] = "領収書"
    msg["From"] = sender
    msg["To"] = "receipts@example.com"
    msg.set_content(text)

    for subtype, data, content_id in images or []:
        msg.add_related(data, maintype="image", subtype=subtype, cid=content_id)

    return msg.as_bytes()
