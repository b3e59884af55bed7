"""Email parsing utilities for RFC822 format emails."""

import email
import logging
from email.message import Message
from email.utils import getaddresses
from typing import Optional

from ..models import ParsedEmail, EmailAttachment

logger = logging.getLogger(__name__)


class EmailParser:
    """Parse RFC822 email messages and extract components."""

    @staticmethod
    def parse(email_bytes: bytes) -> ParsedEmail:
        """Parse email bytes and extract key components.

        Args:
            email_bytes: Email in RFC822 format (bytes)

        Returns:
            ParsedEmail: Parsed email object with all components
        """
        msg = email.message_from_bytes(email_bytes)

        attachments = EmailParser._extract_attachments(msg)
        body_text, body_html = EmailParser._extract_body(msg)
        from_header = str(msg.get('From', ''))

        return ParsedEmail(
            subject=str(msg.get('Subject', '')),
            from_header=from_header,
            from_address=EmailParser._first_address(from_header),
            to_address=str(msg.get('To', '')),
            date=str(msg.get('Date', '')),
            body_text=body_text,
            body_html=body_html,
            attachments=attachments,
            message_id=msg.get('Message-ID', None),
        )

    @staticmethod
    def _first_address(header: str) -> Optional[str]:
        """Return the first address declared in an address header, if any."""
        for _, address in getaddresses([header]):
            if address:
                return address
        return None

    @staticmethod
    def _extract_attachments(msg: Message) -> list[EmailAttachment]:
        """Extract attachments from email message.

        Args:
            msg: Email message object

        Returns:
            list[EmailAttachment]: List of email attachments
        """
        attachments = []

        for part in msg.walk():
            filename = part.get_filename()

            # Inline images (Content-ID only) still count; other unnamed parts are body
            if not filename:
                if part.get_content_maintype() != "image" or part.is_multipart():
                    continue
                filename = EmailParser._inline_filename(part, len(attachments) + 1)

            try:
                payload = part.get_payload(decode=True)
                if payload is None:
                    continue

                attachments.append(EmailAttachment(
                    filename=filename,
                    content_type=part.get_content_type(),
                    data=payload,
                    size_bytes=len(payload),
                ))

            except Exception as e:
                logger.warning(f"Skipping malformed attachment {filename}: {e}")
                continue

        return attachments

    @staticmethod
    def _inline_filename(part: Message, position: int) -> str:
        """Name an unnamed inline part after its Content-ID, or its position."""
        content_id = str(part.get('Content-ID', '')).strip().strip('<>')
        if content_id:
            return content_id
        return f"inline-{position}.{part.get_content_subtype()}"

    @staticmethod
    def _extract_body(msg: Message) -> tuple[Optional[str], Optional[str]]:
        """Extract both text and HTML bodies from an email message.

        Args:
            msg: Email message object

        Returns:
            tuple[str | None, str | None]: (body_text, body_html)
        """
        body_text = None
        body_html = None

        if msg.is_multipart():
            for part in msg.walk():
                content_type = part.get_content_type()
                content_disposition = str(part.get("Content-Disposition", ""))

                # Skip attachments
                if "attachment" in content_disposition:
                    continue

                charset = part.get_content_charset() or 'utf-8'

                try:
                    if content_type == "text/plain" and body_text is None:
                        body_text = part.get_payload(decode=True).decode(charset, errors='ignore')
                    elif content_type == "text/html" and body_html is None:
                        body_html = part.get_payload(decode=True).decode(charset, errors='ignore')
                except (AttributeError, LookupError):
                    continue

        else:
            content_type = msg.get_content_type()
            charset = msg.get_content_charset() or 'utf-8'

            try:
                payload = msg.get_payload(decode=True)
                if payload:
                    decoded = payload.decode(charset, errors='ignore')
                    if content_type == "text/html":
                        body_html = decoded
                    else:
                        body_text = decoded
            except LookupError:
                body_text = str(msg.get_payload())

        if body_text:
            body_text = body_text.strip()
        if body_html:
            body_html = body_html.strip()

        return body_text, body_html
