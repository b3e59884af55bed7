"""Content selection and sender authorization for parsed emails."""

import base64
import logging
from typing import Optional

from ..models import ImageAttachment, ParsedEmail

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")

# Non-standard content types seen in the wild, mapped to what the model accepts
IMAGE_TYPE_ALIASES = {"image/jpg": "image/jpeg"}

MAX_IMAGES = 2
MAX_IMAGE_BYTES = 5 * 1024 * 1024


def select_content(parsed_email: ParsedEmail) -> Optional[str]:
    """Pick the email body to send to the model.

    Prefers the plain text body and falls back to the HTML body. Blank or
    whitespace-only bodies count as absent.

    Args:
        parsed_email: Parsed email object

    Returns:
        str: Trimmed body text
        None: If neither body has content
    """
    for body in (parsed_email.body_text, parsed_email.body_html):
        if body and body.strip():
            return body.strip()
    return None


def _normalize_media_type(content_type: str) -> Optional[str]:
    media_type = content_type.split(";", 1)[0].strip().lower()
    media_type = IMAGE_TYPE_ALIASES.get(media_type, media_type)
    if media_type in SUPPORTED_IMAGE_TYPES:
        return media_type
    return None


def select_images(
    parsed_email: ParsedEmail,
    max_images: int = MAX_IMAGES,
    max_bytes: int = MAX_IMAGE_BYTES,
) -> list[ImageAttachment]:
    """Select image attachments to send inline with the extraction request.

    Attachments with an unsupported media type or larger than ``max_bytes``
    are dropped. The first ``max_images`` remaining attachments are kept in
    their original order.

    Args:
        parsed_email: Parsed email object
        max_images: Maximum number of images to keep
        max_bytes: Maximum size of a single image in bytes

    Returns:
        list[ImageAttachment]: Selected images with base64-encoded data
    """
    images = []
    oversized = 0
    unsupported = 0

    for attachment in parsed_email.attachments:
        media_type = _normalize_media_type(attachment.content_type)
        if media_type is None:
            unsupported += 1
            continue

        if len(attachment.data) > max_bytes:
            logger.warning(
                f"Skipping image {attachment.filename}: {len(attachment.data)} bytes "
                f"exceeds limit of {max_bytes}"
            )
            oversized += 1
            continue

        if len(images) >= max_images:
            continue

        images.append(ImageAttachment(
            media_type=media_type,
            data=base64.b64encode(attachment.data).decode("ascii"),
            filename=attachment.filename,
        ))

    logger.info(
        f"Selected {len(images)} image(s) from {len(parsed_email.attachments)} attachment(s) "
        f"(unsupported: {unsupported}, oversized: {oversized})"
    )
    return images


def parse_allowed_senders(raw: Optional[str]) -> list[str]:
    """Split a comma-separated allow-list into normalized addresses."""
    if not raw:
        return []
    return [address.strip().lower() for address in raw.split(",") if address.strip()]


def is_allowed_sender(parsed_email: ParsedEmail, allowed_senders: list[str]) -> bool:
    """Check whether the email's sender is on the allow-list.

    Comparison is case-insensitive. ``allowed_senders`` must already be
    lower-cased (see ``parse_allowed_senders``).

    Args:
        parsed_email: Parsed email object
        allowed_senders: Normalized allow-list

    Returns:
        bool: False when the allow-list is empty or the sender is missing
    """
    if not allowed_senders:
        return False

    sender = parsed_email.from_address
    if not sender:
        return False

    return sender.strip().lower() in allowed_senders
