"""Email parsing and content selection."""

from .email_parser import EmailParser
from .content import (
    is_allowed_sender,
    parse_allowed_senders,
    select_content,
    select_images,
)

__all__ = [
    "EmailParser",
    "is_allowed_sender",
    "parse_allowed_senders",
    "select_content",
    "select_images",
]
