"""Validation and deduplication of model output.

The model's reply is treated as untrusted input. ``sanitize`` never raises:
unparsable output becomes an empty result, and each candidate item is
validated on its own so one bad item cannot discard the rest.
"""

import json
import logging
import math
import re
from typing import Any, Optional, Union

from ..models import ExtractedData, ExtractedItem
from ..taxonomy import (
    ACCOUNT_CATEGORIES,
    DEFAULT_ACCOUNT_CATEGORY,
    DEFAULT_ITEM_NAME,
    DEFAULT_PAYMENT_METHOD,
    MAX_ALLOWED_AMOUNT,
    MAX_EXTRACTED_ITEMS,
    PAYMENT_METHODS,
)

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)

# Plain ASCII decimal; rejects "1_000", "1e3", "inf" and non-ASCII digits
_DECIMAL = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")

Number = Union[int, float]


def _strip_code_fence(text: str) -> str:
    """Remove a markdown code block wrapped around the whole response."""
    match = _CODE_FENCE.match(text)
    if match:
        return match.group(1)
    return text


def _to_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _to_amount(value: Any) -> Optional[Number]:
    """Coerce a value to an amount in [0, MAX_ALLOWED_AMOUNT].

    Returns None for missing, non-numeric, non-finite or out-of-range values.
    Integral floats are returned as ints.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not _DECIMAL.fullmatch(value):
            return None
        value = float(value)

    if isinstance(value, float):
        if not math.isfinite(value):
            return None
    elif not isinstance(value, int):
        return None

    if value < 0 or value > MAX_ALLOWED_AMOUNT:
        return None

    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _sanitize_item(candidate: Any) -> Optional[ExtractedItem]:
    if not isinstance(candidate, dict):
        return None

    amount = _to_amount(candidate.get("amount"))
    if amount is None:
        return None

    name = _to_text(candidate.get("name")) or DEFAULT_ITEM_NAME

    payment_method = _to_text(candidate.get("paymentMethod"))
    if payment_method not in PAYMENT_METHODS:
        payment_method = DEFAULT_PAYMENT_METHOD

    account_category = _to_text(candidate.get("accountCategory"))
    if account_category not in ACCOUNT_CATEGORIES:
        account_category = DEFAULT_ACCOUNT_CATEGORY

    return ExtractedItem(
        name=name,
        amount=amount,
        payment_method=payment_method,
        account_category=account_category,
    )


def sanitize(raw_text: Optional[str]) -> ExtractedData:
    """Parse and validate the model's raw text response.

    Args:
        raw_text: Text returned by the model

    Returns:
        ExtractedData: Validated items (possibly empty) and optional total
    """
    cleaned = _strip_code_fence((raw_text or "").strip())

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Model response is not valid JSON: {e}")
        logger.warning(f"Unparsable response text: {raw_text!r}")
        return ExtractedData(items=[])

    if not isinstance(parsed, dict):
        logger.warning(f"Model response is not a JSON object: {type(parsed).__name__}")
        return ExtractedData(items=[])

    candidates = parsed.get("items")
    if not isinstance(candidates, list):
        candidates = []

    if len(candidates) > MAX_EXTRACTED_ITEMS:
        logger.warning(
            f"Model returned {len(candidates)} items, keeping first {MAX_EXTRACTED_ITEMS}"
        )
        candidates = candidates[:MAX_EXTRACTED_ITEMS]

    items = []
    for index, candidate in enumerate(candidates):
        item = _sanitize_item(candidate)
        if item is None:
            logger.warning(f"Skipping invalid item #{index + 1}: {candidate!r}")
            continue
        items.append(item)

    total = _to_amount(parsed.get("total"))
    if total is None and parsed.get("total") is not None:
        logger.warning(f"Dropping out-of-range total: {parsed.get('total')!r}")

    return ExtractedData(items=items, total=total)


def _dedup_key(item: ExtractedItem) -> str:
    name = (item.name or "").strip().lower()
    amount = float(item.amount or 0)
    payment_method = (item.payment_method or "").strip().lower() or DEFAULT_PAYMENT_METHOD.lower()
    account_category = (item.account_category or "").strip().lower() or DEFAULT_ACCOUNT_CATEGORY.lower()
    return f"{name}|{amount}|{payment_method}|{account_category}"


def deduplicate(items: list[ExtractedItem]) -> list[ExtractedItem]:
    """Drop items equivalent to an earlier one, keeping original order.

    Two items are equivalent when their name, amount, payment method and
    account category match after trimming and lower-casing.
    """
    seen: set[str] = set()
    unique = []

    for item in items:
        key = _dedup_key(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)

    if len(unique) < len(items):
        logger.info(f"Removed {len(items) - len(unique)} duplicate item(s)")

    return unique
