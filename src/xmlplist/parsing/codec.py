"""Text codecs for <data> and <date> element payloads."""

from __future__ import annotations

import base64
import binascii
import re
from datetime import UTC, datetime

from xmlplist.exceptions import InvalidDataError, InvalidDateError

# Apple plist date format (ISO 8601, always UTC)
PLIST_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_WHITESPACE = re.compile(r"\s+")


def encode_data(data: bytes | bytearray | memoryview) -> str:
    """Encode bytes as single-line, padded, standard-alphabet base64."""
    return base64.b64encode(data).decode("ascii")


def decode_data(text: str) -> bytes:
    """Decode base64 text, ignoring any embedded whitespace.

    Args:
        text: Base64 text, possibly wrapped over several lines

    Returns:
        The decoded bytes

    Raises:
        InvalidDataError: If the text has characters outside the base64
            alphabet or incorrect padding
    """
    clean = _WHITESPACE.sub("", text)
    try:
        return base64.b64decode(clean, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidDataError(f"Invalid base64 payload: {exc}") from exc


def encode_date(dt: datetime) -> str:
    """Encode a datetime as an ISO 8601 UTC timestamp.

    Naive datetimes are taken to be UTC already. Fractional seconds are
    only written when present, so whole-second values match the usual
    ``2025-01-15T10:30:45Z`` form.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC).replace(tzinfo=None)
    timespec = "microseconds" if dt.microsecond else "seconds"
    return dt.isoformat(timespec=timespec) + "Z"


def decode_date(text: str) -> datetime:
    """Decode an ISO 8601 timestamp into an aware UTC datetime.

    Raises:
        InvalidDateError: If the text is not an ISO 8601 timestamp
    """
    text = text.strip()
    try:
        return datetime.strptime(text, PLIST_TIME_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        pass

    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise InvalidDateError(text) from exc
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
