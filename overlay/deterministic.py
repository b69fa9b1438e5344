"""
Deterministic Primitives
========================

Stable replacements for wall-clock ids and entropy.

GUARANTEES:
- content_hash() is independent of object key insertion order
- deterministic_id() is order-sensitive in its parts
- Timestamps are hashed as LITERALS: "2025-01-18T12:00:00Z" and
  "2025-01-18T12:00:00.000Z" name the same instant but derive different
  seeds and ids
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union
import hashlib
import json
import re

from .errors import InvalidTimestampError


ID_DELIMITER = "::"
ID_LENGTH = 16
ARTIFACT_ID_PREFIX = "idea_"

IdPart = Union[str, int, float]

_ISO_TIMESTAMP = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:[Tt ](?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})?)?",
    re.ASCII,
)


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def canonical_json(value: Any) -> str:
    """Compact JSON with object keys sorted at every depth."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def content_hash(value: Any) -> str:
    """
    SHA-256 of a value, lowercase hex (always 64 characters).

    Strings are hashed as-is; anything else is hashed through
    canonical_json().
    """
    serialized = value if isinstance(value, str) else canonical_json(value)
    return _sha256_hex(serialized)


def _part_text(part: IdPart) -> str:
    # 3.0 and 3 must render alike
    if isinstance(part, float) and part.is_integer():
        return str(int(part))
    return str(part)


def deterministic_id(*parts: IdPart) -> str:
    """16 hex chars of SHA-256 over the "::"-joined parts."""
    joined = ID_DELIMITER.join(_part_text(part) for part in parts)
    return _sha256_hex(joined)[:ID_LENGTH]


def generate_artifact_id(run_id: str, timestamp_iso: str, seed: Optional[str] = None) -> str:
    """"idea_" + deterministic_id(run_id, timestamp_iso[, seed]); empty seed is omitted."""
    parts = [run_id, timestamp_iso]
    if seed:
        parts.append(seed)
    return ARTIFACT_ID_PREFIX + deterministic_id(*parts)


def derive_seed(run_id: str, timestamp_iso: str, explicit_seed: Optional[str] = None) -> str:
    if explicit_seed:
        return explicit_seed
    return content_hash(f"{run_id}{ID_DELIMITER}{timestamp_iso}")


def parse_timestamp(timestamp_iso: str) -> datetime:
    """
    Parse an extended-format ISO-8601 literal.

    Accepted: YYYY-MM-DD, optionally followed by T (or a space) and HH:MM,
    HH:MM:SS or HH:MM:SS.fraction with any number of fraction digits, then an
    optional Z or +HH:MM / -HH:MM offset. The same literals are accepted on
    every supported interpreter.
    """
    if not isinstance(timestamp_iso, str):
        raise InvalidTimestampError(timestamp_iso)
    match = _ISO_TIMESTAMP.fullmatch(timestamp_iso.strip())
    if match is None:
        raise InvalidTimestampError(timestamp_iso)

    fraction = (match["fraction"] or "")[:6].ljust(6, "0")
    try:
        tzinfo = _parse_offset(match["offset"])
        return datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"] or 0),
            int(match["minute"] or 0),
            int(match["second"] or 0),
            int(fraction),
            tzinfo=tzinfo,
        )
    except ValueError:
        raise InvalidTimestampError(timestamp_iso) from None


def _parse_offset(offset: Optional[str]) -> Optional[timezone]:
    if offset is None:
        return None
    if offset in ("Z", "z"):
        return timezone.utc
    hours, minutes = int(offset[1:3]), int(offset[-2:])
    if minutes >= 60:
        raise ValueError(f"offset minutes out of range: {offset}")
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if offset[0] == "-" else delta)


def validate_timestamp(timestamp_iso: str) -> str:
    """Return the literal unchanged if it parses; no normalization."""
    parse_timestamp(timestamp_iso)
    return timestamp_iso


def iso_to_millis(timestamp_iso: str) -> int:
    """Epoch milliseconds of a literal; naive literals are taken as UTC."""
    parsed = parse_timestamp(timestamp_iso)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    delta = parsed - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000
