"""UTC timestamp helpers shared by the dump renderer and the storage keys.

Two spellings of RFC 3339 are used:

- ``2024-06-01T00:00:00Z`` inside rendered scripts
- ``2024-06-01T00-00-00Z`` in file names and object keys, where ``:`` is
  not safe on every filesystem

``parse_timestamp`` accepts both.
"""

import re
from datetime import datetime, timedelta, timezone

_TIMESTAMP = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt]"
    r"(?P<hour>\d{2})[:-](?P<minute>\d{2})[:-](?P<second>\d{2})"
    r"(?P<fraction>\.\d+)?"
    r"(?P<offset>[Zz]|[+-]\d{2}[:-]?\d{2})$"
)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime, truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_rfc3339(moment: datetime) -> str:
    """Format ``moment`` as RFC 3339 in UTC with a ``Z`` suffix.

    Naive datetimes are taken to be UTC.

    Examples:
        >>> format_rfc3339(datetime(2024, 6, 1, 12, 30, tzinfo=timezone.utc))
        '2024-06-01T12:30:00Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_key_timestamp(moment: datetime) -> str:
    """Format ``moment`` for use in a file name or object key.

    Examples:
        >>> format_key_timestamp(datetime(2024, 6, 1, tzinfo=timezone.utc))
        '2024-06-01T00-00-00Z'
    """
    return format_rfc3339(moment).replace(":", "-")


def parse_timestamp(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp written with ``:`` or ``-`` separators.

    Returns:
        Aware UTC datetime, or ``None`` if ``value`` is not a timestamp.

    Examples:
        >>> parse_timestamp("2023-01-01T00-00-00Z")
        datetime.datetime(2023, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
        >>> parse_timestamp("readme") is None
        True
    """
    match = _TIMESTAMP.match(value)
    if not match:
        return None

    fraction = match["fraction"] or ""
    microseconds = int((fraction[1:] + "000000")[:6]) if fraction else 0

    # a name that matches the pattern but names no representable UTC instant
    # is not a timestamp either
    try:
        offset = match["offset"].upper()
        if offset == "Z":
            tz = timezone.utc
        else:
            digits = offset[1:].replace(":", "").replace("-", "")
            delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
            tz = timezone(-delta if offset[0] == "-" else delta)

        parsed = datetime.fromisoformat(
            f"{match['date']}T{match['hour']}:{match['minute']}:{match['second']}"
        )
        return parsed.replace(microsecond=microseconds, tzinfo=tz).astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None
