from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from core.errors import MalformedTimestampError

# AWS Health writes timestamps that look like RFC 1123 but do not zero-pad
# the day of month: "Fri, 3 Jun 2022 05:01:10 GMT".
_HEALTH_TIME_RE = re.compile(
    r"(?P<weekday>Mon|Tue|Wed|Thu|Fri|Sat|Sun), "
    r" ?(?P<day>\d{1,2}) "
    r"(?P<month>Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) "
    r"(?P<year>\d{4}) "
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2}):(?P<second>\d{2}) "
    r"(?P<zone>[A-Za-z]{1,5})",
    re.IGNORECASE | re.ASCII,
)

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTHS = {name.lower(): number for number, name in enumerate(_MONTH_NAMES, start=1)}


def _zone(name: str, hours: float) -> timezone:
    return timezone(timedelta(hours=hours), name)


# RFC 822 zone names plus unambiguous North American, European and
# Asia-Pacific abbreviations. Ambiguous ones such as IST are left out.
ZONES: dict[str, timezone] = {
    "UTC": timezone.utc,
    "UT": _zone("UT", 0),
    "GMT": _zone("GMT", 0),
    "Z": _zone("Z", 0),
    "EST": _zone("EST", -5),
    "EDT": _zone("EDT", -4),
    "CST": _zone("CST", -6),
    "CDT": _zone("CDT", -5),
    "MST": _zone("MST", -7),
    "MDT": _zone("MDT", -6),
    "PST": _zone("PST", -8),
    "PDT": _zone("PDT", -7),
    "AKST": _zone("AKST", -9),
    "AKDT": _zone("AKDT", -8),
    "HST": _zone("HST", -10),
    "HDT": _zone("HDT", -9),
    "WET": _zone("WET", 0),
    "WEST": _zone("WEST", 1),
    "BST": _zone("BST", 1),
    "CET": _zone("CET", 1),
    "CEST": _zone("CEST", 2),
    "EET": _zone("EET", 2),
    "EEST": _zone("EEST", 3),
    "JST": _zone("JST", 9),
    "KST": _zone("KST", 9),
    "AWST": _zone("AWST", 8),
    "ACST": _zone("ACST", 9.5),
    "ACDT": _zone("ACDT", 10.5),
    "AEST": _zone("AEST", 10),
    "AEDT": _zone("AEDT", 11),
    "NZST": _zone("NZST", 12),
    "NZDT": _zone("NZDT", 13),
}

_ABSENT = ("", "null")


def parse_health_time(value: str, field: str) -> datetime | None:
    """Parse an AWS Health timestamp into an aware datetime.

    Returns ``None`` for ``""`` and ``"null"``, which the provider uses for
    "no value". The weekday is checked for spelling only; the provider's
    own samples pair dates with the wrong weekday.

    Raises:
        MalformedTimestampError: ``value`` does not match the grammar, names
            an unknown zone, or denotes an impossible date or time.
    """
    if value in _ABSENT:
        return None

    m = _HEALTH_TIME_RE.fullmatch(value)
    if m is None:
        raise MalformedTimestampError(field, value)

    tz = ZONES.get(m.group("zone"))
    if tz is None:
        raise MalformedTimestampError(
            field, value, f"unknown time zone {m.group('zone')!r}"
        )

    try:
        return datetime(
            int(m.group("year")),
            _MONTHS[m.group("month").lower()],
            int(m.group("day")),
            int(m.group("hour")),
            int(m.group("minute")),
            int(m.group("second")),
            tzinfo=tz,
        )
    except ValueError as exc:
        raise MalformedTimestampError(field, value, str(exc)) from exc


def format_health_time(dt: datetime) -> str:
    """Render an aware datetime in the provider's format, in UTC."""
    utc = dt.astimezone(timezone.utc)
    return (
        f"{_WEEKDAYS[utc.weekday()]}, {utc.day} {_MONTH_NAMES[utc.month - 1]} "
        f"{utc.year:04d} {utc:%H:%M:%S} UTC"
    )
