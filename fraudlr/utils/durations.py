"""
Duration string parsing.

Accepts the compact forms used in environment configuration, e.g. the
token lifetime ``JWT_EXPIRES_IN=7d``.

Example:
    >>> parse_duration("7d")
    datetime.timedelta(days=7)
    >>> parse_duration("90m")
    datetime.timedelta(seconds=5400)
    >>> parse_duration("3600")
    datetime.timedelta(seconds=3600)
"""

import re
from datetime import timedelta

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([a-zA-Z]*)\s*$")

_UNITS = {
    "": 1,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string into a timedelta.

    Args:
        value: Number followed by an optional unit (s, m, h, d, w).
            A bare number is read as seconds.

    Returns:
        The parsed, strictly positive duration

    Raises:
        ValueError: If the string is not a recognised positive duration
    """
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount, unit = match.groups()
    multiplier = _UNITS.get(unit.lower())
    if multiplier is None:
        raise ValueError(f"Unknown duration unit {unit!r} in {value!r}")

    seconds = int(amount) * multiplier
    if seconds <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")

    return timedelta(seconds=seconds)
