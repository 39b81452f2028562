"""Shared utilities used across the booking core."""

import re

_POSTCODE_RE = re.compile(r"^[A-Z]{1,2}[0-9][A-Z0-9]?[0-9][A-Z]{2}$")
_TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

# Shortest full UK postcode once spaces are removed, e.g. "A99AA".
MIN_FULL_POSTCODE_LENGTH = 5
INWARD_CODE_LENGTH = 3


def normalize_postcode(value: str) -> str:
    """Uppercase a postcode and strip every whitespace character.

    Examples:
        >>> normalize_postcode(" bn1 1aa ")
        'BN11AA'
    """
    return re.sub(r"\s+", "", value).upper()


def outward_code(value: str) -> str:
    """Return the outward code (the part before the inward code) of a postcode.

    A bare outward code such as ``"BN41"`` is returned unchanged.

    Examples:
        >>> outward_code("BN41 1AA")
        'BN41'
        >>> outward_code("bn1")
        'BN1'
    """
    normalized = normalize_postcode(value)
    if len(normalized) >= MIN_FULL_POSTCODE_LENGTH:
        return normalized[:-INWARD_CODE_LENGTH]
    return normalized


def is_valid_postcode(value: str) -> bool:
    """Check a full UK postcode, ignoring case and spacing."""
    return bool(_POSTCODE_RE.match(normalize_postcode(value)))


def parse_time(value: str) -> int:
    """Convert an ``HH:MM`` string to minutes past midnight.

    Raises:
        ValueError: If the value is not a 24-hour time.
    """
    match = _TIME_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time: {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_time_label(value: str) -> str:
    """Render an ``HH:MM`` string as a 12-hour label.

    Examples:
        >>> format_time_label("13:00")
        '1:00 PM'
        >>> format_time_label("11:30")
        '11:30 AM'
    """
    minutes = parse_time(value)
    hours, mins = divmod(minutes, 60)
    period = "PM" if hours >= 12 else "AM"
    display_hours = hours - 12 if hours > 12 else (12 if hours == 0 else hours)
    return f"{display_hours}:{mins:02d} {period}"
