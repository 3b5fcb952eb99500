"""Device clock parsing and time zone resolution."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from panorama_cli.errors import ClockError

CLOCK_FORMAT = "%b %d %H:%M:%S %Y"
_UTC_ABBREVIATIONS = frozenset({"UTC", "GMT", "UCT", "Z"})


def resolve_zone(abbreviation: str, configured: str | None = None) -> tzinfo:
    """Turn the device's zone abbreviation into a ``tzinfo``.

    A configured IANA zone name always wins, since abbreviations such as
    ``PST`` or ``IST`` are not zone keys and may be ambiguous.
    """

    if configured:
        try:
            return ZoneInfo(configured)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ClockError(f"Unknown time zone {configured!r}") from exc

    if abbreviation.upper() in _UTC_ABBREVIATIONS:
        return timezone.utc

    try:
        return ZoneInfo(abbreviation)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ClockError(
            f"Cannot resolve time zone {abbreviation!r}; set PANORAMA_CLI_DEVICE_TIMEZONE"
        ) from exc


def parse_clock(text: str, configured_zone: str | None = None) -> datetime:
    """Parse ``show clock`` output such as ``Wed Jan 15 13:45:00 PST 2024``."""

    tokens = text.split()
    if len(tokens) != 6:
        raise ClockError(f"Unexpected clock format: {text!r}")

    _weekday, month, day, clock_time, abbreviation, year = tokens
    try:
        naive = datetime.strptime(f"{month} {day} {clock_time} {year}", CLOCK_FORMAT)
    except ValueError as exc:
        raise ClockError(f"Unexpected clock format: {text!r}") from exc

    return naive.replace(tzinfo=resolve_zone(abbreviation, configured_zone))
