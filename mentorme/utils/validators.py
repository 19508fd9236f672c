import re

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_HEX_COLOR_RE = re.compile(r"^(?:[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")


def is_valid_time_of_day(value: str) -> bool:
    """HH:MM, 24-hour clock"""
    return bool(_TIME_RE.match(value))


def is_valid_hex_color(value: str) -> bool:
    """RRGGBB or AARRGGBB without a leading '#'"""
    return bool(_HEX_COLOR_RE.match(value))


def is_valid_scale(value: int, low: int = 1, high: int = 5) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and low <= value <= high
