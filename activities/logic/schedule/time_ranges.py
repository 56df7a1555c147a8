"""Time range parsing and overlap tests (minutes since midnight, half-open intervals)."""
import re
from typing import Optional, Tuple

TimeRange = Tuple[int, int]

# "16:30", "16.30" or "16h30"
_CLOCK = re.compile(r'(\d{1,2})[:h.](\d{2})')
_RANGE_SEPARATOR = re.compile(r'[–-]')


def parse_minutes(text: str) -> Optional[int]:
    m = _CLOCK.search(text or '')
    if not m:
        return None
    return int(m.group(1)) * 60 + int(m.group(2))


def parse_range(text: Optional[str]) -> Optional[TimeRange]:
    """Parse "HH:MM–HH:MM" (hyphen or en dash) into (start, end); None when malformed."""
    if not text:
        return None
    parts = _RANGE_SEPARATOR.split(text)
    if len(parts) != 2:
        return None
    start = parse_minutes(parts[0].strip())
    end = parse_minutes(parts[1].strip())
    if start is None or end is None:
        return None
    return start, end


def overlaps(a: TimeRange, b: TimeRange) -> bool:
    # touching endpoints do not overlap
    return max(a[0], b[0]) < min(a[1], b[1])


__all__ = ['TimeRange', 'parse_minutes', 'parse_range', 'overlaps']
