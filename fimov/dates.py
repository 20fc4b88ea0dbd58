"""
Date parsing for fimov.

Dates are plain `YYYY-MM-DD` strings, parsed as naive local-midnight datetimes
so they compare directly with `datetime.fromtimestamp()` values.
"""

import re
from dataclasses import dataclass
from datetime import datetime

from .errors import InvalidDateError

DATE_FORMAT = "%Y-%m-%d"

# strptime alone accepts unpadded fields such as 2020-1-1
_DATE_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class DateRange:
    """
    A (start, end) pair of local-midnight datetimes.

    Matching (`organizer.is_in_range`) is strict on both bounds: a timestamp
    equal to `start` or `end` is outside the range.
    """
    start: datetime
    end: datetime

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end


def parse_date(text: str, field: str = "start") -> datetime:
    """
    Parse a `YYYY-MM-DD` date.

    Args:
        text: The date string.
        field: Which option the date came from, used in the error message.

    Raises:
        InvalidDateError: If `text` is not a valid date in that format.
    """
    if not isinstance(text, str) or not _DATE_SHAPE.fullmatch(text):
        raise InvalidDateError(f"invalid {field} date: {text!r} (expected YYYY-MM-DD)")

    try:
        return datetime.strptime(text, DATE_FORMAT)
    except ValueError as e:
        raise InvalidDateError(f"invalid {field} date: {text!r} ({e})") from e


def today() -> str:
    """Today's local date as `YYYY-MM-DD`."""
    return datetime.now().strftime(DATE_FORMAT)


def resolve_range(start: str, end: str | None = None, name: str | None = None) -> tuple[DateRange, str]:
    """
    Turn the textual CLI dates into a DateRange and a destination folder name.

    `end` defaults to today (midnight, so files modified today are excluded)
    and `name` defaults to `<start>_<end>`.
    """
    if not end:
        end = today()

    if not name:
        name = f"{start}_{end}"

    date_range = DateRange(parse_date(start, "start"), parse_date(end, "end"))
    return date_range, name
