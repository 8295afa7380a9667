"""Path parser — infer a page's URI and publication date from its file path.

Two path shapes are recognised, relative to the site root::

    pages/about.tmpl              -> /about                 (no date)
    blog/2020/03/hello.tmpl       -> /blog/2020/03/hello    (March 2020)

Anything else is a configuration error.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from pathlib import PurePath

from autosite._errors import DateError, PathError

DEFAULT_SUFFIX = ".tmpl"

# Plain decimal integer with an optional sign; rejects "2_020", " 2020", "0x7e4"
_INT_RE = re.compile(r"[+-]?[0-9]+")

_MIN_YEAR = 1900
_MAX_YEAR = 99999


@dataclass(frozen=True, slots=True, order=True)
class Date:
    """A rough point in time: year and month of publication.

    ``Date()`` (year 0) means the page carries no date.  It is falsy and
    sorts before every dated value.
    """

    year: int = 0
    month: int = 0

    def __bool__(self) -> bool:
        return self.year != 0

    def before(self, other: Date) -> bool:
        """Whether this date is strictly earlier than *other*."""
        return self < other

    @property
    def month_name(self) -> str:
        """English month name, or ``""`` when the month is unset."""
        if 1 <= self.month <= 12:
            return calendar.month_name[self.month]
        return ""


def _parse_int(value: str) -> int | None:
    if not _INT_RE.fullmatch(value):
        return None
    return int(value)


def get_date(year: str, month: str) -> Date:
    """Build a Date from the year and month directory names.

    The year bounds are a sanity filter against directories that are not
    calendar years, not a calendar check.

    Raises:
        DateError: If the year is not in (1900, 99999) or the month is
            not in [1, 12].

    """
    y = _parse_int(year)
    if y is None or y <= _MIN_YEAR or y >= _MAX_YEAR:
        msg = f"bad year: {year}"
        raise DateError(msg)
    m = _parse_int(month)
    if m is None or m < 1 or m > 12:
        msg = f"bad month: {month}"
        raise DateError(msg)
    return Date(year=y, month=m)


def parse_path(path: str, suffix: str = DEFAULT_SUFFIX) -> tuple[str, Date]:
    """Extract the URI and date from a template file path.

    Args:
        path: Template path relative to the site root.
        suffix: Template file extension stripped from the last segment.

    Returns:
        ``(uri, date)``; ``date`` is ``Date()`` for undated pages.

    Raises:
        PathError: If the path has neither 2 nor 4 segments.
        DateError: If a dated path carries an invalid year or month.

    """
    parts = PurePath(path).parts
    if len(parts) == 2:
        return "/" + parts[1].removesuffix(suffix), Date()
    if len(parts) == 4:
        directory, year, month, name = parts
        uri = "/" + "/".join((directory, year, month, name.removesuffix(suffix)))
        return uri, get_date(year, month)
    msg = f"bad template path: {path}"
    raise PathError(msg)
