"""
Cell value normalization.

Every function here is total: malformed input yields NaN or None, never an
exception. Cells arrive as str, int, float, date, datetime, time or None,
depending on how the spreadsheet decoder typed them.

Usage:
    from silo.shared.normalizer import to_number, duration_to_seconds

    to_number("12,5")            # 12.5
    duration_to_seconds("1:02.345")  # 62.345
    parse_date("02-11-2019")     # date(2019, 11, 2)
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Any

from dateutil import parser as dateparser

from .constants import PLAIN_YEAR_RANGE, SECONDS_PER_DAY, SERIAL_DATE_RANGE

# Serial 0 of the 1900 date system. Keeps the historical leap-year quirk.
SPREADSHEET_EPOCH = datetime(1899, 12, 30)

_NUMERIC_RE = re.compile(r"-?\d+(\.\d+)?", re.ASCII)
_DAY_FIRST_RE = re.compile(r"(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})", re.ASCII)
_YEAR_RE = re.compile(r"(?<!\d)(19\d{2}|20\d{2})(?!\d)", re.ASCII)

# Fills in missing components for generic parsing ("2020" -> 2020-01-01)
_PARSE_DEFAULT = datetime(2000, 1, 1)


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def is_finite(v: Any) -> bool:
    """True for int/float values that are neither NaN nor infinite."""
    return _is_number(v) and math.isfinite(v)


def to_text(v: Any) -> str:
    """
    Cell as plain text, "" for empty.

    Integral floats lose their ".0" (spreadsheet readers often return 3.0
    for a cell showing 3) and dates render as ISO strings.
    """
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float):
        if math.isfinite(v) and v.is_integer():
            return str(int(v))
        return repr(v)
    if isinstance(v, datetime):
        if v.time() == time(0, 0):
            return v.date().isoformat()
        return v.isoformat()
    if isinstance(v, (date, time)):
        return v.isoformat()
    return str(v)


def norm(v: Any) -> str:
    """Trimmed, case-folded text used for all text comparisons."""
    return to_text(v).strip().casefold()


def contains_word(text: Any, keyword: Any) -> bool:
    """
    Whether ``keyword`` occurs in ``text`` as a whole word (case-folded).

    "WK 2019 Inzell" contains "wk"; "World Cup Oslo" does not contain "os".
    """
    needle = norm(keyword)
    if not needle:
        return False
    return re.search(rf"(?<!\w){re.escape(needle)}(?!\w)", norm(text)) is not None


def _float_or_nan(s: str) -> float:
    # float() also accepts non-ASCII digits
    if not s.isascii():
        return math.nan
    try:
        n = float(s)
    except (ValueError, OverflowError):
        return math.nan
    return n if math.isfinite(n) else math.nan


def to_number(v: Any) -> float:
    """
    Parse a plain decimal number.

    Strings are trimmed and the first decimal comma becomes a dot before
    being validated against ``-?\\d+(\\.\\d+)?``. Anything else is NaN.

    Examples:
        "12,5"  -> 12.5
        " 3 "   -> 3.0
        "1:02"  -> nan
    """
    if _is_number(v):
        try:
            n = float(v)
        except OverflowError:
            return math.nan
        return n if math.isfinite(n) else math.nan
    if not isinstance(v, str):
        return math.nan

    s = v.strip().replace(",", ".", 1)
    if not _NUMERIC_RE.fullmatch(s):
        return math.nan
    return _float_or_nan(s)


def duration_to_seconds(v: Any) -> float:
    """
    Parse a duration into seconds.

    Supports:
    - numbers in (0, 1): fraction of a 24h day (spreadsheet time cells)
    - other numbers: seconds
    - time / timedelta objects
    - "ss.sss", "m:ss.sss", "h:mm:ss.sss" (decimal comma allowed)

    Returns NaN when any part is not a finite number.
    """
    if v is None or isinstance(v, bool):
        return math.nan
    if isinstance(v, timedelta):
        return v.total_seconds()
    if isinstance(v, time):
        return v.hour * 3600 + v.minute * 60 + v.second + v.microsecond / 1_000_000
    if _is_number(v):
        if not math.isfinite(v):
            return math.nan
        if 0 < v < 1:
            return v * SECONDS_PER_DAY
        return float(v)
    if not isinstance(v, str):
        return math.nan

    s = v.strip().replace(",", ".", 1)
    if not s:
        return math.nan
    if _NUMERIC_RE.fullmatch(s):
        return _float_or_nan(s)

    parts = [_float_or_nan(p.strip()) for p in s.split(":")]
    if len(parts) > 3 or any(math.isnan(p) for p in parts):
        return math.nan

    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        minutes, seconds = parts
        return minutes * 60 + seconds
    hours, minutes, seconds = parts
    return hours * 3600 + minutes * 60 + seconds


def _serial_to_date(serial: float) -> date | None:
    if not math.isfinite(serial):
        return None
    try:
        return (SPREADSHEET_EPOCH + timedelta(days=serial)).date()
    except (OverflowError, ValueError):
        return None


def parse_date(v: Any) -> date | None:
    """
    Parse a cell into a calendar date, None when impossible.

    Accepted:
    - date / datetime objects
    - spreadsheet serial numbers (epoch 1899-12-30)
    - "dd-mm-yyyy" / "dd/mm/yy" (2-digit years are 20yy)
    - ISO strings, then anything python-dateutil understands (day first)
    """
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    if _is_number(v):
        return _serial_to_date(float(v))
    if not isinstance(v, str):
        return None

    s = v.strip()
    if not s:
        return None

    m = _DAY_FIRST_RE.fullmatch(s)
    if m:
        day, month, year = (int(g) for g in m.groups())
        if year < 100:
            year += 2000
        try:
            return date(year, month, day)
        except ValueError:
            return None

    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass

    try:
        return dateparser.parse(s, dayfirst=True, default=_PARSE_DEFAULT).date()
    except (ValueError, OverflowError):
        return None


def extract_season_years(v: Any) -> set[int]:
    """
    Candidate years mentioned by a season/year cell.

    "1991/1992" -> {1991, 1992}; 2019 -> {2019}; serial 43831 -> {2020}.
    """
    if v is None or isinstance(v, bool):
        return set()
    if isinstance(v, date):
        return {v.year}
    if _is_number(v):
        if not math.isfinite(v):
            return set()
        lo, hi = PLAIN_YEAR_RANGE
        if lo <= v <= hi:
            return {int(v)}
        lo, hi = SERIAL_DATE_RANGE
        if lo <= v <= hi:
            parsed = parse_date(v)
            return {parsed.year} if parsed else set()
        return set()

    return {int(y) for y in _YEAR_RE.findall(to_text(v))}


def season_year(v: Any) -> int | None:
    """Single display year of a season cell (the latest candidate)."""
    years = extract_season_years(v)
    return max(years) if years else None
