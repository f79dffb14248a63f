"""Distance categorization: raw distance text to a comparable bucket."""

from __future__ import annotations

import re
from typing import Any

from silo.shared.normalizer import to_text

# Metric buckets, longest first
DISTANCE_BUCKETS: tuple[int, ...] = (10000, 5000, 3000, 1500, 1000, 500)

# Keyword buckets matched by substring (English + Dutch)
KEYWORD_BUCKETS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("mass start", ("mass start", "massstart", "massastart", "mass-start")),
    ("team pursuit", ("team pursuit", "ploegenachtervolging", "ploeg achtervolging")),
    ("final classification", ("final classification", "eindklassement", "klassement", "allround")),
)

# "1.500 m" / "1 500m" -> "1500m"
_DIGIT_GROUPING_RE = re.compile(r"(?<=\d)[.\s](?=\d{3}(?!\d))")


def _bucket_pattern(meters: int) -> re.Pattern:
    # digit boundaries so "1500m" never lands in "500m"
    return re.compile(rf"(?<!\d){meters}(?!\d)")


_BUCKET_PATTERNS = tuple((m, _bucket_pattern(m)) for m in DISTANCE_BUCKETS)


def categorize_distance(value: Any) -> str:
    """
    Bucket for a distance cell.

    Examples:
        "1500m"           -> "1500m"
        "500 meter"       -> "500m"
        "1.000m"          -> "1000m"
        "Massastart"      -> "mass start"
        "Eindklassement"  -> "final classification"
        " 100m "          -> "100m" (unknown text keeps its trimmed form)
    """
    raw = to_text(value).strip()
    if not raw:
        return ""

    text = raw.lower()
    for bucket, needles in KEYWORD_BUCKETS:
        if any(needle in text for needle in needles):
            return bucket

    compact = _DIGIT_GROUPING_RE.sub("", text)
    for meters, pattern in _BUCKET_PATTERNS:
        if pattern.search(compact):
            return f"{meters}m"

    return raw
