"""Events feature module — which competitors shared a result instance."""

from .models import EventKey, EventIndex
from .distance import categorize_distance, DISTANCE_BUCKETS, KEYWORD_BUCKETS
from .builder import build, event_key, competitor_name

__all__ = [
    "EventKey",
    "EventIndex",
    "categorize_distance",
    "DISTANCE_BUCKETS",
    "KEYWORD_BUCKETS",
    "build",
    "event_key",
    "competitor_name",
]
