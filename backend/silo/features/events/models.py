"""Event models (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EventKey:
    """
    Identity of one result instance.

    All fields are trimmed + case-folded; unresolved roles are "". The date
    is the raw cell text, so two rows only share an event when their date
    cells read the same.
    """

    competition: str = ""
    location: str = ""
    distance: str = ""
    date: str = ""
    race: str = ""
    sex: str = ""
    season: str = ""


@dataclass
class EventIndex:
    """Who took part in which event, and their best rank there."""

    event_competitors: dict[EventKey, set[str]] = field(default_factory=dict)
    competitor_events: dict[str, set[EventKey]] = field(default_factory=dict)
    event_ranks: dict[EventKey, dict[str, float]] = field(default_factory=dict)

    @property
    def size(self) -> int:
        """Number of distinct events."""
        return len(self.event_competitors)

    @property
    def competitor_count(self) -> int:
        return len(self.competitor_events)

    def events_of(self, name: str) -> set[EventKey]:
        return self.competitor_events.get(name, set())

    def rank_of(self, event: EventKey, name: str) -> float | None:
        return self.event_ranks.get(event, {}).get(name)
