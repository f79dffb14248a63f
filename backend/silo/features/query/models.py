"""Query models (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, fields

from silo.shared.constants import Logic, Operator


@dataclass(frozen=True)
class Rule:
    """
    One filter predicate.

    ``logic`` combines this rule with everything evaluated before it and is
    ignored on the first rule. ``value`` is raw user text: a number, a
    "lo..hi" range for BETWEEN, or nothing for EMPTY / NOT_EMPTY.
    """

    column: str
    operator: Operator
    value: str = ""
    logic: Logic = Logic.AND


@dataclass(frozen=True)
class FacetFilter:
    """Dashboard facet selection. None means "all"."""

    year: int | None = None
    competition: str | None = None
    location: str | None = None
    distance: str | None = None
    sex: str | None = None
    season: str | None = None
    winner: str | None = None
    nationality: str | None = None
    competitor: str | None = None

    def active(self) -> dict[str, object]:
        """Only the facets that restrict something."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) not in (None, "")
        }
