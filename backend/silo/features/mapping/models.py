"""Column mapping model (dataclass, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Mapping as MappingType

from silo.shared.constants import Role

# Flat role -> column record as stored/edited outside the core.
# Keys are Role values; missing keys mean "not bound".
PartialMapping = MappingType[str, "str | None"]


@dataclass(frozen=True)
class Mapping:
    """Role -> column name, None when the role is unresolved."""

    competitor: str | None = None  # "Naam"
    sex: str | None = None  # "Sekse"
    nationality: str | None = None  # "Nat."
    distance: str | None = None  # "Afstand"
    time: str | None = None  # "Tijd"
    rank: str | None = None  # "Ranking"
    date: str | None = None  # "Datum"
    competition: str | None = None  # "Wedstrijd"
    location: str | None = None  # "Locatie"
    season: str | None = None  # "Seizoen"
    race: str | None = None  # "Race"
    winner: str | None = None  # "winnaar"

    def get(self, role: Role | str) -> str | None:
        return getattr(self, Role(role).value)

    def as_dict(self) -> dict[str, str | None]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def unresolved(self) -> list[Role]:
        return [role for role in Role if self.get(role) is None]

    @classmethod
    def from_dict(cls, data: PartialMapping) -> Mapping:
        """Build from a flat record, ignoring unknown keys and blank values."""
        known = {f.name for f in fields(cls)}
        values = {
            key: value
            for key, value in data.items()
            if key in known and isinstance(value, str) and value.strip()
        }
        return cls(**values)
