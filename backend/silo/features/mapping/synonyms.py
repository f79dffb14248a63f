"""Header vocabulary for column mapping: historical header names and keyword table."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from silo.shared.constants import Role

logger = logging.getLogger(__name__)


# Header names seen in earlier exports, compared trimmed + case-insensitive
DEFAULT_SYNONYMS: dict[Role, tuple[str, ...]] = {
    Role.COMPETITOR: ("Naam",),
    Role.RANK: ("Ranking",),
    Role.RACE: ("Race",),
    Role.NATIONALITY: ("Nat.",),
    Role.COMPETITION: ("Wedstrijd",),
    Role.LOCATION: ("Locatie",),
    Role.DISTANCE: ("Afstand",),
    Role.DATE: ("Datum",),
    Role.SEASON: ("Seizoen",),
    Role.SEX: ("Sekse",),
    Role.WINNER: ("winnaar",),
}

# Substring keywords for the heuristic guess, tried in order (Dutch + English)
KEYWORDS: dict[Role, tuple[str, ...]] = {
    Role.COMPETITOR: ("rijder", "rider", "athlete", "naam", "name", "skater", "persoon", "person"),
    Role.SEX: ("gender", "geslacht", "sekse", "sex", "m/v", "m-f"),
    Role.NATIONALITY: ("nat.", "nationaliteit", "nationality", "country", "land", "noc", "nation", "team"),
    Role.DISTANCE: ("afstand", "distance", "event", "discipline", "category"),
    Role.TIME: ("time", "tijd", "result", "lap time", "performance"),
    Role.RANK: ("ranking", "rank", "positie", "place", "pos", "finish", "result rank"),
    Role.DATE: ("date", "datum", "day", "start date", "competition date"),
    Role.COMPETITION: ("competition", "wedstrijd", "event name", "meet"),
    Role.LOCATION: ("locatie", "location", "venue", "plaats", "city", "baan", "track"),
    Role.SEASON: ("seizoen", "season", "saison", "year", "jaar"),
    Role.RACE: ("race", "heat", "rit", "koers"),
    Role.WINNER: ("winnaar", "winner", "champion", "kampioen"),
}

# Keys used by older persisted mappings -> current role
LEGACY_KEYS: dict[str, Role] = {
    "rider": Role.COMPETITOR,
    "ranking": Role.RANK,
    "nat": Role.NATIONALITY,
    "country": Role.NATIONALITY,
    "gender": Role.SEX,
}


def load_synonyms(path: Path | None) -> dict[Role, tuple[str, ...]]:
    """
    Default synonyms extended with the entries of a YAML file.

    Expected layout:
        roles:
          competitor: [Naam, Rijder]
          rank: [Ranking]

    Missing file (or no path) returns the defaults. Unknown role keys are
    skipped with a warning.
    """
    merged = {role: list(names) for role, names in DEFAULT_SYNONYMS.items()}

    if path is None or not path.exists():
        return {role: tuple(names) for role, names in merged.items()}

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    for key, names in (data.get("roles") or {}).items():
        try:
            role = Role(str(key).strip().lower())
        except ValueError:
            logger.warning(f"Unknown role '{key}' in {path.name}, skipped")
            continue
        bucket = merged.setdefault(role, [])
        for name in names or []:
            name = str(name)
            if name.strip().lower() not in {n.strip().lower() for n in bucket}:
                bucket.append(name)

    logger.debug(f"Loaded header synonyms from {path}")
    return {role: tuple(names) for role, names in merged.items()}
