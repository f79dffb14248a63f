"""
Tests for column mapping resolution.
"""

import pytest

from silo.features.mapping import (
    DEFAULT_SYNONYMS,
    Mapping,
    auto_mapping,
    guess_column,
    load_synonyms,
    missing_roles,
    resolve,
)
from silo.shared.constants import Role


DUTCH_HEADER = [
    "Naam", "Ranking", "Race", "Nat.", "Wedstrijd", "Locatie",
    "Afstand", "Datum", "Seizoen", "Sekse", "Tijd", "winnaar",
]

ENGLISH_HEADER = [
    "Athlete", "Gender", "Country", "Distance", "Time", "Rank",
    "Date", "Competition", "Venue", "Season", "Heat",
]


# =============================================================================
# Test auto resolution
# =============================================================================

class TestAutoMapping:
    """Resolution from the header alone."""

    def test_dutch_export_resolves_every_role(self):
        mapping = auto_mapping(DUTCH_HEADER)

        assert mapping.competitor == "Naam"
        assert mapping.rank == "Ranking"
        assert mapping.nationality == "Nat."
        assert mapping.winner == "winnaar"
        assert mapping.time == "Tijd"  # keyword, no synonym
        assert mapping.unresolved() == []

    def test_english_header_by_keywords(self):
        mapping = auto_mapping(ENGLISH_HEADER)

        assert mapping.competitor == "Athlete"
        assert mapping.sex == "Gender"
        assert mapping.nationality == "Country"
        assert mapping.distance == "Distance"
        assert mapping.time == "Time"
        assert mapping.rank == "Rank"
        assert mapping.date == "Date"
        assert mapping.competition == "Competition"
        assert mapping.location == "Venue"
        assert mapping.season == "Season"
        assert mapping.race == "Heat"
        assert mapping.winner is None

    def test_synonyms_ignore_case_and_whitespace(self):
        mapping = auto_mapping([" naam ", "RANKING"])

        assert mapping.competitor == " naam "
        assert mapping.rank == "RANKING"

    def test_keyword_order_beats_column_order(self):
        """'rider' is tried before 'name', so 'Rider' wins over 'Team name'."""
        assert auto_mapping(["Team name", "Rider"]).competitor == "Rider"

    def test_empty_header(self):
        assert auto_mapping([]) == Mapping()

    def test_non_text_columns_are_ignored(self):
        mapping = resolve(["Naam", 42, None])
        assert mapping.competitor == "Naam"

    def test_result_is_always_a_column(self):
        mapping = auto_mapping(ENGLISH_HEADER)
        for column in mapping.as_dict().values():
            assert column is None or column in ENGLISH_HEADER


# =============================================================================
# Test persisted bindings
# =============================================================================

class TestPersistedMapping:
    """Stored bindings take precedence when their column still exists."""

    def test_exact_binding_wins(self):
        columns = ["Naam", "Rijder"]
        mapping = resolve(columns, {"competitor": "Rijder"})
        assert mapping.competitor == "Rijder"

    def test_loose_binding(self):
        mapping = resolve(["Naam", " RIJDER "], {"competitor": "rijder"})
        assert mapping.competitor == " RIJDER "

    def test_stale_binding_falls_back(self):
        mapping = resolve(DUTCH_HEADER, {"competitor": "Skater"})
        assert mapping.competitor == "Naam"

    def test_legacy_keys(self):
        mapping = resolve(["Naam", "Pos", "Land"], {"ranking": "Pos", "country": "Land"})

        assert mapping.rank == "Pos"
        assert mapping.nationality == "Land"

    def test_current_key_beats_legacy_key(self):
        mapping = resolve(["A", "B"], {"rider": "A", "competitor": "B"})
        assert mapping.competitor == "B"

    def test_junk_is_ignored(self):
        mapping = resolve(DUTCH_HEADER, {"competitor": "", "rank": None, "bogus": "Naam", "time": 5})

        assert mapping == auto_mapping(DUTCH_HEADER)

    def test_resolving_own_result_is_stable(self):
        first = resolve(ENGLISH_HEADER)
        assert resolve(ENGLISH_HEADER, first) == first
        assert resolve(ENGLISH_HEADER, first.as_dict()) == first


# =============================================================================
# Test helpers
# =============================================================================

class TestHelpers:
    """Tests for guess_column, missing_roles and Mapping."""

    def test_guess_column_first_keyword_with_hit(self):
        assert guess_column(["Event name", "Datum"], ["datum", "event"]) == "Datum"
        assert guess_column(["X"], ["y"]) is None

    def test_missing_roles(self):
        mapping = Mapping(competitor="Naam")
        missing = missing_roles(mapping, ["competitor", Role.RANK, "time"])
        assert missing == [Role.RANK, Role.TIME]

    def test_from_dict_skips_unknown_and_blank(self):
        mapping = Mapping.from_dict({"competitor": "Naam", "rank": " ", "other": "X"})

        assert mapping.competitor == "Naam"
        assert mapping.rank is None

    def test_get_rejects_unknown_role(self):
        with pytest.raises(ValueError):
            Mapping().get("coach")


# =============================================================================
# Test synonyms file
# =============================================================================

class TestLoadSynonyms:
    """YAML synonyms extend the defaults."""

    def test_missing_file_gives_defaults(self, tmp_path):
        synonyms = load_synonyms(tmp_path / "nope.yaml")
        assert synonyms[Role.COMPETITOR] == DEFAULT_SYNONYMS[Role.COMPETITOR]

    def test_extends_and_dedupes(self, tmp_path):
        path = tmp_path / "synonyms.yaml"
        path.write_text(
            "roles:\n"
            "  competitor: [naam, Schaatser]\n"
            "  time: [Eindtijd]\n"
            "  coach: [Trainer]\n",
            encoding="utf-8",
        )

        synonyms = load_synonyms(path)

        assert synonyms[Role.COMPETITOR] == ("Naam", "Schaatser")
        assert synonyms[Role.TIME] == ("Eindtijd",)
        assert resolve(["Schaatser", "Eindtijd"], synonyms=synonyms).competitor == "Schaatser"

    def test_shipped_file_loads(self):
        from silo.config import settings

        synonyms = load_synonyms(settings.synonyms_file)
        assert "Naam" in synonyms[Role.COMPETITOR]
