"""
Tests for champion listings.
"""

import pytest

from silo.features.champions import ChampionRecord, champions_by_year, is_championship, list_champions
from silo.features.mapping import Mapping


TITLE_KEYWORDS = ("wk", "os")


class TestIsChampionship:
    """Competition-name heuristic."""

    @pytest.mark.parametrize("text", [
        "World Championships Sprint",
        "Olympische Spelen",
        "European Championship",
        "WK Afstanden",
    ])
    def test_title_events(self, text):
        assert is_championship(text, TITLE_KEYWORDS)

    @pytest.mark.parametrize("text", ["World Cup", "NK Allround", "Oslo Cup", ""])
    def test_other_events(self, text):
        """Keywords match whole words only ('Oslo' does not count as 'os')."""
        assert not is_championship(text, TITLE_KEYWORDS)


class TestListChampions:
    """Tests for list_champions()."""

    def test_auto(self, results_rows, results_mapping):
        records = list_champions(results_rows, results_mapping, title_keywords=TITLE_KEYWORDS)

        assert records == [
            ChampionRecord("WK Afstanden", "2019/2020", "500m", "Anna"),
            ChampionRecord("WK Afstanden", "2019/2020", "1000m", "Bea"),
            ChampionRecord("OS 2018", "2017/2018", "1000m", "Cleo"),
        ]

    def test_auto_without_keywords(self, results_rows, results_mapping):
        assert list_champions(results_rows, results_mapping) == []

    def test_exact_competition(self, results_rows, results_mapping):
        records = list_champions(results_rows, results_mapping, competition="World Cup")
        assert [r.winner for r in records] == ["Anna"]

    def test_winner_falls_back_to_competitor(self, results_rows, results_mapping):
        for row in results_rows:
            row["winnaar"] = ""
        records = list_champions(results_rows, results_mapping, competition="NK Allround")
        assert records[0].winner == "Dirk"

    def test_first_row_per_group(self, results_mapping):
        rows = [
            {"Wedstrijd": "WK", "Ranking": 1, "Naam": "A", "Seizoen": "2019", "Afstand": "500m"},
            {"Wedstrijd": "WK", "Ranking": "1", "Naam": "B", "Seizoen": "2019", "Afstand": "500m"},
        ]
        records = list_champions(rows, results_mapping, competition="WK")
        assert [r.winner for r in records] == ["A"]

    def test_needs_competition_and_rank(self, results_rows):
        assert list_champions(results_rows, Mapping(competitor="Naam", competition="Wedstrijd")) == []


class TestChampionsByYear:
    """Tests for champions_by_year()."""

    TITLES = {"World champion": "wk", "Olympic champion": "os"}

    def test_grouping(self, results_rows, results_mapping):
        result = champions_by_year(results_rows, results_mapping, "Wedstrijd", "Seizoen", self.TITLES)

        assert result == {
            "World champion": {2020: ["Anna", "Bea"]},
            "Olympic champion": {2018: ["Cleo"]},
        }

    def test_years_newest_first(self, results_mapping):
        rows = [
            {"Wedstrijd": "WK", "Naam": "A", "Ranking": 1, "Seizoen": "1991/1992"},
            {"Wedstrijd": "WK", "Naam": "B", "Ranking": 1, "Seizoen": 2005},
        ]
        result = champions_by_year(rows, results_mapping, "Wedstrijd", "Seizoen", {"WK": "wk"})
        assert list(result["WK"]) == [2005, 1992]

    def test_without_rank_every_row_counts(self, results_rows):
        mapping = Mapping(competitor="Naam")
        result = champions_by_year(results_rows, mapping, "Wedstrijd", "Seizoen", {"OS": "os"})
        assert result == {"OS": {2018: ["Anna", "Cleo"]}}

    def test_unmapped_competitor(self, results_rows):
        result = champions_by_year(results_rows, Mapping(), "Wedstrijd", "Seizoen", self.TITLES)
        assert result == {"World champion": {}, "Olympic champion": {}}
