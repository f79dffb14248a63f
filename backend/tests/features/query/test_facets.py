"""
Tests for dashboard facets.
"""

from silo.features.mapping import Mapping
from silo.features.query import FacetFilter, apply_facets, distinct_values, facet_options, row_year


class TestApplyFacets:
    """Exact, trimmed matching per role."""

    def test_no_facets_returns_rows(self, results_rows, results_mapping):
        assert apply_facets(results_rows, results_mapping, FacetFilter()) is results_rows

    def test_competition_and_distance(self, results_rows, results_mapping):
        facets = FacetFilter(competition="WK Afstanden", distance=" 500m ")
        rows = apply_facets(results_rows, results_mapping, facets)

        assert [r["Naam"] for r in rows] == ["Anna", "Bea", "Cleo"]

    def test_exact_not_substring(self, results_rows, results_mapping):
        rows = apply_facets(results_rows, results_mapping, FacetFilter(competition="WK"))
        assert rows == []

    def test_year_uses_date_role(self, results_rows, results_mapping):
        rows = apply_facets(results_rows, results_mapping, FacetFilter(year=2018))
        assert [r["Naam"] for r in rows] == ["Anna", "Cleo", "Cleo", "Anna"]

    def test_unmapped_role_does_not_restrict(self, results_rows):
        mapping = Mapping(competitor="Naam")
        rows = apply_facets(results_rows, mapping, FacetFilter(sex="M", year=2019))
        assert rows == results_rows

    def test_empty_string_is_inactive(self, results_rows, results_mapping):
        assert FacetFilter(competition="", sex=None).active() == {}


class TestFacetOptions:
    """Tests for facet_options / distinct_values / row_year."""

    def test_options(self, results_rows, results_mapping):
        options = facet_options(results_rows, results_mapping)

        assert options["year"] == [2018, 2019]
        assert options["competitor"] == ["Anna", "Bea", "Cleo", "Dirk"]
        assert options["distance"] == ["1000m", "1500m", "500m"]
        assert "" not in options["winner"]

    def test_unmapped_facet_is_empty(self, results_rows):
        options = facet_options(results_rows, Mapping(competitor="Naam"))

        assert options["year"] == []
        assert options["location"] == []

    def test_distinct_values_casefold_order(self):
        rows = [{"c": "beta"}, {"c": "Alpha"}, {"c": " alpha2 "}, {"c": ""}]
        assert distinct_values(rows, "c") == ["Alpha", "alpha2", "beta"]

    def test_row_year(self, results_mapping):
        assert row_year({"Datum": "02-11-2019"}, results_mapping) == 2019
        assert row_year({"Datum": "???"}, results_mapping) is None
