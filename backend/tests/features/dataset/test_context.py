"""
Tests for Dataset and AppContext.
"""

import pytest

from silo.features.dataset import AppContext, Dataset, UnknownColumnError, collect_columns


class TestDataset:
    """Closed column set."""

    def test_from_rows_fills_missing_cells(self):
        ds = Dataset.from_rows([{"a": 1}, {"b": 2}])

        assert ds.columns == ("a", "b")
        assert ds.rows == [{"a": 1, "b": ""}, {"a": "", "b": 2}]

    def test_explicit_columns_keep_order(self):
        ds = Dataset.from_rows([{"b": 1, "a": 2}], columns=["a", "b"])
        assert ds.columns == ("a", "b")

    def test_require(self):
        ds = Dataset.from_rows([{"a": 1}])

        assert ds.require("a") == "a"
        with pytest.raises(UnknownColumnError) as exc:
            ds.require("z")
        assert str(exc.value) == "Unknown column 'z'"
        assert exc.value.columns == ("a",)

    def test_value_and_column_values(self):
        ds = Dataset.from_rows([{"a": 1}, {"a": 2}])

        assert ds.value(ds.rows[0], "a") == 1
        assert ds.column_values("a") == [1, 2]
        with pytest.raises(KeyError):
            ds.column_values("z")

    def test_input_rows_not_mutated(self):
        rows = [{"a": 1}, {"b": 2}]
        Dataset.from_rows(rows)
        assert rows == [{"a": 1}, {"b": 2}]

    def test_collect_columns(self):
        assert collect_columns([{"x": 1, "y": 2}, {"z": 3, "x": 4}]) == ("x", "y", "z")


class TestAppContext:
    """Load / update / reset cycle."""

    @pytest.fixture
    def context(self, results_rows):
        ctx = AppContext()
        ctx.load(results_rows, file_name="results.xlsx")
        return ctx

    def test_load_resolves_mapping(self, context):
        assert context.is_loaded
        assert context.file_name == "results.xlsx"
        assert context.mapping.competitor == "Naam"
        assert context.mapping.time == "Tijd"

    def test_load_with_persisted_mapping(self, results_rows):
        ctx = AppContext()
        ctx.load(results_rows, persisted_mapping={"competitor": "winnaar"})
        assert ctx.mapping.competitor == "winnaar"

    def test_update_mapping(self, context):
        mapping = context.update_mapping({"competitor": "winnaar", "time": None})

        assert mapping.competitor == "winnaar"
        assert mapping.time is None
        assert mapping.rank == "Ranking"
        assert context.mapping is mapping

    def test_update_unknown_column_changes_nothing(self, context):
        before = context.mapping

        with pytest.raises(UnknownColumnError):
            context.update_mapping({"competitor": "winnaar", "rank": "Plaats"})
        assert context.mapping == before

    def test_update_unknown_role(self, context):
        with pytest.raises(ValueError):
            context.update_mapping({"coach": "Naam"})

    def test_reset_mapping(self, context):
        context.update_mapping({"competitor": "winnaar"})
        assert context.reset_mapping().competitor == "Naam"

    def test_summary(self, context):
        summary = context.summary()

        assert summary.row_count == 10
        assert summary.competitors == 4
        assert summary.seasons == 3
        assert summary.distances == 3
        assert summary.unresolved == []

    def test_clear(self, context):
        context.clear()

        assert not context.is_loaded
        assert context.columns == ()
        assert context.mapping.competitor is None
