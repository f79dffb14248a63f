"""Query feature module — rule-based filtering and dashboard facets."""

from .models import Rule, FacetFilter
from .evaluator import run, evaluate_rule, validate_rules, cell_number, parse_range
from .facets import apply_facets, facet_options, distinct_values, row_year, FACET_ROLES

__all__ = [
    "Rule",
    "FacetFilter",
    "run",
    "evaluate_rule",
    "validate_rules",
    "cell_number",
    "parse_range",
    "apply_facets",
    "facet_options",
    "distinct_values",
    "row_year",
    "FACET_ROLES",
]
