"""
Rule evaluation over row lists.

Rules chain as a left fold without grouping:

    ok = p(rule_0)
    ok = (ok or p(rule_i))   if rule_i.logic is OR
    ok = (ok and p(rule_i))  otherwise

so ``[A, OR B, AND C]`` means ``(A or B) and C``. Malformed rules evaluate
to False; nothing here raises on cell content.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Sequence

from silo.shared.constants import (
    NUMERIC_OPERATORS,
    RANGE_SEPARATOR,
    TEXT_OPERATORS,
    Logic,
    Operator,
)
from silo.shared.normalizer import duration_to_seconds, is_finite, norm, to_number, to_text

from .models import Rule

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def cell_number(v: Any) -> float:
    """Numeric view of a cell: plain number first, then duration."""
    n = to_number(v)
    if math.isnan(n):
        n = duration_to_seconds(v)
    return n


def parse_range(value: str) -> tuple[float, float] | None:
    """Split "lo..hi" into (lo, hi); None unless exactly two finite numbers."""
    parts = str(value).split(RANGE_SEPARATOR)
    if len(parts) != 2:
        return None
    lo, hi = to_number(parts[0]), to_number(parts[1])
    if not (is_finite(lo) and is_finite(hi)):
        return None
    return lo, hi


def _text_match(op: Operator, text: str, needle: str) -> bool:
    if op == Operator.CONTAINS:
        return needle in text
    if op == Operator.EQUALS:
        return text == needle
    if op == Operator.STARTS:
        return text.startswith(needle)
    return text.endswith(needle)


def evaluate_rule(rule: Rule, row: Row) -> bool:
    """Single predicate against one row."""
    cell = row.get(rule.column)
    op = rule.operator

    if op == Operator.EMPTY:
        return to_text(cell).strip() == ""
    if op == Operator.NOT_EMPTY:
        return to_text(cell).strip() != ""

    if op in TEXT_OPERATORS:
        return _text_match(op, norm(cell), norm(rule.value))

    if op in NUMERIC_OPERATORS:
        n = cell_number(cell)
        target = to_number(rule.value)
        if not (is_finite(n) and is_finite(target)):
            return False
        if op == Operator.GT:
            return n > target
        if op == Operator.GTE:
            return n >= target
        if op == Operator.LT:
            return n < target
        return n <= target

    if op == Operator.BETWEEN:
        bounds = parse_range(rule.value)
        n = cell_number(cell)
        if bounds is None or not is_finite(n):
            return False
        lo, hi = bounds
        return lo <= n <= hi

    return False


def _chain(rules: Sequence[Rule], row: Row, known: set[str] | None) -> bool:
    ok = False
    for i, rule in enumerate(rules):
        p = (known is None or rule.column in known) and evaluate_rule(rule, row)
        if i == 0:
            ok = p
        elif rule.logic == Logic.OR:
            ok = ok or p
        else:
            ok = ok and p
    return ok


def run(
    rules: Sequence[Rule],
    rows: list[Row],
    columns: Iterable[str] | None = None,
) -> list[Row]:
    """
    Rows passing the rule chain, in input order.

    An empty rule list returns ``rows`` itself. With ``columns`` given, a
    rule naming any other column is false for every row.
    """
    if not rules:
        return rows

    known = set(columns) if columns is not None else None
    if known is not None:
        for rule in rules:
            if rule.column not in known:
                logger.warning(f"Rule on unknown column '{rule.column}' never matches")

    return [row for row in rows if _chain(rules, row, known)]


def validate_rules(rules: Sequence[Rule], columns: Iterable[str]) -> list[str]:
    """Human-readable problems that make rules always false."""
    known = set(columns)
    problems: list[str] = []
    for i, rule in enumerate(rules, start=1):
        if rule.column not in known:
            problems.append(f"Rule {i}: unknown column '{rule.column}'")
        if rule.operator in NUMERIC_OPERATORS and not is_finite(to_number(rule.value)):
            problems.append(f"Rule {i}: '{rule.value}' is not a number")
        if rule.operator == Operator.BETWEEN and parse_range(rule.value) is None:
            problems.append(
                f"Rule {i}: '{rule.value}' is not a range like 10{RANGE_SEPARATOR}20"
            )
    return problems
