"""
Column mapping resolution.

For each role the first hit wins:
1. persisted binding, exact column name
2. persisted binding, trimmed + case-insensitive
3. historical header synonym, trimmed + case-insensitive
4. keyword guess (substring of the normalized header)

Never raises. Resolving with its own result as persisted state returns
the same mapping.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from silo.shared.constants import Role

from .models import Mapping, PartialMapping
from .synonyms import DEFAULT_SYNONYMS, KEYWORDS, LEGACY_KEYS

logger = logging.getLogger(__name__)


def _key(name: object) -> str:
    return str(name).strip().lower()


def _match_loose(columns: Sequence[str], name: str) -> str | None:
    target = _key(name)
    return next((c for c in columns if _key(c) == target), None)


def guess_column(columns: Sequence[str], keywords: Iterable[str]) -> str | None:
    """
    First column containing the first keyword that has any hit.

    Headers are trimmed + lowercased before the substring test.
    """
    normalized = [(_key(c), c) for c in columns]
    for keyword in keywords:
        needle = keyword.lower()
        for header, column in normalized:
            if needle in header:
                return column
    return None


def _persisted_bindings(persisted: PartialMapping | Mapping | None) -> dict[str, str]:
    """Flat role -> column record with legacy keys folded in; junk dropped."""
    if persisted is None:
        return {}
    if isinstance(persisted, Mapping):
        persisted = persisted.as_dict()

    bindings: dict[str, str] = {}
    for key, column in persisted.items():
        if not isinstance(column, str) or not column.strip():
            continue
        key = key.value if isinstance(key, Role) else str(key)
        if key in LEGACY_KEYS:
            # current keys take precedence over legacy ones
            bindings.setdefault(LEGACY_KEYS[key].value, column)
        else:
            bindings[key] = column
    return bindings


def resolve(
    columns: Sequence[str],
    persisted: PartialMapping | Mapping | None = None,
    synonyms: dict[Role, tuple[str, ...]] | None = None,
    keywords: dict[Role, tuple[str, ...]] | None = None,
) -> Mapping:
    """Resolve every role to an existing column (or None)."""
    columns = [c for c in columns if isinstance(c, str)]
    bindings = _persisted_bindings(persisted)
    synonyms = DEFAULT_SYNONYMS if synonyms is None else synonyms
    keywords = KEYWORDS if keywords is None else keywords

    resolved: dict[str, str | None] = {}
    for role in Role:
        bound = bindings.get(role.value)
        if bound is not None:
            if bound in columns:
                resolved[role.value] = bound
                continue
            hit = _match_loose(columns, bound)
            if hit is not None:
                logger.debug(f"Mapping {role.value}: '{bound}' matched loosely to '{hit}'")
                resolved[role.value] = hit
                continue
            logger.warning(f"Stored mapping {role.value} -> '{bound}' not in dataset, re-resolving")

        hit = None
        for name in synonyms.get(role, ()):
            hit = _match_loose(columns, name)
            if hit is not None:
                logger.debug(f"Mapping {role.value}: synonym '{name}' -> '{hit}'")
                break

        if hit is None:
            hit = guess_column(columns, keywords.get(role, ()))
            if hit is not None:
                logger.debug(f"Mapping {role.value}: keyword guess -> '{hit}'")

        resolved[role.value] = hit

    return Mapping(**resolved)


def auto_mapping(
    columns: Sequence[str],
    synonyms: dict[Role, tuple[str, ...]] | None = None,
) -> Mapping:
    """Mapping from the header alone, ignoring anything persisted."""
    return resolve(columns, None, synonyms=synonyms)


def missing_roles(mapping: Mapping, roles: Iterable[Role | str]) -> list[Role]:
    """Roles a consumer needs that the mapping leaves unresolved."""
    return [Role(r) for r in roles if mapping.get(r) is None]
