"""
option_filter.py

Helpers to filter harvested option lists.

Rules:
 - Options with an empty value are never part of a result
 - An optional value predicate decides which remaining values are kept
   (regions drop all-digit values)
 - Child values of one parent are de-duplicated keeping first occurrence

Every function returns a new list/dict; inputs are not mutated.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from ..models import Option

ValueFilter = Callable[[str], bool]

_ALL_DIGITS = re.compile(r"^[0-9]+$")


def keep_all(value: str) -> bool:
    return True


def exclude_numeric_values(value: str) -> bool:
    """Reject values made only of ASCII digits (e.g. "12"); keep everything else."""
    return not _ALL_DIGITS.match(value)


def drop_empty(options: Iterable[Option]) -> list[Option]:
    return [o for o in options if not o.is_empty]


def dedupe_preserving_order(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


def harvest_values(
    options: Iterable[Option],
    value_filter: ValueFilter | None = None,
    dedupe: bool = False,
) -> list[str]:
    """
    Values of ``options`` in document order, minus empty and filtered ones.
    """
    accept = value_filter or keep_all
    values = [o.value for o in drop_empty(options) if accept(o.value)]
    return dedupe_preserving_order(values) if dedupe else values


def label_value_map(options: Iterable[Option], value_filter: ValueFilter | None = None) -> dict[str, str]:
    """
    label -> value for the flat catalogs.

    A repeated label keeps its first position and takes the last value,
    the same way a JS object literal is filled.
    """
    accept = value_filter or keep_all
    out: dict[str, str] = {}
    for o in drop_empty(options):
        if accept(o.value):
            out[o.label.strip()] = o.value
    return out
