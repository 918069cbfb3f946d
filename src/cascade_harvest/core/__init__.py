"""
Readiness detection and sequential dependent enumeration.

Main exports:
- ReadinessWaiter: first appearance of an element, exactly-once continuation
- ChangeNotifier: select an option and raise a bubbling change event
- DependentEnumerator: expand one parent into its child values
- SequentialCollector: drive expansions one at a time into an ordered mapping
- FlatExtractor: label -> value harvest of a single list

Example usage:
    document = PlaywrightDocument(page)
    await ReadinessWaiter(document).wait("#brand")
    parents = await document.read_options("#brand option")
    report = await SequentialCollector().run(parents, DependentEnumerator(document).expand)
"""
from __future__ import annotations

from .change_notifier import ChangeNotifier
from .dependent_enumerator import ChildTarget, DependentEnumerator
from .flat_extractor import FlatExtractor
from .option_filter import (
    dedupe_preserving_order,
    exclude_numeric_values,
    harvest_values,
    keep_all,
    label_value_map,
)
from .readiness import ReadinessWaiter
from .sequential_collector import SequentialCollector
from .settle import FixedDelaySettle, QuiescenceSettle, settle_strategy_from_config

__all__ = [
    "ChangeNotifier",
    "ChildTarget",
    "DependentEnumerator",
    "FixedDelaySettle",
    "FlatExtractor",
    "QuiescenceSettle",
    "ReadinessWaiter",
    "SequentialCollector",
    "dedupe_preserving_order",
    "exclude_numeric_values",
    "harvest_values",
    "keep_all",
    "label_value_map",
    "settle_strategy_from_config",
]
