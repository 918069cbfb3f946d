"""
sequential_collector.py
Drives a dependent expansion over every parent option, one at a time.

The dependent list is a single shared container in the page, so two
expansions in flight would race on it. The collector drains an ordered
worklist from one coroutine and holds a lock token around each ``expand``
call: call N+1 starts only after call N returned.

Lifecycle: IDLE -> PROCESSING(i) -> ... -> DONE. DONE is terminal and an
instance cannot be run twice.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator, Sequence
from typing import Any, Union

from ..models import CollectorState, EnumerationReport, ExpansionOutcome, Option
from ..utils.exceptions import CollectorStateError

logger = logging.getLogger(__name__)

Expand = Callable[[Option], Awaitable[Any]]
Sink = Callable[[EnumerationReport], Union[Awaitable[None], None]]


def _to_outcome(parent: Option, result: Any) -> ExpansionOutcome:
    if isinstance(result, ExpansionOutcome):
        return result
    values = [r.value if isinstance(r, Option) else str(r) for r in (result or [])]
    return ExpansionOutcome.from_children(parent.value, [v for v in values if v])


class SequentialCollector:
    def __init__(self, sink: Sink | None = None):
        self.sink = sink
        self.state = CollectorState.IDLE
        self.cursor = 0
        self.report = EnumerationReport()
        self._token = asyncio.Lock()

    def _worklist(self, parents: Sequence[Option]) -> Iterator[Option]:
        while self.cursor < len(parents):
            yield parents[self.cursor]
            self.cursor += 1
            self.report.steps += 1

    async def run(self, parent_options: Sequence[Option], expand: Expand) -> EnumerationReport:
        """
        Expand every non-empty parent in order and return the final report.

        Args:
            parent_options: Parent options in document order.
            expand: Coroutine returning an ExpansionOutcome or a sequence of
                child values/Options for one parent.

        Returns:
            The report; also handed to ``sink`` when one is set.

        Raises:
            CollectorStateError: The collector was already started.
        """
        if self.state is not CollectorState.IDLE:
            raise CollectorStateError(self.state.value)
        parents = list(parent_options)
        self.state = CollectorState.PROCESSING
        logger.info("Collecting %d parent options", len(parents))

        for parent in self._worklist(parents):
            if parent.is_empty:
                self.report.skipped += 1
                continue
            logger.info("Processing parent %d/%d: %s", self.cursor + 1, len(parents), parent.value)
            async with self._token:
                try:
                    result = await expand(parent)
                except Exception:
                    logger.exception("Expansion failed for parent %s", parent.value)
                    raise
            outcome = _to_outcome(parent, result)
            self.report.outcomes.append(outcome)
            self.report.mapping[parent.value] = list(outcome.children)

        self.state = CollectorState.DONE
        logger.info("Collection finished: %s", self.report.stats())
        if self.sink is not None:
            res = self.sink(self.report)
            if inspect.isawaitable(res):
                await res
        return self.report
