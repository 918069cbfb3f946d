"""
dependent_enumerator.py
Expands one parent option into the values of its dependent (child) list.

Per parent:
  1. clear the child container (optional) so a silent page script cannot
     leave the previous parent's children behind
  2. arm the settle strategy, then select the parent and raise ``change``
  3. settle (fixed delay by default)
  4. harvest the child options, dropping empty values

A child list that never repopulates yields an EMPTY outcome, not an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..constants import MODEL_OPTION_SELECTOR, MODEL_SELECTOR
from ..dom.protocol import Document
from ..models import ExpansionOutcome, Option
from ..settings import EnumerationConfig
from ..utils.exceptions import DropdownError
from .change_notifier import ChangeNotifier
from .option_filter import ValueFilter, harvest_values
from .settle import FixedDelaySettle, SettleStrategy, settle_strategy_from_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChildTarget:
    """Where the dependent list lives."""
    container: str = MODEL_SELECTOR
    options: str = MODEL_OPTION_SELECTOR


class DependentEnumerator:
    def __init__(
        self,
        document: Document,
        child: ChildTarget | None = None,
        settle: SettleStrategy | None = None,
        clear_before_select: bool = True,
        dedupe: bool = True,
        value_filter: ValueFilter | None = None,
    ):
        self.document = document
        self.child = child or ChildTarget()
        self.settle = settle or FixedDelaySettle()
        self.clear_before_select = clear_before_select
        self.dedupe = dedupe
        self.value_filter = value_filter
        self.notifier = ChangeNotifier(document)

    @classmethod
    def from_config(
        cls, document: Document, config: EnumerationConfig, child: ChildTarget | None = None
    ) -> DependentEnumerator:
        return cls(
            document,
            child=child,
            settle=settle_strategy_from_config(config),
            clear_before_select=config.clear_before_select,
            dedupe=config.dedupe_children,
        )

    async def expand(self, parent: Option) -> ExpansionOutcome:
        if parent.element is None:
            raise DropdownError(parent.value, "select", "option has no element handle")
        if self.clear_before_select:
            await self.document.clear_children(self.child.container)
        baseline = await self.document.read_options(self.child.options)

        async def _select() -> None:
            logger.debug("Selecting parent option: %s", parent.value)
            await self.notifier.select(parent.element)

        settled = await self.settle.settle(
            self.document, self.child.container, self.child.options, baseline, trigger=_select
        )
        if not settled:
            logger.warning("Dependent list did not settle for %s", parent.value)
            return ExpansionOutcome.timed_out(parent.value)

        children = harvest_values(
            await self.document.read_options(self.child.options),
            value_filter=self.value_filter,
            dedupe=self.dedupe,
        )
        if not children:
            logger.warning("No child options found for %s", parent.label or parent.value)
        else:
            logger.debug("Children found for %s: %d", parent.value, len(children))
        return ExpansionOutcome.from_children(parent.value, children)
