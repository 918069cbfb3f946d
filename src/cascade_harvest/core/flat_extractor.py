from __future__ import annotations

import logging

from ..dom.protocol import Document
from .option_filter import ValueFilter, label_value_map
from .readiness import ReadinessWaiter

logger = logging.getLogger(__name__)


class FlatExtractor:
    """Harvests a single (non-dependent) list as label -> value."""

    def __init__(self, document: Document, ready_timeout_ms: int | None = None):
        self.document = document
        self.waiter = ReadinessWaiter(document)
        self.ready_timeout_ms = ready_timeout_ms

    async def extract(
        self,
        container: str,
        option_locator: str,
        value_filter: ValueFilter | None = None,
    ) -> dict[str, str]:
        await self.waiter.wait(container, timeout_ms=self.ready_timeout_ms)
        mapping = label_value_map(await self.document.read_options(option_locator), value_filter)
        logger.info("Found %d options in %s", len(mapping), container)
        return mapping
