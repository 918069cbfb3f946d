"""
readiness.py
Detects the first appearance of an element in a mutating document.

No polling: after one immediate check the waiter subscribes to structural
mutations of the whole document and re-checks the locator once per batch.
The continuation runs exactly once; the subscription is released on every
exit path (match, timeout, cancellation).
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Union

from ..dom.protocol import Document
from ..utils.exceptions import ReadinessTimeoutError

logger = logging.getLogger(__name__)

OnReady = Callable[[Any], Union[Awaitable[Any], Any]]


class ReadinessWaiter:
    def __init__(self, document: Document):
        self.document = document

    async def wait(self, locator: str, on_ready: OnReady | None = None, timeout_ms: int | None = None) -> Any:
        """
        Wait until ``locator`` matches and hand the element to ``on_ready``.

        Args:
            locator: Selector of a single element.
            on_ready: Continuation called once with the element (sync or async).
            timeout_ms: Maximum wait; None waits for as long as the page lives.

        Returns:
            The matched element.

        Raises:
            ReadinessTimeoutError: ``timeout_ms`` elapsed without a match.
        """
        logger.debug("Waiting for element: %s", locator)
        element = await self.document.query_selector(locator)
        if element is None:
            element = await self._wait_for_mutation(locator, timeout_ms)
            logger.debug("Element found via mutation observer: %s", locator)
        else:
            logger.debug("Element found: %s", locator)

        if on_ready is not None:
            result = on_ready(element)
            if inspect.isawaitable(result):
                await result
        return element

    async def _wait_for_mutation(self, locator: str, timeout_ms: int | None) -> Any:
        found: asyncio.Future = asyncio.get_running_loop().create_future()

        async def _recheck() -> None:
            if found.done():
                return
            el = await self.document.query_selector(locator)
            if el is not None and not found.done():
                found.set_result(el)

        subscription = await self.document.observe_mutations(_recheck)
        try:
            # Element may have been inserted between the first check and subscribing
            await _recheck()
            if timeout_ms is None:
                return await found
            try:
                return await asyncio.wait_for(found, timeout_ms / 1000)
            except asyncio.TimeoutError:
                raise ReadinessTimeoutError(locator, timeout_ms) from None
        finally:
            await subscription.disconnect()
