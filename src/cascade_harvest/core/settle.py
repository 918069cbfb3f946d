"""
settle.py
Strategies to wait for an external page script to finish repopulating a
dependent list after a ``change`` event.

There is no completion signal for that repopulation, so:
 - FixedDelaySettle waits a fixed interval (default 2s). Fragile but simple;
   a slow response is harvested as whatever the list holds at that moment.
 - QuiescenceSettle waits until the list content differs from a baseline
   snapshot, then until no mutation happened for a quiet window. Reports a
   timeout when the list never changes within ``timeout_ms``.

A strategy receives the action that causes the repopulation (``trigger``)
and runs it itself, after arming, so an observer is already live when a page
script reacts synchronously.

Both return True when settled and False on timeout.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol

from ..constants import TIMEOUT_SETTLE_MAX, WAIT_QUIET_WINDOW, WAIT_SETTLE_DEFAULT
from ..dom.protocol import Document
from ..models import Option
from ..settings import EnumerationConfig
from ..utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


def options_hash(options: Iterable[Option]) -> str:
    """Stable hash of (value, label) pairs, used for change detection."""
    data = "|".join(f"{o.value}::{o.label}" for o in options)
    return hashlib.sha1(data.encode("utf-8")).hexdigest()


Trigger = Callable[[], Awaitable[None]]


async def _noop() -> None:
    return None


class SettleStrategy(Protocol):
    async def settle(
        self,
        document: Document,
        container: str,
        option_locator: str,
        baseline: list[Option],
        trigger: Trigger | None = None,
    ) -> bool:
        """Arm on ``container``, run ``trigger``, then wait for the list to settle."""
        ...


class FixedDelaySettle:
    def __init__(self, delay_ms: int = WAIT_SETTLE_DEFAULT):
        self.delay_ms = delay_ms

    async def settle(
        self,
        document: Document,
        container: str,
        option_locator: str,
        baseline: list[Option],
        trigger: Trigger | None = None,
    ) -> bool:
        await (trigger or _noop)()
        await document.wait_for_timeout(self.delay_ms)
        return True


class QuiescenceSettle:
    def __init__(self, quiet_ms: int = WAIT_QUIET_WINDOW, timeout_ms: int = TIMEOUT_SETTLE_MAX):
        self.quiet_ms = quiet_ms
        self.timeout_ms = timeout_ms

    async def settle(
        self,
        document: Document,
        container: str,
        option_locator: str,
        baseline: list[Option],
        trigger: Trigger | None = None,
    ) -> bool:
        loop = asyncio.get_running_loop()
        activity = asyncio.Event()
        last_mutation = loop.time()

        def _on_batch() -> None:
            nonlocal last_mutation
            last_mutation = loop.time()
            activity.set()

        base_hash = options_hash(baseline)
        # Observer goes live before the trigger so a synchronous repopulation is seen
        subscription = await document.observe_mutations(_on_batch, target=container)
        try:
            await (trigger or _noop)()
            deadline = loop.time() + self.timeout_ms / 1000
            # Content may have changed between the baseline read and arming
            if options_hash(await document.read_options(option_locator)) != base_hash:
                _on_batch()

            try:
                await asyncio.wait_for(activity.wait(), max(deadline - loop.time(), 0))
            except asyncio.TimeoutError:
                logger.warning("No activity in %s within %dms", container, self.timeout_ms)
                return False

            quiet = self.quiet_ms / 1000
            while True:
                now = loop.time()
                remaining = last_mutation + quiet - now
                if remaining <= 0 or now >= deadline:
                    return True
                await asyncio.sleep(min(remaining, deadline - now))
        finally:
            await subscription.disconnect()


def settle_strategy_from_config(config: EnumerationConfig) -> SettleStrategy:
    mode = (config.settle_mode or "fixed").strip().lower()
    if mode == "fixed":
        return FixedDelaySettle(config.settle_ms)
    if mode == "quiescence":
        return QuiescenceSettle(config.quiet_ms, config.settle_timeout_ms)
    raise ValidationError("settle_mode", config.settle_mode, "fixed|quiescence")
