"""
Minimal interface the harvesting primitives need from a live document.

PlaywrightDocument implements it over an async Playwright page; tests use an
in-memory fake. Elements are opaque handles owned by the implementation.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, Union

from ..models import Option

MutationListener = Callable[[], Union[Awaitable[None], None]]


class MutationSubscription(Protocol):
    """Handle for one live mutation observer."""

    async def disconnect(self) -> None:
        ...


class Document(Protocol):
    async def query_selector(self, selector: str) -> Any | None:
        ...

    async def read_options(self, selector: str) -> list[Option]:
        """Every element matching ``selector`` as an Option, in document order."""
        ...

    async def set_selected(self, element: Any) -> None:
        ...

    async def dispatch_event(self, element: Any, event_type: str, bubbles: bool = True) -> None:
        ...

    async def clear_children(self, selector: str) -> None:
        ...

    async def observe_mutations(self, listener: MutationListener, target: str | None = None) -> MutationSubscription:
        """
        Call ``listener`` once per structural mutation batch (childList, subtree)
        under ``target``, or under the whole document when ``target`` is None.
        """
        ...

    async def wait_for_timeout(self, ms: int) -> None:
        ...
