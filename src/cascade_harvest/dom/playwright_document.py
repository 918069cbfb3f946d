"""Document adapter over an async Playwright page.

Mutation observation runs in the page: a MutationObserver per subscription
calls a function exposed with ``page.expose_function``, which dispatches to
the Python listener registered under the same subscription id.
"""

from __future__ import annotations

import inspect
import itertools
import logging
from typing import TYPE_CHECKING, Any

from ..constants import MUTATION_BINDING, OBSERVER_REGISTRY
from ..models import Option
from .protocol import MutationListener

if TYPE_CHECKING:
    from playwright.async_api import ElementHandle, Page

logger = logging.getLogger(__name__)


_READ_OPTION_JS = """
(el) => ({
    value: (el.value !== undefined ? el.value : el.getAttribute('value')) || '',
    label: (el.textContent || '').trim()
})
"""

_SET_SELECTED_JS = "(el) => { el.selected = true; }"

_DISPATCH_JS = "(el, [type, bubbles]) => { el.dispatchEvent(new Event(type, { bubbles })); }"

_CLEAR_CHILDREN_JS = """
(selector) => {
    const el = document.querySelector(selector);
    if (el) el.innerHTML = '';
}
"""

_OBSERVE_JS = """
([id, target, binding, registry]) => {
    const root = (target && document.querySelector(target)) || document;
    window[registry] = window[registry] || {};
    const observer = new MutationObserver(() => { window[binding](id); });
    observer.observe(root, { childList: true, subtree: true });
    window[registry][id] = observer;
}
"""

_DISCONNECT_JS = """
([id, registry]) => {
    const reg = window[registry] || {};
    if (reg[id]) {
        reg[id].disconnect();
        delete reg[id];
    }
}
"""


class PlaywrightSubscription:
    def __init__(self, document: PlaywrightDocument, sub_id: int):
        self._document = document
        self.sub_id = sub_id
        self.active = True

    async def disconnect(self) -> None:
        if not self.active:
            return
        self.active = False
        await self._document._disconnect(self.sub_id)


class PlaywrightDocument:
    """
    Document over ``playwright.async_api.Page``.

    One instance per page: the mutation binding is exposed once and shared by
    every subscription of this instance.
    """

    def __init__(self, page: Page):
        self.page = page
        self._listeners: dict[int, MutationListener] = {}
        self._ids = itertools.count(1)
        self._binding_exposed = False

    async def query_selector(self, selector: str) -> ElementHandle | None:
        return await self.page.query_selector(selector)

    async def read_options(self, selector: str) -> list[Option]:
        handles = await self.page.query_selector_all(selector)
        out: list[Option] = []
        for h in handles:
            data = await h.evaluate(_READ_OPTION_JS) or {}
            out.append(Option(value=data.get("value") or "", label=(data.get("label") or "").strip(), element=h))
        return out

    async def set_selected(self, element: ElementHandle) -> None:
        await element.evaluate(_SET_SELECTED_JS)

    async def dispatch_event(self, element: ElementHandle, event_type: str, bubbles: bool = True) -> None:
        await element.evaluate(_DISPATCH_JS, [event_type, bubbles])

    async def clear_children(self, selector: str) -> None:
        await self.page.evaluate(_CLEAR_CHILDREN_JS, selector)

    async def wait_for_timeout(self, ms: int) -> None:
        await self.page.wait_for_timeout(ms)

    async def observe_mutations(self, listener: MutationListener, target: str | None = None) -> PlaywrightSubscription:
        await self._ensure_binding()
        sub_id = next(self._ids)
        self._listeners[sub_id] = listener
        try:
            await self.page.evaluate(_OBSERVE_JS, [sub_id, target, MUTATION_BINDING, OBSERVER_REGISTRY])
        except Exception:
            self._listeners.pop(sub_id, None)
            raise
        logger.debug("Mutation observer %d attached (target=%s)", sub_id, target or "document")
        return PlaywrightSubscription(self, sub_id)

    async def _ensure_binding(self) -> None:
        if self._binding_exposed:
            return
        await self.page.expose_function(MUTATION_BINDING, self._on_mutation)
        self._binding_exposed = True

    async def _on_mutation(self, sub_id: int) -> None:
        listener = self._listeners.get(sub_id)
        if listener is None:
            # Batch delivered after disconnect
            return
        result = listener()
        if inspect.isawaitable(result):
            await result

    async def _disconnect(self, sub_id: int) -> None:
        self._listeners.pop(sub_id, None)
        if self.page.is_closed():
            return
        await self.page.evaluate(_DISCONNECT_JS, [sub_id, OBSERVER_REGISTRY])
        logger.debug("Mutation observer %d disconnected", sub_id)
