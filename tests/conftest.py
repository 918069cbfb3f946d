"""Shared fixtures: an in-memory document with mutation batches and page scripts."""
from __future__ import annotations

import asyncio
import inspect

import pytest

from cascade_harvest.models import Option


class FakeElement:
    def __init__(self, selector: str, value: str = "", label: str = ""):
        self.selector = selector
        self.value = value
        self.label = label
        self.selected = False
        self.events: list[tuple[str, bool]] = []

    def __repr__(self) -> str:
        return f"FakeElement({self.selector!r}, {self.value!r})"


class FakeSubscription:
    def __init__(self, document: FakeDocument, listener, target: str | None):
        self.document = document
        self.listener = listener
        self.target = target
        self.active = True

    async def disconnect(self) -> None:
        if self.active:
            self.active = False
            self.document.subscriptions.remove(self)
            self.document.disconnects += 1


class FakeDocument:
    """
    Document double. Test code mutates it through insert()/set_options(),
    each call being one mutation batch delivered to live subscriptions.
    Timed waits are scaled down by ``time_scale``.
    """

    def __init__(self, time_scale: float = 0.001):
        self.elements: dict[str, FakeElement] = {}
        self.option_lists: dict[str, list[FakeElement]] = {}
        self.containers: dict[str, str] = {}
        self.subscriptions: list[FakeSubscription] = []
        self.change_handlers: list = []
        self.waits: list[int] = []
        self.disconnects = 0
        self.time_scale = time_scale
        self._pending: set[asyncio.Future] = set()

    # ---- test-side mutations ----

    def insert(self, selector: str, value: str = "") -> FakeElement:
        el = FakeElement(selector, value)
        self.elements[selector] = el
        self.notify(selector)
        return el

    def set_options(self, container: str, option_selector: str, pairs: list[tuple[str, str]]) -> list[FakeElement]:
        self.containers[container] = option_selector
        if container not in self.elements:
            self.elements[container] = FakeElement(container)
        opts = [FakeElement(option_selector, v, lbl) for v, lbl in pairs]
        self.option_lists[option_selector] = opts
        self.notify(container)
        return opts

    def notify(self, target: str | None = None) -> None:
        for sub in list(self.subscriptions):
            if sub.target is not None and sub.target != target:
                continue
            result = sub.listener()
            if inspect.isawaitable(result):
                fut = asyncio.ensure_future(result)
                self._pending.add(fut)
                fut.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        for _ in range(5):
            await asyncio.sleep(0)
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # ---- Document protocol ----

    async def query_selector(self, selector: str):
        return self.elements.get(selector)

    async def read_options(self, selector: str) -> list[Option]:
        return [Option(e.value, e.label, element=e) for e in self.option_lists.get(selector, [])]

    async def set_selected(self, element: FakeElement) -> None:
        element.selected = True

    async def dispatch_event(self, element: FakeElement, event_type: str, bubbles: bool = True) -> None:
        element.events.append((event_type, bubbles))
        for handler in list(self.change_handlers):
            handler(self, element)

    async def clear_children(self, selector: str) -> None:
        option_selector = self.containers.get(selector)
        if option_selector:
            self.option_lists[option_selector] = []
            self.notify(selector)

    async def observe_mutations(self, listener, target: str | None = None) -> FakeSubscription:
        sub = FakeSubscription(self, listener, target)
        self.subscriptions.append(sub)
        return sub

    async def wait_for_timeout(self, ms: int) -> None:
        self.waits.append(ms)
        await asyncio.sleep(ms / 1000 * self.time_scale)


class DependentListScript:
    """
    Page script double: on ``change`` of a parent option, repopulates the
    child list after ``delay_ms`` (scaled). Parents missing from ``catalog``
    never get a response.
    """

    def __init__(self, catalog: dict[str, list[str]], container: str = "#model",
                 option_selector: str = "#model option", delay_ms: int = 0, placeholder: str = "Model"):
        self.catalog = catalog
        self.container = container
        self.option_selector = option_selector
        self.delay_ms = delay_ms
        self.placeholder = placeholder
        self.calls: list[str] = []

    def __call__(self, document: FakeDocument, element: FakeElement) -> None:
        self.calls.append(element.value)
        if element.value not in self.catalog:
            return
        children = [("", self.placeholder)] + [(v, v.title()) for v in self.catalog[element.value]]
        loop = asyncio.get_running_loop()
        loop.call_later(
            self.delay_ms / 1000 * document.time_scale,
            document.set_options, self.container, self.option_selector, children,
        )


async def wait_until(predicate, attempts: int = 200) -> None:
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


@pytest.fixture
def document() -> FakeDocument:
    return FakeDocument()


@pytest.fixture
def car_page(document: FakeDocument):
    """Brand list plus a page script answering for BMW and AUDI."""
    document.set_options("#brand", "#brand option", [("", "Brand"), ("BMW", "BMW"), ("AUDI", "Audi")])
    document.set_options("#model", "#model option", [("", "Model")])
    script = DependentListScript({"BMW": ["x1", "x3", "x3"], "AUDI": ["a4", "a6"]})
    document.change_handlers.append(script)
    return document, script


@pytest.fixture
def list_script():
    return DependentListScript


@pytest.fixture(name="wait_until")
def wait_until_fixture():
    return wait_until


@pytest.fixture
def document_factory():
    return FakeDocument
