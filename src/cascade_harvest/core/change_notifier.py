from __future__ import annotations

from typing import Any

from ..dom.protocol import Document

CHANGE_EVENT = "change"


class ChangeNotifier:
    """Marks an option as the active choice and raises a bubbling ``change``.

    Whatever reacts to the event (e.g. a page script repopulating a dependent
    list) is outside this class.
    """

    def __init__(self, document: Document):
        self.document = document

    async def select(self, element: Any) -> None:
        await self.document.set_selected(element)
        await self.document.dispatch_event(element, CHANGE_EVENT, bubbles=True)
