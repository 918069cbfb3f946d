"""Unit tests for cascade_harvest.core.change_notifier module."""
from unittest.mock import AsyncMock, Mock, call

import pytest

from cascade_harvest.core.change_notifier import CHANGE_EVENT, ChangeNotifier


class TestChangeNotifier:
    """Tests for ChangeNotifier.select."""

    @pytest.mark.asyncio
    async def test_select_marks_and_dispatches_bubbling_change(self, document):
        """Test the element is selected before a bubbling change is raised."""
        el = document.insert("#brand option")
        seen_selected = []
        document.change_handlers.append(lambda doc, element: seen_selected.append(element.selected))

        result = await ChangeNotifier(document).select(el)

        assert result is None
        assert el.selected is True
        assert el.events == [("change", True)]
        assert seen_selected == [True]

    @pytest.mark.asyncio
    async def test_select_call_order(self):
        """Test set_selected happens before dispatch_event."""
        doc = Mock()
        doc.set_selected = AsyncMock()
        doc.dispatch_event = AsyncMock()
        manager = Mock()
        manager.attach_mock(doc.set_selected, "set_selected")
        manager.attach_mock(doc.dispatch_event, "dispatch_event")
        element = object()

        await ChangeNotifier(doc).select(element)

        assert manager.mock_calls == [
            call.set_selected(element),
            call.dispatch_event(element, CHANGE_EVENT, bubbles=True),
        ]
