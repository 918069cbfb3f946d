"""Unit tests for cascade_harvest.core.flat_extractor module."""
import asyncio

import pytest

from cascade_harvest.core.flat_extractor import FlatExtractor
from cascade_harvest.core.option_filter import exclude_numeric_values
from cascade_harvest.utils.exceptions import ReadinessTimeoutError


class TestFlatExtractor:
    """Tests for FlatExtractor.extract."""

    @pytest.mark.asyncio
    async def test_extracts_label_value_map(self, document):
        """Test a present list is read as label -> value."""
        document.set_options("#body_type", "#body_type option", [("", "Any"), ("sedan", "Sedan"), ("suv", "SUV")])

        result = await FlatExtractor(document).extract("#body_type", "#body_type option")

        assert result == {"Sedan": "sedan", "SUV": "suv"}

    @pytest.mark.asyncio
    async def test_waits_for_late_container(self, document, wait_until):
        """Test extraction starts once the container is rendered."""
        task = asyncio.create_task(
            FlatExtractor(document).extract("#region", "#region option", exclude_numeric_values)
        )
        await wait_until(lambda: document.subscriptions)

        document.set_options("#region", "#region option", [("N", "North"), ("12", "Central"), ("7", "South")])
        result = await asyncio.wait_for(task, 1)

        assert result == {"North": "N"}
        assert document.subscriptions == []

    @pytest.mark.asyncio
    async def test_ready_timeout(self, document):
        """Test a container that never appears raises ReadinessTimeoutError."""
        with pytest.raises(ReadinessTimeoutError) as exc:
            await FlatExtractor(document, ready_timeout_ms=10).extract("#region", "#region option")

        assert exc.value.locator == "#region"

    @pytest.mark.asyncio
    async def test_empty_list(self, document):
        """Test a container without options gives an empty mapping."""
        document.set_options("#region", "#region option", [])

        assert await FlatExtractor(document).extract("#region", "#region option") == {}
