"""
catalog_service.py
Fetches the three catalogs of the listing site and saves them as JSON.

 - cars:    brand value -> model values (dependent enumeration)
 - chassis: label -> value (flat)
 - regions: label -> value (flat, all-digit values dropped)

fetch_all runs the catalogs concurrently, each on its own page, so each page
keeps its own single dependent list and its own serialized enumeration.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path
from typing import Any, Protocol

from playwright.async_api import Error as PlaywrightError

from ..constants import (
    BRAND_OPTION_SELECTOR,
    BRAND_SELECTOR,
    CARS_FILE,
    CHASSIS_FILE,
    CHASSIS_OPTION_SELECTOR,
    CHASSIS_SELECTOR,
    REGION_OPTION_SELECTOR,
    REGION_SELECTOR,
    REGIONS_FILE,
    TIMEOUT_NAVIGATION,
    WAIT_LONG,
)
from ..core import (
    DependentEnumerator,
    FlatExtractor,
    ReadinessWaiter,
    SequentialCollector,
    exclude_numeric_values,
)
from ..dom import Document, PlaywrightDocument
from ..models import EnumerationReport
from ..settings import SETTINGS, Settings
from ..utils.exceptions import CatalogFetchError, wrap_playwright_error

logger = logging.getLogger(__name__)

OpenDocument = Callable[[], AbstractAsyncContextManager[Document]]


class BrowserContext(Protocol):
    """Minimal interface expected from the browser context."""
    async def new_page(self) -> Any:
        ...


def save_json(path: str | Path, data: Any) -> Path:
    """Write ``data`` pretty-printed (indent 2, UTF-8), keeping key order."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return p


class CatalogService:
    def __init__(
        self,
        context: BrowserContext | None = None,
        settings: Settings | None = None,
        open_document: OpenDocument | None = None,
    ):
        if context is None and open_document is None:
            raise ValueError("CatalogService needs a browser context or an open_document factory")
        self.context = context
        self.settings = settings or SETTINGS
        self._open_document = open_document or self._open_page_document

    @asynccontextmanager
    async def _open_page_document(self) -> AsyncIterator[Document]:
        page = await self.context.new_page()
        try:
            url = self.settings.browser.target_url
            logger.info("Loading %s", url)
            try:
                await page.goto(url, wait_until="domcontentloaded", timeout=TIMEOUT_NAVIGATION)
            except PlaywrightError as e:
                raise wrap_playwright_error(e, f"loading {url}") from e
            await page.wait_for_timeout(WAIT_LONG)
            yield PlaywrightDocument(page)
        finally:
            try:
                await page.close()
            except Exception:
                logger.debug("Page close failed", exc_info=True)

    async def fetch_cars(self) -> EnumerationReport:
        cfg = self.settings.enumeration
        async with self._open_document() as document:
            await ReadinessWaiter(document).wait(BRAND_SELECTOR, timeout_ms=cfg.ready_timeout_ms)
            brands = await document.read_options(BRAND_OPTION_SELECTOR)
            logger.info("Found %d brand options", len(brands))
            enumerator = DependentEnumerator.from_config(document, cfg)
            return await SequentialCollector().run(brands, enumerator.expand)

    async def fetch_chassis(self) -> dict[str, str]:
        async with self._open_document() as document:
            extractor = FlatExtractor(document, self.settings.enumeration.ready_timeout_ms)
            return await extractor.extract(CHASSIS_SELECTOR, CHASSIS_OPTION_SELECTOR)

    async def fetch_regions(self) -> dict[str, str]:
        async with self._open_document() as document:
            extractor = FlatExtractor(document, self.settings.enumeration.ready_timeout_ms)
            return await extractor.extract(REGION_SELECTOR, REGION_OPTION_SELECTOR, exclude_numeric_values)

    async def fetch_catalog(self, name: str) -> Any:
        """Data for one catalog name (cars | chassis | regions), ready to serialize."""
        if name == "cars":
            return (await self.fetch_cars()).mapping
        if name == "chassis":
            return await self.fetch_chassis()
        if name == "regions":
            return await self.fetch_regions()
        raise ValueError(f"Unknown catalog: {name}")

    async def fetch_all(self, out_dir: str | Path | None = None) -> dict[str, Path]:
        """
        Fetch every catalog concurrently and save each to ``out_dir``.

        A failing catalog does not stop the others; the successful ones are
        saved before CatalogFetchError is raised.

        Returns:
            catalog name -> written file.
        """
        target = Path(out_dir or self.settings.files.out_dir)
        files = {"regions": REGIONS_FILE, "chassis": CHASSIS_FILE, "cars": CARS_FILE}
        names = list(files)

        results = await asyncio.gather(*(self.fetch_catalog(n) for n in names), return_exceptions=True)

        written: dict[str, Path] = {}
        failures: dict[str, str] = {}
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error("Failed to fetch %s: %s", name, result)
                failures[name] = str(result)
                continue
            written[name] = save_json(target / files[name], result)
            logger.info("Saved %s (%d entries) to %s", name, len(result), written[name])

        logger.info("Fetching completed")
        if failures:
            raise CatalogFetchError(failures)
        return written
