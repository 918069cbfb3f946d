"""
Central factory for Playwright browser contexts (async API).

Basic usage:
    >>> async with BrowserFactory.create_async() as ctx:
    ...     page = await ctx.new_page()
    ...     await page.goto("https://example.com")

Remote Chrome (DevTools WebSocket endpoint):
    >>> config = BrowserConfig(chrome_ws_url="ws://localhost:9222/devtools/browser/...")
    >>> async with BrowserFactory.create_async(config) as ctx:
    ...     page = await ctx.new_page()
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..constants import BROWSER_CHANNELS, CHROME_PATHS, EDGE_PATHS, TIMEOUT_PAGE_DEFAULT
from ..settings import BrowserSettings
from .exceptions import BrowserLaunchError, BrowserNotFoundError

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Playwright

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass
class BrowserConfig:
    """
    Browser creation settings.

    Attributes:
        headless: Run without a visible window.
        timeout: Default timeout in ms for page operations.
        viewport_width: Viewport width.
        viewport_height: Viewport height.
        ignore_https_errors: Ignore TLS certificate errors.
        slow_mo: Delay between actions (debugging).
        chrome_ws_url: Connect to this CDP endpoint instead of launching.
    """

    headless: bool = True
    timeout: int = TIMEOUT_PAGE_DEFAULT
    viewport_width: int = 1366
    viewport_height: int = 900
    ignore_https_errors: bool = True
    slow_mo: int = 0
    chrome_ws_url: str | None = None

    @classmethod
    def from_settings(cls, settings: BrowserSettings) -> BrowserConfig:
        return cls(
            headless=settings.headless,
            timeout=settings.timeout_ms,
            chrome_ws_url=settings.chrome_ws_url,
        )


# =============================================================================
# BROWSER DETECTION
# =============================================================================


def find_system_browser() -> str | None:
    """Path of an installed Chrome or Edge executable, or None."""
    for path in CHROME_PATHS + EDGE_PATHS:
        if Path(path).exists():
            return path

    for env_var in ("PLAYWRIGHT_CHROME_PATH", "CHROME_PATH"):
        exe = os.environ.get(env_var)
        if exe and Path(exe).exists():
            return exe

    return None


def get_browser_channels() -> list[str]:
    return list(BROWSER_CHANNELS)


# =============================================================================
# FACTORY
# =============================================================================


async def _launch(p: Playwright, config: BrowserConfig) -> Browser:
    if config.chrome_ws_url:
        try:
            return await p.chromium.connect_over_cdp(config.chrome_ws_url)
        except Exception as e:
            raise BrowserLaunchError(
                f"Could not connect to remote Chrome: {e}", details={"ws_url": config.chrome_ws_url}
            ) from e

    launch_args = {"headless": config.headless, "slow_mo": config.slow_mo}

    for channel in get_browser_channels():
        try:
            return await p.chromium.launch(channel=channel, **launch_args)
        except Exception:
            logger.debug("Channel %s not available", channel)
            continue

    exe = find_system_browser()
    if exe:
        try:
            return await p.chromium.launch(executable_path=exe, **launch_args)
        except Exception:
            logger.debug("Executable %s failed to launch", exe)

    # Last resort: Playwright's bundled Chromium
    try:
        return await p.chromium.launch(**launch_args)
    except Exception as e:
        raise BrowserNotFoundError(f"No browser available. Install Chrome or run 'playwright install'. Error: {e}") from e


class BrowserFactory:
    """
    Factory for Playwright browser contexts.

    Centralizes:
    - Remote CDP connection or local launch with channel fallback
    - Context configuration
    """

    @staticmethod
    @asynccontextmanager
    async def create_async(config: BrowserConfig | None = None):
        """
        Create a configured browser context with guaranteed cleanup.

        Yields:
            Async BrowserContext.

        Raises:
            BrowserNotFoundError: No compatible browser found.
            BrowserLaunchError: Remote endpoint unreachable.
        """
        from playwright.async_api import async_playwright

        config = config or BrowserConfig()

        p = await async_playwright().start()
        browser: Browser | None = None
        context: BrowserContext | None = None

        try:
            browser = await _launch(p, config)
            context = await browser.new_context(
                ignore_https_errors=config.ignore_https_errors,
                viewport={"width": config.viewport_width, "height": config.viewport_height},
            )
            context.set_default_timeout(config.timeout)

            yield context

        finally:
            if context:
                try:
                    await context.close()
                except Exception:
                    logger.debug("Context close failed", exc_info=True)
            if browser:
                try:
                    await browser.close()
                except Exception:
                    logger.debug("Browser close failed", exc_info=True)
            await p.stop()
