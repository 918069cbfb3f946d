"""Unit tests for cascade_harvest.utils.browser_factory module.

Tests for BrowserConfig and the launch fallback chain.
"""
from unittest.mock import AsyncMock, Mock

import pytest

from cascade_harvest.settings import BrowserSettings
from cascade_harvest.utils import browser_factory
from cascade_harvest.utils.browser_factory import (
    BrowserConfig,
    BrowserFactory,
    get_browser_channels,
)
from cascade_harvest.utils.exceptions import BrowserLaunchError, BrowserNotFoundError


def _playwright():
    p = Mock()
    p.chromium.connect_over_cdp = AsyncMock(return_value="remote-browser")
    p.chromium.launch = AsyncMock(return_value="local-browser")
    return p


class TestBrowserConfig:
    """Tests for BrowserConfig dataclass."""

    def test_default_config(self):
        """Test default BrowserConfig values."""
        config = BrowserConfig()

        assert config.headless is True
        assert config.viewport_width == 1366
        assert config.viewport_height == 900
        assert config.ignore_https_errors is True
        assert config.slow_mo == 0
        assert config.chrome_ws_url is None

    def test_from_settings(self):
        """Test browser settings carry over headless, timeout and endpoint."""
        settings = BrowserSettings(
            chrome_ws_url="ws://127.0.0.1:9222/devtools/browser/abc",
            headless=False,
            target_url="https://example.com",
            timeout_ms=5000,
        )

        config = BrowserConfig.from_settings(settings)

        assert config.headless is False
        assert config.timeout == 5000
        assert config.chrome_ws_url == "ws://127.0.0.1:9222/devtools/browser/abc"


class TestGetBrowserChannels:
    """Tests for get_browser_channels function."""

    def test_default_order(self):
        """Test default channel order (Chrome first)."""
        assert get_browser_channels() == ["chrome", "msedge"]


class TestLaunch:
    """Tests for the launch fallback chain."""

    @pytest.mark.asyncio
    async def test_remote_endpoint_first(self):
        """Test a WebSocket URL connects over CDP and launches nothing."""
        p = _playwright()

        browser = await browser_factory._launch(p, BrowserConfig(chrome_ws_url="ws://host:9222/devtools"))

        assert browser == "remote-browser"
        p.chromium.connect_over_cdp.assert_awaited_once_with("ws://host:9222/devtools")
        p.chromium.launch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remote_endpoint_failure(self):
        """Test an unreachable endpoint raises BrowserLaunchError with the URL."""
        p = _playwright()
        p.chromium.connect_over_cdp.side_effect = RuntimeError("ECONNREFUSED")

        with pytest.raises(BrowserLaunchError) as exc:
            await browser_factory._launch(p, BrowserConfig(chrome_ws_url="ws://host:9222/devtools"))

        assert exc.value.details == {"ws_url": "ws://host:9222/devtools"}
        p.chromium.launch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_channel_fallback(self):
        """Test the next channel is tried when the first is missing."""
        p = _playwright()
        p.chromium.launch.side_effect = [RuntimeError("no chrome"), "edge-browser"]

        browser = await browser_factory._launch(p, BrowserConfig())

        assert browser == "edge-browser"
        channels = [c.kwargs["channel"] for c in p.chromium.launch.await_args_list]
        assert channels == ["chrome", "msedge"]

    @pytest.mark.asyncio
    async def test_bundled_chromium_last(self, monkeypatch):
        """Test bundled Chromium is used when no channel or executable works."""
        monkeypatch.setattr(browser_factory, "find_system_browser", lambda: None)
        p = _playwright()
        p.chromium.launch.side_effect = [RuntimeError("x"), RuntimeError("y"), "bundled"]

        browser = await browser_factory._launch(p, BrowserConfig(slow_mo=50))

        assert browser == "bundled"
        assert p.chromium.launch.await_args_list[-1].kwargs == {"headless": True, "slow_mo": 50}

    @pytest.mark.asyncio
    async def test_no_browser_at_all(self, monkeypatch):
        """Test BrowserNotFoundError when every option fails."""
        monkeypatch.setattr(browser_factory, "find_system_browser", lambda: None)
        p = _playwright()
        p.chromium.launch.side_effect = RuntimeError("missing")

        with pytest.raises(BrowserNotFoundError):
            await browser_factory._launch(p, BrowserConfig())


class TestBrowserFactory:
    """Tests for BrowserFactory static methods."""

    def test_create_async_exists(self):
        """Test create_async() is available."""
        assert callable(BrowserFactory.create_async)
