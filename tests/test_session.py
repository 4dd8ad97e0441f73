import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from exporter import session as session_module
from exporter.config import ExporterConfig
from exporter.errors import SessionInitError
from exporter.session import BrowserSession, open_session


def _fake_playwright(*, launch_error=None):
    page = MagicMock()
    page.goto = AsyncMock(return_value=None)
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()
    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser, side_effect=launch_error)
    playwright.stop = AsyncMock()
    manager = MagicMock()
    manager.start = AsyncMock(return_value=playwright)
    return manager, playwright, browser, page


def test_browser_session_delegates_to_page():
    page = MagicMock()
    page.goto = AsyncMock(return_value="response")
    session = BrowserSession(page)
    assert asyncio.run(session.navigate("https://example.com")) == "response"
    page.goto.assert_awaited_once_with("https://example.com")
    session.locate("#box")
    page.locator.assert_called_once_with("#box")


def test_open_session_applies_timeouts_and_tears_down(monkeypatch):
    manager, playwright, browser, page = _fake_playwright()
    monkeypatch.setattr(session_module, "async_playwright", lambda: manager)
    config = ExporterConfig.from_mapping({"headless": "false", "action_timeout_ms": 5000})

    async def scenario():
        async with open_session(config) as session:
            assert session.page is page

    asyncio.run(scenario())

    playwright.chromium.launch.assert_awaited_once_with(headless=False)
    page.set_default_timeout.assert_called_once_with(5000)
    page.set_default_navigation_timeout.assert_not_called()
    browser.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()


def test_launch_failure_raises_session_init_error(monkeypatch):
    manager, playwright, browser, page = _fake_playwright(launch_error=RuntimeError("Executable doesn't exist"))
    monkeypatch.setattr(session_module, "async_playwright", lambda: manager)

    async def scenario():
        async with open_session(ExporterConfig()):
            pytest.fail("session must not open")

    with pytest.raises(SessionInitError, match="Failed to launch chromium"):
        asyncio.run(scenario())
    playwright.stop.assert_awaited_once()
    browser.close.assert_not_called()


def test_playwright_stop_failure_is_swallowed(monkeypatch):
    manager, playwright, browser, page = _fake_playwright()
    playwright.stop.side_effect = RuntimeError("driver already gone")
    monkeypatch.setattr(session_module, "async_playwright", lambda: manager)
    visited = []

    async def scenario():
        async with open_session(ExporterConfig()) as session:
            await session.navigate("https://example.com")
            visited.append(True)

    asyncio.run(scenario())
    assert visited == [True]
    browser.close.assert_awaited_once()


def test_playwright_stop_failure_keeps_launch_error(monkeypatch):
    manager, playwright, browser, page = _fake_playwright(launch_error=RuntimeError("Executable doesn't exist"))
    playwright.stop.side_effect = RuntimeError("driver already gone")
    monkeypatch.setattr(session_module, "async_playwright", lambda: manager)

    async def scenario():
        async with open_session(ExporterConfig()):
            pytest.fail("session must not open")

    with pytest.raises(SessionInitError, match="Executable doesn't exist"):
        asyncio.run(scenario())
