"""Playwright-backed browser session used by the executor."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Protocol

from playwright.async_api import Browser, Locator, Page, Playwright, async_playwright

from .config import ExporterConfig
from .errors import SessionInitError

log = logging.getLogger(__name__)


class LocatorLike(Protocol):
    async def fill(self, value: str) -> Any: ...

    async def click(self) -> Any: ...


class SessionLike(Protocol):
    """Capabilities the executor needs from a browser session."""

    async def navigate(self, url: str) -> Any: ...

    def locate(self, selector: str) -> LocatorLike: ...


class BrowserSession:
    """Thin wrapper around a single Playwright page."""

    def __init__(self, page: Page) -> None:
        self.page = page

    async def navigate(self, url: str) -> Any:
        return await self.page.goto(url)

    def locate(self, selector: str) -> Locator:
        return self.page.locator(selector)


@asynccontextmanager
async def open_session(config: ExporterConfig) -> AsyncIterator[BrowserSession]:
    """Start Playwright, launch a browser and yield a session on a new page.

    Failures while bringing the browser up raise :class:`SessionInitError`.
    """

    manager = async_playwright()
    playwright: Optional[Playwright] = None
    browser: Optional[Browser] = None
    try:
        try:
            playwright = await manager.start()
        except Exception as exc:
            raise SessionInitError(f"Failed to start Playwright: {exc}") from exc
        try:
            browser_type = getattr(playwright, config.browser)
            browser = await browser_type.launch(headless=config.headless)
        except Exception as exc:
            raise SessionInitError(f"Failed to launch {config.browser}: {exc}") from exc
        try:
            context = await browser.new_context()
        except Exception as exc:
            raise SessionInitError(f"Failed to create browser context: {exc}") from exc
        try:
            page = await context.new_page()
        except Exception as exc:
            raise SessionInitError(f"Failed to create page: {exc}") from exc

        if config.action_timeout_ms:
            page.set_default_timeout(config.action_timeout_ms)
        if config.navigation_timeout_ms:
            page.set_default_navigation_timeout(config.navigation_timeout_ms)
        log.info("Launched %s (headless=%s)", config.browser, config.headless)
        yield BrowserSession(page)
    finally:
        if browser is not None:
            try:
                await browser.close()
            except Exception as exc:
                log.debug("Browser close failed: %s", exc)
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as exc:
                log.debug("Playwright stop failed: %s", exc)
