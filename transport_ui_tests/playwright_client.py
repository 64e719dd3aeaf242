"""
Direct Playwright Client
========================

Launches Playwright in-process and hands out one browser context (optionally
restored from a stored session) with a default page.

Usage:
    async with PlaywrightClient(base_url="https://stage.example.com") as client:
        await client.page.goto("/request/create")
"""

import os
from typing import Any, Dict, Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from transport_ui_tests.log import get_logger

log = get_logger("browser")


class PlaywrightClient:
    """One browser, one context, one default page for a single test."""

    def __init__(
        self,
        browser_type: str = "chromium",
        headless: bool = True,
        timeout: int = 10000,
        navigation_timeout: int = 30000,
        storage_state_path: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        """
        Args:
            browser_type: chromium, firefox or webkit
            headless: Run without a visible window
            timeout: Default action timeout in milliseconds
            navigation_timeout: Default navigation timeout in milliseconds
            storage_state_path: Stored session (cookies/localStorage) to restore
            base_url: Base URL for relative navigation
        """
        self.browser_type = browser_type
        self.headless = headless
        self.timeout = timeout
        self.navigation_timeout = navigation_timeout
        self.storage_state_path = storage_state_path
        self.base_url = base_url

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def context_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self.base_url:
            options["base_url"] = self.base_url
        if self.storage_state_path:
            if os.path.exists(self.storage_state_path):
                options["storage_state"] = self.storage_state_path
            else:
                log.warning(f"Stored session not found, starting unauthenticated: {self.storage_state_path}")
        return options

    async def connect(self):
        """Launch the browser and open the default context and page."""
        self._playwright = await async_playwright().start()
        try:
            launcher = getattr(self._playwright, self.browser_type, None)
            if launcher is None:
                raise ValueError(f"Unknown browser type: {self.browser_type}")
            log.info(f"Launching {self.browser_type} (headless={self.headless})")
            self._browser = await launcher.launch(headless=self.headless)

            self._context = await self._browser.new_context(**self.context_options())
            self._context.set_default_timeout(self.timeout)
            self._context.set_default_navigation_timeout(self.navigation_timeout)
            self._page = await self._context.new_page()
        except BaseException:
            await self.close()
            raise

    async def new_page(self) -> Page:
        return await self.context.new_page()

    async def close(self):
        """Close page, context, browser and driver, whichever are open."""
        for attr in ("_page", "_context", "_browser"):
            resource = getattr(self, attr)
            if resource:
                await resource.close()
                setattr(self, attr, None)

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("Client not connected")
        return self._browser

    @property
    def context(self) -> BrowserContext:
        if not self._context:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")
        return self._context

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page
