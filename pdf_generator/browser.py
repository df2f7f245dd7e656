"""
Browser controller - thin wrapper over Playwright's async Chromium API.

One BrowserSession owns one Playwright driver, one Chromium process and one
page. Sessions are never shared or pooled; the caller launches one per
conversion and must close it.
"""

import asyncio
import logging

from playwright.async_api import async_playwright

from .errors import CleanupError
from .models import RenderOptions


logger = logging.getLogger(__name__)

# Container environments lack the kernel features Chromium's sandboxes need
CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

# Tailwind-style print variants don't reliably activate under headless
# print emulation, so force them explicitly.
PRINT_OVERRIDE_CSS = r"""
.print\:hidden { display: none !important; }
.print\:flex { display: flex !important; }
.print\:block { display: block !important; }
"""


class BrowserSession:
    """A launched Chromium instance with a single open page."""

    def __init__(self, playwright, browser, page):
        self._playwright = playwright
        self._browser = browser
        self.page = page
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def navigate(self, url: str, wait_until: str = "networkidle", timeout_ms: int = 30000) -> None:
        await self.page.goto(url, wait_until=wait_until, timeout=timeout_ms)

    async def wait_for_selector(self, selector: str, timeout_ms: int = 10000) -> None:
        await self.page.wait_for_selector(selector, timeout=timeout_ms)

    async def emulate_print(self, settle_ms: int = 500) -> None:
        """Switch to print media, force print visibility classes, let layout settle."""
        await self.page.emulate_media(media="print")
        await self.page.add_style_tag(content=PRINT_OVERRIDE_CSS)
        if settle_ms > 0:
            await asyncio.sleep(settle_ms / 1000)

    async def render(self, options: RenderOptions) -> bytes:
        return await self.page.pdf(**options.to_pdf_kwargs())

    async def close(self) -> None:
        """
        Close the browser and stop the Playwright driver.

        Safe to call more than once. Never raises: failures are logged as
        cleanup errors so they cannot mask the outcome of the conversion.
        """
        if self._closed:
            return
        self._closed = True

        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                err = CleanupError(f"Browser close failed: {e}")
                logger.warning(f"{err.kind}: {err.message}")

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                err = CleanupError(f"Playwright stop failed: {e}")
                logger.warning(f"{err.kind}: {err.message}")


class BrowserController:
    """Launches isolated BrowserSessions."""

    def __init__(self, headless: bool = True):
        self.headless = headless

    async def launch(self) -> BrowserSession:
        """
        Start Playwright, launch Chromium and open a page.

        Anything started before a failure is released before the
        exception propagates, so a failed launch leaves nothing running.
        """
        playwright = await async_playwright().start()
        browser = None
        try:
            browser = await playwright.chromium.launch(
                headless=self.headless,
                args=CHROMIUM_ARGS,
            )
            page = await browser.new_page()
        except BaseException:
            await BrowserSession(playwright, browser, None).close()
            raise

        logger.debug("Chromium launched")
        return BrowserSession(playwright, browser, page)
