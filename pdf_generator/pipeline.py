"""
Conversion pipeline - one URL in, one PDF (or one classified error) out.

Each call launches its own browser session, drives it through
navigate -> wait for selector -> print emulation -> render, and closes
it on every exit path before returning.
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import urlparse

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .browser import BrowserController, BrowserSession
from .errors import (
    CleanupError,
    LaunchError,
    NavigationError,
    PdfGenerationError,
    RenderError,
    SelectorTimeoutError,
    ValidationError,
)
from .models import ConversionRequest, ConversionResult, RenderOptions


logger = logging.getLogger(__name__)

TIMEOUT_ERRORS = (PlaywrightTimeoutError, asyncio.TimeoutError)


def validate_url(url: Optional[str]) -> str:
    """
    Check the target URL before any browser work.

    Raises:
        ValidationError: if the URL is missing or not an absolute http(s) URL
    """
    if url is None or not url.strip():
        raise ValidationError("URL is required")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("URL is invalid")
    return url


class ConversionPipeline:
    """Process-lifetime converter; holds configuration only, no per-request state."""

    def __init__(
        self,
        controller: BrowserController,
        render_options: Optional[RenderOptions] = None,
        print_settle_ms: int = 500,
    ):
        self.controller = controller
        self.render_options = render_options or RenderOptions()
        self.print_settle_ms = print_settle_ms

    async def convert(self, req: ConversionRequest) -> ConversionResult:
        """
        Convert req.url to PDF bytes.

        Never raises for conversion failures; the first failure is returned
        inside the ConversionResult. Cleanup errors are logged only.
        """
        try:
            url = validate_url(req.url)
        except ValidationError as e:
            return ConversionResult.failure(e)

        logger.info(
            f"📄 PDF generation request: url={url}, "
            f"waitForSelector={req.wait_for_selector}, usePrintMedia={req.use_print_media}"
        )

        try:
            session = await self.controller.launch()
        except Exception as e:
            logger.error(f"❌ Browser launch failed: {e}")
            return ConversionResult.failure(LaunchError(f"Browser launch failed: {e}"))

        try:
            pdf_bytes = await self._run(session, url, req)
        except PdfGenerationError as e:
            logger.error(f"❌ PDF generation failed ({e.kind}): {e.message}")
            return ConversionResult.failure(e)
        finally:
            await self._release(session)

        logger.info(f"✅ PDF generated ({len(pdf_bytes)} bytes)")
        return ConversionResult.success(pdf_bytes)

    async def _release(self, session: BrowserSession) -> None:
        """Close the session; a failing close is logged and never propagates."""
        try:
            await session.close()
        except Exception as e:
            err = CleanupError(f"Session close failed: {e}")
            logger.warning(f"{err.kind}: {err.message}")

    async def _run(self, session: BrowserSession, url: str, req: ConversionRequest) -> bytes:
        try:
            await session.navigate(url, wait_until="networkidle", timeout_ms=req.navigation_timeout_ms)
        except TIMEOUT_ERRORS:
            raise NavigationError(
                f"Navigation to {url} timed out after {req.navigation_timeout_ms}ms"
            )
        except Exception as e:
            raise NavigationError(f"Navigation to {url} failed: {e}")

        if req.wait_for_selector:
            try:
                await session.wait_for_selector(req.wait_for_selector, timeout_ms=req.selector_timeout_ms)
            except TIMEOUT_ERRORS:
                raise SelectorTimeoutError(
                    f"Timed out after {req.selector_timeout_ms}ms "
                    f"waiting for selector '{req.wait_for_selector}'"
                )
            except Exception as e:
                raise SelectorTimeoutError(
                    f"Waiting for selector '{req.wait_for_selector}' failed: {e}"
                )

        if req.use_print_media is True:
            try:
                await session.emulate_print(self.print_settle_ms)
            except Exception as e:
                raise RenderError(f"Print media emulation failed: {e}")

        try:
            pdf_bytes = await session.render(self.render_options)
        except Exception as e:
            raise RenderError(f"PDF rendering failed: {e}")

        if not pdf_bytes:
            raise RenderError("PDF rendering returned an empty document")
        return pdf_bytes
