"""
Renderer wrapper around a single long-lived Chromium instance.

One browser process is launched lazily on first use and shared by every
request; each render gets its own browser context and page, which are
torn down as soon as the PDF has been captured (or the render failed).
"""

import asyncio
import base64
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, AsyncIterator, List, Optional

from playwright.async_api import async_playwright

from .config import BROWSER_LAUNCH_ARGS, get_settings
from .errors import InvalidInputError, RenderError
from .models import RenderOptions
from .pdf_helpers import build_pdf_options

if TYPE_CHECKING:
    from playwright.async_api import Browser, Page, Playwright

logger = logging.getLogger(__name__)


class PdfRenderer:
    """
    Owns the process-wide browser handle and renders HTML to PDF.

    The handle is created by ensure_ready() under an asyncio.Lock, so
    requests that arrive while a launch is in flight wait for that launch
    instead of starting a second browser.
    """

    def __init__(
        self,
        executable_path: Optional[str] = None,
        headless: bool = True,
        launch_args: Optional[List[str]] = None,
    ):
        self.executable_path = executable_path
        self.headless = headless
        self.launch_args = list(launch_args) if launch_args is not None else list(BROWSER_LAUNCH_ARGS)
        self._playwright: Optional["Playwright"] = None
        self._browser: Optional["Browser"] = None
        self._lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        """True while a launched browser handle is held."""
        return self._browser is not None

    # ========================================================================
    # Lifecycle
    # ========================================================================

    async def ensure_ready(self) -> "Browser":
        """
        Launch Chromium if no handle exists yet and return the handle.

        Idempotent. Launch failures raise RenderError and are not retried.
        """
        if self._browser is not None:
            return self._browser

        async with self._lock:
            if self._browser is None:
                await self._launch()

        return self._browser

    async def _launch(self) -> None:
        logger.info(
            f"Launching Chromium (headless={self.headless}, "
            f"executable={self.executable_path or 'bundled'})"
        )

        launch_kwargs = {"headless": self.headless, "args": self.launch_args}
        if self.executable_path:
            launch_kwargs["executable_path"] = self.executable_path

        try:
            playwright = await async_playwright().start()
        except Exception as e:
            logger.error(f"Failed to start Playwright driver: {e}")
            raise RenderError(f"Failed to start Playwright: {e}", stage="launch") from e

        try:
            browser = await playwright.chromium.launch(**launch_kwargs)
        except Exception as e:
            logger.error(f"Failed to launch Chromium: {e}")
            await playwright.stop()
            raise RenderError(f"Failed to launch browser: {e}", stage="launch") from e

        self._playwright = playwright
        self._browser = browser
        logger.info("Chromium launched")

    async def shutdown(self) -> None:
        """Close the browser and stop Playwright. No-op without a handle."""
        async with self._lock:
            browser, playwright = self._browser, self._playwright
            self._browser = None
            self._playwright = None

            if browser is None:
                return

            logger.info("Closing Chromium")
            try:
                await browser.close()
            except Exception as e:
                logger.error(f"Error closing browser: {e}")
            finally:
                if playwright is not None:
                    await playwright.stop()

    @asynccontextmanager
    async def page(self) -> AsyncIterator["Page"]:
        """
        Open an isolated page for one render.

        The page lives in its own browser context, which is closed on every
        exit path, including exceptions raised inside the block.
        """
        browser = await self.ensure_ready()
        context = await browser.new_context()
        try:
            yield await context.new_page()
        finally:
            try:
                await context.close()
            except Exception as e:
                # Browser may already be gone
                logger.warning(f"Failed to close browser context: {e}")

    # ========================================================================
    # Rendering
    # ========================================================================

    async def render_to_bytes(self, html: str, options: Optional[RenderOptions] = None) -> bytes:
        """
        Render an HTML document to PDF.

        Args:
            html: Complete HTML document to load as page content
            options: Print settings; defaults to A4, 20px margins, backgrounds on

        Returns:
            Raw PDF bytes

        Raises:
            InvalidInputError: html is empty or not a string
            RenderError: the browser failed to launch, load or print
        """
        if not isinstance(html, str) or not html:
            raise InvalidInputError()

        options = options or RenderOptions()

        try:
            async with self.page() as page:
                await page.set_content(html, wait_until="networkidle")
                pdf_bytes = await page.pdf(**build_pdf_options(options))
        except RenderError as e:
            logger.error(f"PDF rendering failed: {e}")
            raise
        except Exception as e:
            logger.error(f"PDF rendering failed: {e}")
            raise RenderError(str(e), stage="render") from e

        logger.info(
            f"Rendered PDF (paperSize={options.paper_size.value}, "
            f"printBackground={options.print_background}, bytes={len(pdf_bytes)})"
        )
        return bytes(pdf_bytes)

    async def render_to_base64(self, html: str, options: Optional[RenderOptions] = None) -> str:
        """Render an HTML document to PDF and return it Base64 encoded."""
        pdf_bytes = await self.render_to_bytes(html, options)
        return base64.b64encode(pdf_bytes).decode("ascii")


@lru_cache()
def get_renderer() -> PdfRenderer:
    """Get the process-wide renderer, configured from settings."""
    settings = get_settings()
    return PdfRenderer(
        executable_path=settings.browser_executable_path,
        headless=settings.browser_headless,
        launch_args=settings.browser_launch_args,
    )
