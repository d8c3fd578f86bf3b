"""
Pytest fixtures for PDF Render API tests.
"""

import base64
import os
from unittest.mock import AsyncMock, MagicMock

# Set environment variables BEFORE any imports from pdf_render so the
# cached settings are built from a known configuration.
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "INFO"
os.environ.pop("BROWSER_EXECUTABLE_PATH", None)
os.environ.pop("MAX_BODY_SIZE_MB", None)

import pytest
from fastapi.testclient import TestClient

from pdf_render.config import get_settings
from pdf_render.renderer import get_renderer

FAKE_PDF = b"%PDF-1.4 fake pdf content"
FAKE_PDF_BASE64 = base64.b64encode(FAKE_PDF).decode("ascii")


@pytest.fixture(autouse=True)
def reset_caches():
    """Drop cached settings and renderer so each test sees its own env."""
    get_settings.cache_clear()
    get_renderer.cache_clear()
    yield
    get_settings.cache_clear()
    get_renderer.cache_clear()


@pytest.fixture
def playwright_mock():
    """
    Mock the Playwright driver chain used by PdfRenderer.

    async_playwright().start() -> playwright
    playwright.chromium.launch() -> browser
    browser.new_context() -> context
    context.new_page() -> page
    """
    page = AsyncMock()
    page.pdf = AsyncMock(return_value=FAKE_PDF)

    context = AsyncMock()
    context.new_page = AsyncMock(return_value=page)

    browser = AsyncMock()
    browser.new_context = AsyncMock(return_value=context)

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    factory = MagicMock()
    factory.return_value.start = AsyncMock(return_value=playwright)

    return MagicMock(
        factory=factory,
        playwright=playwright,
        browser=browser,
        context=context,
        page=page,
    )


@pytest.fixture
def mock_renderer():
    """Renderer stand-in returning a fixed fake PDF."""
    renderer = MagicMock()
    renderer.render_to_bytes = AsyncMock(return_value=FAKE_PDF)
    renderer.render_to_base64 = AsyncMock(return_value=FAKE_PDF_BASE64)
    renderer.shutdown = AsyncMock()
    return renderer


@pytest.fixture
def client(mock_renderer):
    """FastAPI test client with the renderer dependency mocked."""
    from pdf_render.app import app

    app.dependency_overrides[get_renderer] = lambda: mock_renderer
    yield TestClient(app)
    app.dependency_overrides.clear()
