"""
PDF Render API - FastAPI application for HTML to PDF rendering.

Provides a legacy plain-text endpoint, a JSON endpoint and a file download
endpoint, all backed by one shared Chromium instance (see renderer.py).
"""

import logging
from contextlib import asynccontextmanager
from io import BytesIO
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse

from . import __version__
from .config import get_settings, validate_config_on_startup
from .errors import InvalidInputError
from .models import (
    DownloadPdfRequest,
    ErrorResponse,
    GeneratePdfRequest,
    GeneratePdfResponse,
    HealthResponse,
    LegacyPdfRequest,
)
from .pdf_helpers import content_disposition
from .renderer import PdfRenderer, get_renderer

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

INVALID_REQUEST = "Invalid request"
HTML_TEMPLATE_REQUIRED = "htmlTemplate is required and must be a string"
GENERATION_FAILED = "PDF generation failed"
UNKNOWN_ERROR = "Unknown error occurred"

ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorResponse, "description": "PDF generation failed"},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration on startup and close the browser on shutdown."""
    validate_config_on_startup()
    logger.info("PDF Render API starting - browser will launch on first render")
    yield
    logger.info("PDF Render API shutting down")
    await get_renderer().shutdown()


app = FastAPI(
    title="PDF Render API",
    version=__version__,
    description="Generate PDFs from HTML templates using headless Chromium",
    docs_url="/api-docs",
    openapi_url="/api-docs.json",
    redoc_url=None,
    lifespan=lifespan,
)


# ============================================================================
# Error Handling
# ============================================================================

def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    """Build a {error, message} JSON response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


def _is_html_template_error(err: Dict[str, Any]) -> bool:
    loc = tuple(err.get("loc", ()))
    # ("body",) alone means the body is missing or is not a JSON object
    return loc == ("body",) or loc[:2] == ("body", "htmlTemplate")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 {error, message}."""
    errors = exc.errors()

    if any(err.get("type") == "json_invalid" for err in errors):
        message = "Request body is not valid JSON"
    elif not errors or any(_is_html_template_error(err) for err in errors):
        message = HTML_TEMPLATE_REQUIRED
    else:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))

    logger.warning(f"Rejected request to {request.url.path}: {message}")
    return error_response(400, INVALID_REQUEST, message)


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """Reject request bodies larger than MAX_BODY_SIZE_MB."""
    content_length = request.headers.get("content-length")
    limit = get_settings().max_body_size_bytes
    if content_length and content_length.isdigit() and int(content_length) > limit:
        logger.warning(f"Rejected {content_length} byte body (limit {limit})")
        return error_response(
            413,
            "Payload too large",
            f"Request body exceeds {get_settings().max_body_size_mb}MB limit",
        )
    return await call_next(request)


def render_failure(e: Exception) -> JSONResponse:
    """Log a render failure and map it to an HTTP error response."""
    stage = getattr(e, "stage", None)
    if stage:
        logger.error(f"Error generating PDF during {stage}: {e}")
    else:
        logger.error(f"Error generating PDF: {e}")
    if isinstance(e, InvalidInputError):
        return error_response(400, INVALID_REQUEST, HTML_TEMPLATE_REQUIRED)
    return error_response(500, GENERATION_FAILED, str(e) or UNKNOWN_ERROR)


# ============================================================================
# Health Check Endpoint
# ============================================================================

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Liveness probe. Does not touch the browser."""
    return HealthResponse()


# ============================================================================
# PDF Generation Endpoints
# ============================================================================

@app.post(
    "/api/Utility/GeneratePdf",
    response_class=PlainTextResponse,
    responses=ERROR_RESPONSES,
    tags=["PDF Generation"],
)
async def generate_pdf_legacy(
    request: LegacyPdfRequest,
    renderer: PdfRenderer = Depends(get_renderer),
):
    """
    Legacy endpoint: returns only the Base64 string, no JSON wrapper.

    Existing consumers read the raw response body as Base64, so the
    response shape must stay as is.
    """
    try:
        pdf_base64 = await renderer.render_to_base64(request.htmlTemplate)
    except Exception as e:
        return render_failure(e)

    return PlainTextResponse(pdf_base64)


@app.post(
    "/api/pdf/generate",
    response_model=GeneratePdfResponse,
    responses=ERROR_RESPONSES,
    tags=["PDF Generation"],
)
async def generate_pdf(
    request: GeneratePdfRequest,
    renderer: PdfRenderer = Depends(get_renderer),
):
    """
    Convert HTML to PDF and return it Base64 encoded in a JSON envelope.

    Args:
        request: HTML template plus optional paper size, margins and background flag

    Returns:
        {success, pdf, message}
    """
    options = request.to_render_options()
    try:
        pdf_base64 = await renderer.render_to_base64(request.htmlTemplate, options)
    except Exception as e:
        return render_failure(e)

    return GeneratePdfResponse(pdf=pdf_base64)


@app.post(
    "/api/pdf/download",
    response_class=StreamingResponse,
    responses={200: {"content": {"application/pdf": {}}}, **ERROR_RESPONSES},
    tags=["PDF Generation"],
)
async def download_pdf(
    request: DownloadPdfRequest,
    renderer: PdfRenderer = Depends(get_renderer),
):
    """
    Convert HTML to PDF and return it as a file attachment.

    The filename is sanitized to letters, digits, hyphen and underscore
    and defaults to "document".
    """
    options = request.to_render_options()
    try:
        pdf_bytes = await renderer.render_to_bytes(request.htmlTemplate, options)
    except Exception as e:
        return render_failure(e)

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": content_disposition(request.fileName),
            "Content-Length": str(len(pdf_bytes)),
        },
    )
