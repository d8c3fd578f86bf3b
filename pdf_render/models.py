"""
Pydantic models for the PDF Render API.

Request field names are camelCase because existing clients post them in
that shape (htmlTemplate, paperSize, printBackground, fileName).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

DEFAULT_MARGIN = "20px"


class PaperSize(str, Enum):
    """Paper formats accepted by Chromium's print-to-PDF."""
    A4 = "A4"
    A3 = "A3"
    LETTER = "Letter"
    LEGAL = "Legal"
    TABLOID = "Tabloid"


class PdfMargin(BaseModel):
    """Page margins as CSS lengths. Omitted sides fall back to 20px."""

    model_config = ConfigDict(frozen=True)

    top: Optional[str] = Field(DEFAULT_MARGIN, description="Top margin", examples=["20px"])
    bottom: Optional[str] = Field(DEFAULT_MARGIN, description="Bottom margin", examples=["20px"])
    left: Optional[str] = Field(DEFAULT_MARGIN, description="Left margin", examples=["20px"])
    right: Optional[str] = Field(DEFAULT_MARGIN, description="Right margin", examples=["20px"])


class RenderOptions(BaseModel):
    """Immutable print settings passed to the renderer for a single call."""

    model_config = ConfigDict(frozen=True)

    paper_size: PaperSize = PaperSize.A4
    margin: PdfMargin = Field(default_factory=PdfMargin)
    print_background: bool = True

    @classmethod
    def from_request(
        cls,
        paper_size: Optional[PaperSize] = None,
        margin: Optional[PdfMargin] = None,
        print_background: Optional[bool] = None,
    ) -> "RenderOptions":
        """
        Build options from optional request fields.

        None means "use the default"; only an explicit False turns
        background printing off.
        """
        return cls(
            paper_size=paper_size or PaperSize.A4,
            margin=margin or PdfMargin(),
            print_background=print_background is not False,
        )


# ============================================================================
# Request Models
# ============================================================================

class LegacyPdfRequest(BaseModel):
    """Request body for the legacy plain-text endpoint."""

    htmlTemplate: StrictStr = Field(
        ...,
        min_length=1,
        description="The HTML content to convert to PDF",
        examples=["<html><body><h1>Hello World</h1></body></html>"],
    )


class GeneratePdfRequest(LegacyPdfRequest):
    """Request body for the JSON endpoint."""

    paperSize: Optional[PaperSize] = Field(None, description="Paper size for the PDF (default A4)")
    margin: Optional[PdfMargin] = Field(None, description="Page margins (default 20px each side)")
    printBackground: Optional[bool] = Field(None, description="Print background graphics (default true)")

    def to_render_options(self) -> RenderOptions:
        return RenderOptions.from_request(
            paper_size=self.paperSize,
            margin=self.margin,
            print_background=self.printBackground,
        )


class DownloadPdfRequest(GeneratePdfRequest):
    """Request body for the file download endpoint."""

    fileName: Optional[str] = Field(
        None,
        description="Filename for the downloaded PDF, without the .pdf extension",
        examples=["my-report"],
    )


# ============================================================================
# Response Models
# ============================================================================

class GeneratePdfResponse(BaseModel):
    """JSON envelope returned by /api/pdf/generate."""

    success: bool = True
    pdf: str = Field(..., description="Base64 encoded PDF content")
    message: str = "PDF generated successfully"


class ErrorResponse(BaseModel):
    """Error payload for 4xx/5xx responses."""

    error: str
    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "OK"
    message: str = "Server is running"
