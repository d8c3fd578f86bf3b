"""Exceptions raised by the PDF renderer."""

from typing import Optional


class PdfRenderError(Exception):
    """Base class for renderer errors."""


class InvalidInputError(PdfRenderError):
    """Raised when the HTML to render is missing, empty or not a string."""

    def __init__(self, message: str = "HTML Template Not Found or Invalid!"):
        super().__init__(message)


class RenderError(PdfRenderError):
    """
    Raised when the browser fails to launch, load the document or print it.

    The original engine exception is chained as __cause__.
    """

    def __init__(self, message: str, stage: Optional[str] = None):
        self.stage = stage
        super().__init__(message)
