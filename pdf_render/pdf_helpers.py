"""
Helper functions for PDF generation.

These functions translate render options into Playwright print
parameters and build safe download filenames.
"""

import re
from typing import Any, Dict, Optional

from .models import DEFAULT_MARGIN, RenderOptions

DEFAULT_FILE_NAME = "document"


def sanitize_file_name(name: Optional[str]) -> str:
    """
    Sanitize a client supplied filename for the Content-Disposition header.

    Replaces every character outside letters, digits, hyphen and underscore
    with an underscore, so path separators and quotes never survive.

    Args:
        name: Raw filename from the request (without extension)

    Returns:
        Sanitized filename, "document" when nothing was supplied

    Example:
        >>> sanitize_file_name("../../etc/passwd")
        "______etc_passwd"
    """
    if not name:
        return DEFAULT_FILE_NAME
    return re.sub(r"[^A-Za-z0-9_-]", "_", name)


def content_disposition(name: Optional[str]) -> str:
    """Build an attachment Content-Disposition header for a PDF download."""
    return f'attachment; filename="{sanitize_file_name(name)}.pdf"'


def build_pdf_options(options: RenderOptions) -> Dict[str, Any]:
    """
    Map RenderOptions onto keyword arguments for Playwright's page.pdf().

    Args:
        options: Paper size, margins and background flag for this render

    Returns:
        Dict suitable for ``await page.pdf(**kwargs)``
    """
    margin = options.margin
    return {
        "format": options.paper_size.value,
        "margin": {
            "top": margin.top or DEFAULT_MARGIN,
            "bottom": margin.bottom or DEFAULT_MARGIN,
            "left": margin.left or DEFAULT_MARGIN,
            "right": margin.right or DEFAULT_MARGIN,
        },
        "print_background": options.print_background,
    }
