"""
PDF Render API - HTML to PDF rendering service.

Accepts an HTML document over HTTP and returns the rendered PDF, either as
a Base64 string or as a downloadable file. Rendering is delegated to a
single long-lived headless Chromium instance driven by Playwright.
"""

__version__ = "1.0.0"
