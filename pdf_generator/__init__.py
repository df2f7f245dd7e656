"""
PDF Generator - Playwright service converting web pages to PDF.

POST a URL to /generate-pdf and receive the rendered page as an A4 PDF.
Each request drives its own headless Chromium instance.
"""

__version__ = "0.1.0"
