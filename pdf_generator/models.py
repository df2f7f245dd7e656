"""
Request/response models and request-scoped value types.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .errors import PdfGenerationError


SERVICE_NAME = "playwright-pdf-generator"

DEFAULT_NAVIGATION_TIMEOUT_MS = 30000
DEFAULT_SELECTOR_TIMEOUT_MS = 10000


# ============================================================================
# HTTP Models
# ============================================================================

class GeneratePdfRequest(BaseModel):
    """Body of POST /generate-pdf."""
    # Optional here so a missing url is answered with 400, not a 422
    url: Optional[str] = Field(None, description="Page to convert")
    waitForSelector: Optional[str] = Field(
        None, description="CSS selector that must appear before rendering"
    )
    usePrintMedia: Optional[bool] = Field(
        None, description="Force print media and print-only visibility classes"
    )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    service: str = SERVICE_NAME


class ErrorResponse(BaseModel):
    """JSON error body."""
    error: str
    message: Optional[str] = None


# ============================================================================
# Pipeline Types
# ============================================================================

@dataclass
class ConversionRequest:
    """One conversion, as handed to the pipeline."""

    url: Optional[str]
    wait_for_selector: Optional[str] = None
    use_print_media: Optional[bool] = None
    navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS
    selector_timeout_ms: int = DEFAULT_SELECTOR_TIMEOUT_MS


@dataclass(frozen=True)
class RenderOptions:
    """Fixed page.pdf() policy for a deployment."""

    format: str = "A4"
    print_background: bool = True
    margin: str = "10mm"
    prefer_css_page_size: bool = False

    def to_pdf_kwargs(self) -> Dict[str, Any]:
        return {
            "format": self.format,
            "print_background": self.print_background,
            "margin": {
                "top": self.margin,
                "right": self.margin,
                "bottom": self.margin,
                "left": self.margin,
            },
            "prefer_css_page_size": self.prefer_css_page_size,
        }


@dataclass
class ConversionResult:
    """Either the rendered PDF bytes or the first failure encountered."""

    pdf: Optional[bytes] = None
    error: Optional[PdfGenerationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, pdf: bytes) -> "ConversionResult":
        return cls(pdf=pdf)

    @classmethod
    def failure(cls, error: PdfGenerationError) -> "ConversionResult":
        return cls(error=error)
