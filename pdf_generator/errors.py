"""
Error taxonomy for PDF generation.

Every failure a conversion can hit is one of these classes. Each carries a
discrete ``kind`` and the HTTP status the endpoint answers with, alongside
the human-readable message passed at construction.
"""


class PdfGenerationError(Exception):
    """Base class for all PDF generation failures."""

    kind: str = "internal"
    http_status: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PdfGenerationError):
    """Request input is missing or malformed."""

    kind = "validation"
    http_status = 400


class AuthorizationError(PdfGenerationError):
    """Request Gate denied the caller."""

    kind = "authorization"
    http_status = 401


class LaunchError(PdfGenerationError):
    """Chromium could not be started or the page could not be opened."""

    kind = "launch"


class NavigationError(PdfGenerationError):
    """Page navigation failed or did not reach network idle in time."""

    kind = "navigation"


class SelectorTimeoutError(PdfGenerationError):
    """The requested selector never appeared."""

    kind = "selector_timeout"


class RenderError(PdfGenerationError):
    """Print emulation or PDF rendering failed."""

    kind = "render"


class CleanupError(PdfGenerationError):
    """Releasing the browser failed. Logged only, never returned to callers."""

    kind = "cleanup"
