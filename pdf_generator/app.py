"""
PDF Generator - FastAPI application.

Converts a web page at a given URL into a PDF using Playwright/Chromium.
Internal callers are trusted; external callers must present the shared
secret as a bearer token.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from . import __version__
from .auth import is_request_authorized, verify_request
from .browser import BrowserController
from .config import PdfServiceSettings, get_settings, validate_config_on_startup
from .errors import AuthorizationError
from .models import (
    ConversionRequest,
    ErrorResponse,
    GeneratePdfRequest,
    HealthResponse,
)
from .pipeline import ConversionPipeline

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


def get_pipeline(request: Request) -> ConversionPipeline:
    """Dependency returning the process-lifetime pipeline."""
    return request.app.state.pipeline


def _error(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def create_app(
    settings: Optional[PdfServiceSettings] = None,
    controller: Optional[BrowserController] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)
        controller: Optional browser controller override (useful for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()
    if controller is None:
        controller = BrowserController(headless=settings.playwright_headless)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logging.getLogger().setLevel(settings.log_level)
        validate_config_on_startup(settings)
        logger.info(f"🚀 Playwright PDF service running on port {settings.port}")
        yield
        logger.info("PDF service stopped")

    app = FastAPI(
        title="Playwright PDF Generator",
        version=__version__,
        description="Converts web pages to PDF using Playwright/Chromium",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.pipeline = ConversionPipeline(
        controller,
        render_options=settings.render_options,
        print_settle_ms=settings.print_settle_ms,
    )

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
        return _error(exc.http_status, "Unauthorized")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Body parsing runs before route dependencies, so gate here too
        if not is_request_authorized(request):
            logger.warning("Rejected unauthorized external request with malformed body")
            return _error(401, "Unauthorized")

        errors = exc.errors()
        summary = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
        logger.warning(f"Malformed request body: {summary}")
        return _error(400, "Invalid request body", summary)

    # ========================================================================
    # Health Check Endpoint
    # ========================================================================

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Liveness probe. No authentication required."""
        return HealthResponse()

    # ========================================================================
    # PDF Generation Endpoint
    # ========================================================================

    @app.post("/generate-pdf", dependencies=[Depends(verify_request)])
    async def generate_pdf(
        body: Optional[GeneratePdfRequest] = None,
        pipeline: ConversionPipeline = Depends(get_pipeline),
    ) -> Response:
        """
        Convert the page at body.url to PDF.

        Returns:
            application/pdf attachment on success

        Responses:
            400 if url is missing or invalid, 401 if the Request Gate denies,
            500 for any browser failure
        """
        if body is None:
            body = GeneratePdfRequest()

        result = await pipeline.convert(
            ConversionRequest(
                url=body.url,
                wait_for_selector=body.waitForSelector,
                use_print_media=body.usePrintMedia,
                navigation_timeout_ms=settings.navigation_timeout_ms,
                selector_timeout_ms=settings.selector_timeout_ms,
            )
        )

        if not result.ok:
            err = result.error
            if err.http_status == 400:
                return _error(400, err.message)
            return _error(500, "Failed to generate PDF", err.message or "Unknown error")

        return Response(
            content=result.pdf,
            media_type="application/pdf",
            headers={
                "Content-Disposition": 'attachment; filename="document.pdf"',
            },
        )

    return app


def main() -> None:
    """Run the PDF service with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


app = create_app()
