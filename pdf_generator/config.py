"""
PDF Generator Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

import logging
import re
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .models import RenderOptions


_CSS_LENGTH = re.compile(r"^\d+(\.\d+)?(mm|cm|in|px)$")


class PdfServiceSettings(BaseSettings):
    """
    PDF generator configuration with validation.

    All settings can be overridden via environment variables.
    Render options are fixed per deployment; clients cannot change them.
    """

    # === Server ===
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=3000, ge=1, le=65535, description="Listening port")
    log_level: str = Field(default="INFO", description="Root log level")

    # === Security ===
    playwright_service_secret: Optional[str] = Field(
        default=None,
        description="Shared secret expected from external callers as 'Bearer <secret>'"
    )

    # === Browser ===
    playwright_headless: bool = Field(default=True, description="Run Chromium headless")
    navigation_timeout_ms: int = Field(
        default=30000,
        gt=0,
        description="Upper bound for page navigation to reach network idle"
    )
    selector_timeout_ms: int = Field(
        default=10000,
        gt=0,
        description="Upper bound for waitForSelector"
    )
    print_settle_ms: int = Field(
        default=500,
        ge=0,
        description="Pause after forcing print media before rendering"
    )

    # === Render options ===
    pdf_format: str = Field(default="A4", description="Paper format passed to page.pdf()")
    pdf_margin: str = Field(default="10mm", description="Uniform margin on all four sides")
    pdf_print_background: bool = Field(default=True, description="Print background graphics")

    @field_validator("playwright_service_secret", mode="before")
    @classmethod
    def blank_secret_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty PLAYWRIGHT_SERVICE_SECRET as not configured."""
        if v is None or not str(v).strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a stdlib level name."""
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(allowed))}")
        return v_upper

    @field_validator("pdf_margin")
    @classmethod
    def validate_margin(cls, v: str) -> str:
        """Margins must be a CSS length with an explicit unit."""
        v = v.strip().lower()
        if not _CSS_LENGTH.match(v):
            raise ValueError(f"Invalid margin '{v}' - expected e.g. '10mm' or '20px'")
        return v

    @property
    def auth_enabled(self) -> bool:
        """External callers can only be authorized when a secret is set."""
        return self.playwright_service_secret is not None

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(
            format=self.pdf_format,
            print_background=self.pdf_print_background,
            margin=self.pdf_margin,
        )

    class Config:
        env_prefix = ""  # No prefix, use exact env var names
        case_sensitive = False  # PLAYWRIGHT_SERVICE_SECRET = playwright_service_secret
        extra = "ignore"


@lru_cache()
def get_settings() -> PdfServiceSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for performance.
    """
    return PdfServiceSettings()


def validate_config_on_startup(settings: Optional[PdfServiceSettings] = None) -> PdfServiceSettings:
    """
    Validate configuration at application startup.

    Raises ValueError with details if config is invalid.
    Logs the effective configuration with the secret redacted.
    """
    logger = logging.getLogger(__name__)

    if settings is None:
        try:
            settings = get_settings()
        except Exception as e:
            raise ValueError(f"Configuration validation failed: {e}")

    logger.info(f"Configuration loaded: port={settings.port}")
    logger.info(f"  navigation_timeout={settings.navigation_timeout_ms}ms")
    logger.info(f"  selector_timeout={settings.selector_timeout_ms}ms")
    logger.info(f"  render=format {settings.pdf_format}, margin {settings.pdf_margin}")
    if settings.auth_enabled:
        logger.info("  Auth: Enabled")
    else:
        logger.warning("  Auth: No secret configured, external requests will be rejected (set PLAYWRIGHT_SERVICE_SECRET)")

    return settings
