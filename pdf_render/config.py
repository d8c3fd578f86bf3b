"""
PDF Render API Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Chromium flags used for every launch. The sandbox is disabled so the
# browser can run as root inside containers.
BROWSER_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-gpu",
]


class PdfRenderSettings(BaseSettings):
    """
    PDF Render API configuration with validation.

    All settings can be overridden via environment variables.
    Validation happens at startup to fail fast on misconfiguration.
    """

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix, use exact env var names
        case_sensitive=False,  # PORT = port
    )

    # === Server ===
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="HTTP listening port"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Bind address (all interfaces by default)"
    )
    max_body_size_mb: int = Field(
        default=50,
        ge=1,
        le=500,
        description="Maximum request body size in megabytes (1-500)"
    )

    # === Browser ===
    browser_executable_path: Optional[str] = Field(
        default=None,
        description="Path to a managed Chromium executable; Playwright's bundled browser is used when unset"
    )
    browser_headless: bool = Field(
        default=True,
        description="Run Chromium headless"
    )

    # === Runtime ===
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one the logging module understands."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(allowed))}")
        return v_upper

    @field_validator("browser_executable_path")
    @classmethod
    def empty_path_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty BROWSER_EXECUTABLE_PATH as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def browser_launch_args(self) -> List[str]:
        """Chromium command-line flags for every launch."""
        return list(BROWSER_LAUNCH_ARGS)

    @property
    def max_body_size_bytes(self) -> int:
        return self.max_body_size_mb * 1024 * 1024

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def validate_production_config(self) -> List[str]:
        """
        Validate configuration is suitable for production.

        Returns list of warning messages.
        """
        issues = []

        if self.is_production:
            if self.log_level == "DEBUG":
                issues.append("WARNING: DEBUG logging enabled in production")
            if not self.browser_headless:
                issues.append("WARNING: Chromium is not running headless in production")

        return issues


@lru_cache()
def get_settings() -> PdfRenderSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for performance.
    Use this function to access configuration throughout the app.
    """
    return PdfRenderSettings()


def validate_config_on_startup() -> PdfRenderSettings:
    """
    Validate configuration at application startup.

    Raises ValueError with details if config is invalid.
    Logs warnings for non-critical issues.
    """
    try:
        settings = get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e

    for issue in settings.validate_production_config():
        logger.warning(issue)

    logger.info(
        f"Configuration loaded: environment={settings.environment}, "
        f"port={settings.port}, headless={settings.browser_headless}, "
        f"executable={settings.browser_executable_path or 'bundled'}"
    )
    return settings
