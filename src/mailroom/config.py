"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by ``.env`` file and environment
variables, a cached ``get_settings()`` accessor, and a ``validate_credentials()``
startup gate that enforces transport credentials in production mode.

This module imports nothing from the rest of ``mailroom`` so any module can
depend on it.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env`` file.

    ``SecretStr`` fields keep the Brevo key out of logs and reprs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- General ---------------------------------------------------------------
    production: bool = False
    database_path: Path = Path("data/mailroom.db")

    # -- Sender ----------------------------------------------------------------
    default_from_address: str = "noreply@aruviah.com"
    sender_name: str = "Aruviah Stores"

    # -- Brevo -----------------------------------------------------------------
    brevo_api_key: SecretStr = SecretStr("")
    brevo_sender_email: str = ""
    brevo_base_url: str = "https://api.brevo.com/v3"

    # -- Content ---------------------------------------------------------------
    preview_length: int = 100
    words_per_minute: int = 200

    # -- Mailbox ---------------------------------------------------------------
    snooze_resurface: bool = True
    section_limit: int = 100


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    Call ``get_settings.cache_clear()`` in tests to reset.

    Returns:
        The application ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        # Log only the structured errors list, never the exception text,
        # which may echo raw SecretStr input.
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)


def validate_credentials(settings: Settings) -> None:
    """Enforce transport credentials at startup.

    In **production** mode the process exits with a clear error block if the
    Brevo API key or sender address is missing.  In **development** mode each
    missing value is logged as a warning and startup continues.

    Args:
        settings: The loaded application settings.
    """
    errors: list[str] = []

    if not settings.brevo_api_key.get_secret_value():
        errors.append("BREVO_API_KEY is empty or not set")

    if not settings.brevo_sender_email:
        errors.append("BREVO_SENDER_EMAIL is empty or not set")

    if not errors:
        logger.info("credential_validation_passed")
        return

    if settings.production:
        for err in errors:
            logger.error("credential_missing", detail=err)
        print("\n=== STARTUP FAILED ===", file=sys.stderr)
        print("Missing required credentials for production mode:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        print("======================\n", file=sys.stderr)
        sys.exit(1)
    else:
        for err in errors:
            logger.warning("credential_missing_dev", detail=err)
