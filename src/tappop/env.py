from __future__ import annotations

import os
import re

from pydantic import BaseModel, field_validator

DEFAULT_CDN_URL = "https://unpkg.com/tap-payment-popupjs@2.0.5/dist/umd/index.js"

# Inserted verbatim into an HTML id attribute and a quoted JS string.
BUTTON_ID_PREFIX_RE = re.compile(r"[A-Za-z0-9_-]+")


def check_button_id_prefix(prefix: str) -> str:
    """Return ``prefix`` if it is safe to use in a DOM id.

    Raises:
        ValueError: If it contains anything but letters, digits, ``_`` or ``-``.
    """
    if not BUTTON_ID_PREFIX_RE.fullmatch(prefix):
        raise ValueError(
            f"Button id prefix must match {BUTTON_ID_PREFIX_RE.pattern}, got {prefix!r}"
        )
    return prefix


class Settings(BaseModel):
    """Typed application settings built from environment variables."""

    # Hosted SDK settings
    cdn_url: str = DEFAULT_CDN_URL
    button_id_prefix: str = "tap-pay-btn-"

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: list[str] = ["*"]

    # Application settings
    app_name: str = "TAP Payment Pop"
    app_version: str = "2.0.0"
    log_level: str = "INFO"

    @field_validator("cdn_url")
    @classmethod
    def validate_cdn_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SDK CDN URL cannot be empty")
        return v.strip()

    @field_validator("button_id_prefix")
    @classmethod
    def validate_button_id_prefix(cls, v: str) -> str:
        return check_button_id_prefix(v)


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        cdn_url=os.environ.get("TAP_CDN_URL", DEFAULT_CDN_URL),
        button_id_prefix=os.environ.get("TAP_BUTTON_ID_PREFIX", "tap-pay-btn-"),
        api_host=os.environ.get("API_HOST", "0.0.0.0"),
        api_port=int(os.environ.get("API_PORT", "8000")),
        api_debug=os.environ.get("API_DEBUG", "false").lower() == "true",
        api_cors_origins=os.environ.get("API_CORS_ORIGINS", "*").split(","),
        app_name=os.environ.get("APP_NAME", "TAP Payment Pop"),
        app_version=os.environ.get("APP_VERSION", "2.0.0"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )


_default_cdn_url: str | None = None


def get_cdn_url() -> str:
    """Return the process-wide default SDK location.

    Renderers constructed without an explicit ``cdn_url`` read this value.
    """
    if _default_cdn_url is None:
        return get_settings().cdn_url
    return _default_cdn_url


def set_cdn_url(url: str) -> None:
    """Override the process-wide default SDK location.

    Meant to be called once at startup; existing renderers keep their own URL.
    """
    global _default_cdn_url
    _default_cdn_url = Settings(cdn_url=url).cdn_url
