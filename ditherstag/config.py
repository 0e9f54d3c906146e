"""Process-wide settings for ditherstag.

Values are plain module constants where they never change at runtime and a
:class:`ProcessingConfig` settings model for the few knobs a host may want
to tune, e.g. the timeout used when fetching bitmaps from a URL. Every field
can be overridden by a ``DITHERSTAG_``-prefixed environment variable, e.g.
``DITHERSTAG_URL_TIMEOUT=5``.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SIGMA_SPAN = 6
"Default Gaussian kernels cover +/- 3 standard deviations around the centre"

SUPPORTED_IMAGE_FILETYPES = ["png", "bmp", "jpg", "jpeg", "gif", "webp"]
"List of compressed image file types which can be decoded"

ENV_PREFIX = "DITHERSTAG_"


class ProcessingConfig(BaseSettings):
    """Tunable settings of the bitmap boundary and kernel generation."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, frozen=True, extra="ignore")

    url_timeout: float = Field(default=30.0, gt=0.0)
    "Timeout in seconds when a bitmap is fetched from a http(s) URL"
    sigma_span: int = Field(default=SIGMA_SPAN, ge=1)
    "Default kernel extent in standard deviations"
    png_compress_level: int = Field(default=6, ge=0, le=9)
    "Pillow's zlib level used when encoding PNGs"


_config: ProcessingConfig | None = None


def get_config() -> ProcessingConfig:
    """
    Returns the active configuration, reading the environment on first use.
    """
    global _config
    if _config is None:
        _config = ProcessingConfig()
    return _config


def set_config(config: ProcessingConfig | None) -> None:
    """
    Replaces the active configuration.

    :param config: The new configuration. None re-reads the environment on
        the next :func:`get_config` call.
    """
    global _config
    _config = config


__all__ = [
    "ProcessingConfig",
    "get_config",
    "set_config",
    "ENV_PREFIX",
    "SIGMA_SPAN",
    "SUPPORTED_IMAGE_FILETYPES",
]
