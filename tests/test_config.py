"""
Tests the configuration handling
"""

import pydantic
import pytest

from ditherstag import GrayImage, ProcessingConfig, get_config, set_config


def test_defaults(monkeypatch):
    for name in ("URL_TIMEOUT", "SIGMA_SPAN", "PNG_COMPRESS_LEVEL"):
        monkeypatch.delenv(f"DITHERSTAG_{name}", raising=False)
    config = ProcessingConfig()
    assert config.url_timeout == 30.0
    assert config.sigma_span == 6
    assert config.png_compress_level == 6


def test_from_env(monkeypatch):
    """Every field can be overridden by a DITHERSTAG_ variable."""
    monkeypatch.setenv("DITHERSTAG_URL_TIMEOUT", "2.5")
    monkeypatch.setenv("DITHERSTAG_PNG_COMPRESS_LEVEL", "9")
    monkeypatch.setenv("DITHERSTAG_SIGMA_SPAN", "2")
    config = get_config()
    assert config.url_timeout == 2.5
    assert config.png_compress_level == 9
    assert config.sigma_span == 2
    assert get_config() is config
    assert GrayImage.gaussian_kernel(1).size == (3, 3)


def test_config_is_frozen():
    config = ProcessingConfig()
    with pytest.raises(pydantic.ValidationError):
        config.url_timeout = 1.0


def test_invalid_values(monkeypatch):
    with pytest.raises(pydantic.ValidationError):
        ProcessingConfig(png_compress_level=10)
    with pytest.raises(pydantic.ValidationError):
        ProcessingConfig(url_timeout=0)
    monkeypatch.setenv("DITHERSTAG_PNG_COMPRESS_LEVEL", "-1")
    with pytest.raises(pydantic.ValidationError):
        get_config()


def test_malformed_env_value(monkeypatch):
    """Unparsable variables raise a validation error naming the field."""
    monkeypatch.setenv("DITHERSTAG_URL_TIMEOUT", "abc")
    with pytest.raises(pydantic.ValidationError, match="url_timeout"):
        get_config()


def test_sigma_span_controls_kernel_size(monkeypatch):
    monkeypatch.delenv("DITHERSTAG_SIGMA_SPAN", raising=False)
    set_config(ProcessingConfig(sigma_span=2))
    assert GrayImage.gaussian_kernel(1).size == (3, 3)
    set_config(None)
    assert GrayImage.gaussian_kernel(1).size == (7, 7)
