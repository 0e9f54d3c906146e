"""Perceptual brightness of RGB colors.

Y = 0.21*R + 0.72*G + 0.07*B

- **n0f8**: normalized inputs 0.0-1.0, output 0.0-1.0
- **u8**: 8-bit inputs 0-255, output 0.0-1.0

Usage:
    from ditherstag.luminance import brightness_u8, brightness_rgba

    brightness_u8(255, 128, 0)   # ~0.572
    brightness_rgba(rgba_array)  # (N, 4) uint8 -> (N,) float32
"""
import numpy as np

LUMA_WEIGHTS = (0.21, 0.72, 0.07)


def brightness_n0f8(r: float, g: float, b: float) -> float:
    """Brightness of a normalized (0.0-1.0) RGB triple."""
    return LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b


def brightness_u8(r: int, g: int, b: int) -> float:
    """Brightness of an 8-bit RGB triple, normalized to 0.0-1.0."""
    return brightness_n0f8(r / 255, g / 255, b / 255)


def brightness_rgba(pixels: np.ndarray) -> np.ndarray:
    """Brightness of many RGBA pixels at once (alpha is ignored).

    Args:
        pixels: uint8 array whose last axis holds the 4 channels, or a flat
            interleaved RGBA array

    Returns:
        float32 array with one brightness value per pixel
    """
    pixels = np.asarray(pixels)
    if pixels.ndim == 1:
        if pixels.size % 4 != 0:
            raise ValueError(f"Expected interleaved RGBA samples, got {pixels.size}")
        pixels = pixels.reshape(-1, 4)
    if pixels.shape[-1] != 4:
        raise ValueError(f"Expected RGBA pixels, got shape {pixels.shape}")

    rgb = pixels[..., :3].astype(np.float64) / 255
    gray = (
        LUMA_WEIGHTS[0] * rgb[..., 0]
        + LUMA_WEIGHTS[1] * rgb[..., 1]
        + LUMA_WEIGHTS[2] * rgb[..., 2]
    )
    return gray.astype(np.float32)


__all__ = ['brightness_n0f8', 'brightness_u8', 'brightness_rgba', 'LUMA_WEIGHTS']
