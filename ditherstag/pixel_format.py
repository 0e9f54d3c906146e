"""
Defines :class:`PixelLayout`, the sample domain and channel count of a pixel
buffer.
"""

from __future__ import annotations

from enum import Enum

import numpy as np


class PixelLayout(Enum):
    """The two pixel layouts ditherstag images can be stored in."""

    RGBA8 = "RGBA8"
    "uint8, 4 interleaved channels, values clamped to 0..255"
    GRAYf32 = "GRAYf32"
    "float32, 1 channel, nominally 0.0..1.0 but never clamped"

    @property
    def dtype(self) -> np.dtype:
        """Get numpy dtype of a single sample."""
        if self == PixelLayout.GRAYf32:
            return np.dtype(np.float32)
        return np.dtype(np.uint8)

    @property
    def band_count(self) -> int:
        """Number of samples per pixel."""
        return 4 if self == PixelLayout.RGBA8 else 1

    @property
    def band_names(self) -> list[str]:
        """Short names of the single bands."""
        return ["R", "G", "B", "A"] if self == PixelLayout.RGBA8 else ["G"]

    @property
    def is_float(self) -> bool:
        return self == PixelLayout.GRAYf32

    @property
    def max_value(self) -> int | float:
        """Nominal maximum value of a sample."""
        return 1.0 if self.is_float else 255

    def coerce(self, values) -> np.ndarray | np.generic:
        """
        Converts arbitrary numbers into this layout's sample domain.

        8-bit samples are rounded half to even and clamped to 0..255 (NaN
        becomes 0), float samples are only cast to float32.

        :param values: A scalar or array-like
        :return: The converted scalar or array
        """
        if self.is_float:
            return np.asarray(values, dtype=np.float64).astype(np.float32)
        values = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0)
        return np.clip(np.rint(values), 0, 255).astype(np.uint8)


__all__ = ["PixelLayout"]
