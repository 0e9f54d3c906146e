"""
Implements :class:`PixelBuffer`, the flat sample storage below every
:class:`~ditherstag.image.Image`.
"""

from __future__ import annotations

import numpy as np

from .pixel_format import PixelLayout


class PixelBuffer:
    """
    A flat, row-major and channel-interleaved run of samples.

    The pixel at (x, y) occupies the samples
    ``[(y * width + x) * channels, (y * width + x + 1) * channels)``.
    The length of :attr:`data` is always ``width * height * channels``.
    """

    __slots__ = ("data", "width", "height", "layout")

    def __init__(
        self,
        data: np.ndarray,
        width: int,
        height: int,
        layout: PixelLayout,
    ):
        """
        :param data: The samples. An array of the layout's dtype is
            referenced directly, anything else is converted (and thus copied)
            into the layout's sample domain.
        :param width: The width in pixels
        :param height: The height in pixels
        :param layout: The sample domain and channel count

        Raises a ValueError if the size is invalid or does not match the
        number of samples.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid buffer size {width}x{height}")
        if not isinstance(data, np.ndarray) or data.dtype != layout.dtype:
            data = layout.coerce(data)
        if data.ndim != 1:
            data = data.reshape(-1)
        expected = width * height * layout.band_count
        if data.size != expected:
            raise ValueError(
                f"Expected {expected} samples for a {width}x{height} "
                f"{layout.value} buffer, got {data.size}"
            )
        self.data: np.ndarray = data
        "The samples"
        self.width: int = int(width)
        "The width in pixels"
        self.height: int = int(height)
        "The height in pixels"
        self.layout: PixelLayout = layout
        "The sample domain"

    @classmethod
    def empty(cls, width: int, height: int, layout: PixelLayout) -> PixelBuffer:
        """
        Creates a zero-filled buffer

        :param width: The width in pixels
        :param height: The height in pixels
        :param layout: The sample domain
        :return: The new buffer
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid buffer size {width}x{height}")
        data = np.zeros(width * height * layout.band_count, dtype=layout.dtype)
        return cls(data, width, height, layout)

    @property
    def channels(self) -> int:
        return self.layout.band_count

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def pixel_index(self, x: int, y: int) -> int:
        """
        Returns the flat pixel index of an in-bounds coordinate
        """
        return y * self.width + x

    def pixel_for_index(self, index: int) -> tuple[int, int]:
        """
        Returns the (x, y) coordinate of a flat pixel index
        """
        return index % self.width, index // self.width

    def pixel(self, nth: int) -> np.ndarray:
        """
        Returns a view of the nth pixel's channel samples. Writing to the
        view writes to this buffer.

        :param nth: The flat pixel index
        :return: The view, one element per channel
        """
        if not 0 <= nth < self.pixel_count:
            raise IndexError(
                f"Pixel {nth} out of range for {self.pixel_count} pixels"
            )
        start = nth * self.channels
        return self.data[start : start + self.channels]

    def copy(self) -> PixelBuffer:
        """
        Returns an independent deep copy
        """
        return PixelBuffer(self.data.copy(), self.width, self.height, self.layout)

    def __len__(self):
        return self.data.size

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height} {self.layout.value})"


__all__ = ["PixelBuffer"]
