"""
Implements :class:`GrayImage`, the single channel float image used for
luminance processing and as convolution kernel.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import ClassVar

import numpy as np

from .config import get_config
from .image import Image
from .image_data import ImageData, RGBA_CHANNELS
from .kernel_cache import KernelCache, KernelKey
from .luminance import brightness_rgba
from .pixel_format import PixelLayout
from .rgba_image import RGBAImage

logger = logging.getLogger(__name__)


def next_odd(value: int) -> int:
    """
    Returns value if it is odd, otherwise value + 1
    """
    return value + 1 if value % 2 == 0 else value


def default_kernel_size(std_dev: float) -> int:
    """
    Returns the smallest odd size covering the configured number of standard
    deviations, by default 6 (+/- 3 sigma around the centre pixel).

    :param std_dev: The standard deviation in pixels
    :return: The kernel width and height
    """
    return next_odd(math.ceil(get_config().sigma_span * std_dev))


class GrayImage(Image):
    """
    A grayscale image of float32 samples, nominally in the range 0.0 to 1.0.
    Samples are never clamped, so intermediate results such as convolution
    kernels or sums may leave that range.
    """

    LAYOUT: ClassVar[PixelLayout] = PixelLayout.GRAYf32

    @classmethod
    def from_image_data(cls, image_data: ImageData) -> GrayImage:
        """
        Creates a grayscale image from a bitmap using the perceptual
        brightness of each pixel. The alpha channel is ignored.

        :param image_data: The source bitmap
        :return: The new image
        """
        source = RGBAImage.from_image_data(image_data)
        gray = brightness_rgba(source.data)
        return cls(gray, source.width, source.height)

    def to_image_data(self) -> ImageData:
        """
        Expands every sample to an opaque gray RGBA pixel with
        R = G = B = round(sample * 255), clamped to 0..255.

        The conversion is lossy, all color information was already dropped
        by :meth:`from_image_data`.
        """
        scaled = np.nan_to_num(self.data.astype(np.float64) * 255, nan=0.0)
        gray = np.clip(np.rint(scaled), 0, 255).astype(np.uint8)
        rgba = np.empty((gray.size, RGBA_CHANNELS), dtype=np.uint8)
        rgba[:, 0] = gray
        rgba[:, 1] = gray
        rgba[:, 2] = gray
        rgba[:, 3] = 255
        return ImageData(width=self.width, height=self.height, data=rgba)

    def normalize_self(self) -> GrayImage:
        """
        Divides every sample by the sum of all samples so they add up to 1.

        :return: Self
        :raises ZeroDivisionError: If the samples sum up to zero. The image
            is left unchanged in that case.
        """
        total = float(np.sum(self.data, dtype=np.float64))
        if total == 0.0:
            raise ZeroDivisionError("Can not normalize an image whose samples sum to 0")
        self.data[:] = (self.data.astype(np.float64) / total).astype(np.float32)
        return self

    @classmethod
    def gaussian_kernel(
        cls,
        std_dev: float,
        width: int | None = None,
        height: int | None = None,
        cache: KernelCache | None = None,
    ) -> GrayImage:
        """
        Creates a 2D Gaussian kernel.

        Each sample holds the density
        ``exp(-((x - cx)^2 + (y - cy)^2) / (2 * std_dev^2)) / (2 * pi * std_dev^2)``
        with ``cx = width // 2`` and ``cy = height // 2``. The kernel is not
        normalized, see :meth:`normalize_self`.

        :param std_dev: The standard deviation in pixels, greater than 0
        :param width: The kernel width. By default the smallest odd number
            of pixels covering +/- 3 standard deviations.
        :param height: The kernel height, same default as width
        :param cache: Optional cache to look the kernel up in and store it to
        :return: A kernel owned by the caller
        """
        if std_dev <= 0:
            raise ValueError(f"Standard deviation must be positive, got {std_dev}")
        if width is None:
            width = default_kernel_size(std_dev)
        if height is None:
            height = default_kernel_size(std_dev)
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"Kernel {name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"Kernel {name} must be positive, got {value}")
        width, height = int(width), int(height)
        key = KernelKey(float(std_dev), width, height)
        if cache is not None:
            kernel = cache.get(key)
            if kernel is not None:
                return kernel

        if width != height:
            logger.info(
                "Creating non-square %dx%d Gaussian kernel centered at (%d, %d)",
                width,
                height,
                width // 2,
                height // 2,
            )
        variance = std_dev**2
        factor = 1 / (2 * math.pi * variance)
        ys, xs = np.mgrid[0:height, 0:width]
        distance = (xs - width // 2) ** 2 + (ys - height // 2) ** 2
        density = factor * np.exp(-distance / (2 * variance))
        kernel = cls(density.reshape(-1).astype(np.float32), width, height)

        if cache is not None:
            cache.put(key, kernel)
        return kernel

    def gaussian_blur(
        self,
        std_dev: float,
        kernel_width: int | None = None,
        kernel_height: int | None = None,
        cache: KernelCache | None = None,
        normalize: bool = False,
    ) -> GrayImage:
        """
        Blurs the image with a Gaussian kernel, sampling across the image
        edges toroidally.

        :param std_dev: The standard deviation in pixels
        :param kernel_width: The kernel width, see :meth:`gaussian_kernel`
        :param kernel_height: The kernel height, see :meth:`gaussian_kernel`
        :param cache: Optional kernel cache
        :param normalize: If set the kernel is normalized to a sum of 1 first,
            which preserves the overall brightness. By default the raw
            density kernel is used, which darkens the image slightly.
        :return: The blurred image
        """
        kernel = self.gaussian_kernel(
            std_dev, width=kernel_width, height=kernel_height, cache=cache
        )
        if normalize:
            kernel.normalize_self()
        return self.convolve(kernel)


__all__ = ["GrayImage", "next_odd", "default_kernel_size"]
