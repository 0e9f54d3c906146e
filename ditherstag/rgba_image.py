"""
Implements :class:`RGBAImage`, the 4-channel 8-bit interchange image.
"""

from __future__ import annotations

from typing import ClassVar

from .image import Image
from .image_data import ImageData
from .pixel_format import PixelLayout


class RGBAImage(Image):
    """
    An image of interleaved R, G, B and A samples clamped to 0..255.

    This is the layout of the host's bitmap interchange structure, so
    conversion from and to :class:`~ditherstag.image_data.ImageData` is
    lossless.
    """

    LAYOUT: ClassVar[PixelLayout] = PixelLayout.RGBA8

    @classmethod
    def from_image_data(cls, image_data: ImageData) -> RGBAImage:
        """
        Creates an image from a copy of the bitmap's samples

        :param image_data: The source bitmap
        :return: The new image
        """
        return cls(image_data.data.copy(), image_data.width, image_data.height)

    def to_image_data(self) -> ImageData:
        """
        Returns the pixels as bitmap interchange structure. The structure
        holds its own copy of the samples.
        """
        return ImageData(width=self.width, height=self.height, data=self.data)


__all__ = ["RGBAImage"]
