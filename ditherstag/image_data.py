# ditherstag - Bitmap interchange
"""
The bitmap interchange structure exchanged with the host application.

An :class:`ImageData` is a width, a height and a flat, row-major RGBA 8-bit
sample run of length ``width * height * 4``. Samples are always copied in
and copied out, so no live reference into a host structure is retained.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import PIL.Image
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

RGBA_CHANNELS = 4


class ImageData(BaseModel):
    """A decoded RGBA bitmap.

    Usage::

        data = ImageData(width=2, height=1, data=[255, 0, 0, 255, 0, 0, 255, 255])
        pil_image = data.to_pil()
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    data: np.ndarray

    @field_validator("data", mode="before")
    @classmethod
    def copy_samples(cls, value: Any) -> np.ndarray:
        """Copies the samples into a flat uint8 array, clamping if needed."""
        if isinstance(value, (bytes, bytearray, memoryview)):
            return np.frombuffer(value, dtype=np.uint8).copy()
        array = np.asarray(value)
        if array.dtype == np.uint8:
            return array.reshape(-1).copy()
        array = np.nan_to_num(array.astype(np.float64), nan=0.0)
        return np.clip(np.rint(array), 0, 255).astype(np.uint8).reshape(-1)

    @model_validator(mode="after")
    def check_length(self) -> ImageData:
        expected = self.width * self.height * RGBA_CHANNELS
        if self.data.size != expected:
            raise ValueError(
                f"Expected {expected} RGBA samples for {self.width}x{self.height}, "
                f"got {self.data.size}"
            )
        return self

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_pil(cls, image: PIL.Image.Image) -> ImageData:
        """
        Creates the interchange structure from a PIL image of any mode

        :param image: The PIL image
        :return: The RGBA bitmap
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        # noinspection PyTypeChecker
        return cls(width=image.width, height=image.height, data=np.array(image))

    def to_pil(self) -> PIL.Image.Image:
        """
        Converts the bitmap to an independent RGBA PIL image
        """
        pixels = self.data.reshape(self.height, self.width, RGBA_CHANNELS).copy()
        return PIL.Image.fromarray(pixels)

    def __eq__(self, other):
        if not isinstance(other, ImageData):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.data, other.data))


__all__ = ["ImageData", "RGBA_CHANNELS"]
