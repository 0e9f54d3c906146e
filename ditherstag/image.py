"""
Implements the class :class:`.Image`, ditherstag's coordinate-aware view on a
:class:`~ditherstag.pixel_buffer.PixelBuffer`.

An image adds no storage of its own. It provides wrapped and clamped
coordinate access, row-major iteration and a toroidal 2D convolution on top
of the flat buffer.
"""

from __future__ import annotations

import logging
from typing import Callable, ClassVar, Iterator, NamedTuple

import numpy as np

from .pixel_buffer import PixelBuffer
from .pixel_format import PixelLayout

logger = logging.getLogger(__name__)


class Coordinate(NamedTuple):
    """A pixel coordinate"""

    x: int
    y: int


class PixelRecord(NamedTuple):
    """A pixel coordinate together with a view of the pixel's samples"""

    x: int
    y: int
    pixel: np.ndarray


class SampleInfo(NamedTuple):
    """Position of a single sample, passed to :meth:`Image.map_self`"""

    x: int
    y: int
    index: int
    "The flat sample index"


def _clamp(low: int, value: int, high: int) -> int:
    if value < low:
        return low
    if value > high:
        return high
    return value


class Image:
    """
    An image backed by a flat pixel buffer.

    The layout, and thus the sample domain and channel count, is either
    passed explicitly or fixed by a subclass via :attr:`LAYOUT`, see
    :class:`~ditherstag.rgba_image.RGBAImage` and
    :class:`~ditherstag.gray_image.GrayImage`.
    """

    LAYOUT: ClassVar[PixelLayout | None] = None
    "The layout of all instances of a subclass. None for the generic image."

    def __init__(
        self,
        data: np.ndarray,
        width: int,
        height: int,
        layout: PixelLayout | None = None,
    ):
        """
        :param data: The flat, row-major and channel-interleaved samples.
            Arrays of the layout's dtype are referenced, not copied.
        :param width: The width in pixels
        :param height: The height in pixels
        :param layout: The pixel layout. Defaults to the class' LAYOUT.

        Raises a ValueError if the layout is missing or conflicts with the
        class' layout or if the sample count does not match the size.
        """
        if layout is None:
            layout = self.LAYOUT
        if layout is None:
            raise ValueError("No pixel layout provided")
        if self.LAYOUT is not None and layout != self.LAYOUT:
            raise ValueError(
                f"{type(self).__name__} requires layout {self.LAYOUT.value}, "
                f"got {layout.value}"
            )
        self.buffer = PixelBuffer(data, width, height, layout)
        "The storage"

    @classmethod
    def empty(
        cls, width: int, height: int, layout: PixelLayout | None = None
    ) -> Image:
        """
        Creates a zero-filled image

        :param width: The width in pixels, at least 1
        :param height: The height in pixels, at least 1
        :param layout: The layout. Defaults to the class' LAYOUT.
        :return: The new image
        """
        layout = layout if layout is not None else cls.LAYOUT
        if layout is None:
            raise ValueError("No pixel layout provided")
        buffer = PixelBuffer.empty(width, height, layout)
        return cls._from_buffer(buffer)

    @classmethod
    def _from_buffer(cls, buffer: PixelBuffer) -> Image:
        return cls(buffer.data, buffer.width, buffer.height, buffer.layout)

    # ---- storage shortcuts ----

    @property
    def data(self) -> np.ndarray:
        """The flat sample array"""
        return self.buffer.data

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def layout(self) -> PixelLayout:
        return self.buffer.layout

    @property
    def channels(self) -> int:
        """The number of samples per pixel"""
        return self.buffer.channels

    @property
    def size(self) -> tuple[int, int]:
        """
        Returns the image's size in pixels

        :return: The size as tuple (width, height)
        """
        return self.width, self.height

    def __len__(self):
        return self.buffer.pixel_count

    # ---- index arithmetic ----

    def pixel_index(self, x: int, y: int) -> int:
        """
        Returns the flat index of an in-bounds pixel coordinate
        """
        return self.buffer.pixel_index(x, y)

    def pixel_for_index(self, index: int) -> Coordinate:
        """
        Inverse of :meth:`pixel_index`
        """
        return Coordinate(*self.buffer.pixel_for_index(index))

    def pixel(self, nth: int) -> np.ndarray:
        """
        Returns a zero-copy view of the nth pixel's samples.

        :param nth: The flat pixel index in ``[0, width * height)``
        :return: An array of length :attr:`channels` sharing this image's
            memory
        """
        return self.buffer.pixel(nth)

    def wrap_coordinates(self, x: int, y: int) -> Coordinate:
        """
        Wraps a coordinate around the image edges as if the image tiled the
        plane, e.g. x=-1 becomes width-1.
        """
        # Python's % has the sign of the divisor, so negative inputs land in range
        return Coordinate(x % self.width, y % self.height)

    def _resolve(self, x: int, y: int, wrap: bool) -> Coordinate:
        if wrap:
            return self.wrap_coordinates(x, y)
        return Coordinate(
            _clamp(0, x, self.width - 1), _clamp(0, y, self.height - 1)
        )

    def pixel_at(self, x: int, y: int, wrap: bool = False) -> np.ndarray:
        """
        Returns a view of the pixel at given coordinate.

        :param x: The x coordinate
        :param y: The y coordinate
        :param wrap: If set coordinates outside of the image wrap around the
            edges, otherwise they are clamped to the nearest edge pixel.
        :return: The pixel view
        """
        x, y = self._resolve(x, y, wrap)
        return self.pixel(self.pixel_index(x, y))

    def _sample_index(self, x: int, y: int, channel: int, wrap: bool) -> int:
        if not 0 <= channel < self.channels:
            raise IndexError(
                f"Channel {channel} out of range for {self.layout.value}"
            )
        x, y = self._resolve(x, y, wrap)
        return self.pixel_index(x, y) * self.channels + channel

    def value_at(
        self, x: int, y: int, channel: int = 0, wrap: bool = False
    ) -> float | int:
        """
        Returns a single sample. Coordinates are wrapped or clamped like in
        :meth:`pixel_at`.

        :param x: The x coordinate
        :param y: The y coordinate
        :param channel: The channel, 0 by default. Channels outside of the
            layout's band count raise an IndexError.
        :param wrap: Wrap instead of clamp
        :return: The sample value
        """
        return self.data[self._sample_index(x, y, channel, wrap)].item()

    def set_value_at(
        self, x: int, y: int, value, channel: int = 0, wrap: bool = False
    ) -> None:
        """
        Writes a single sample. 8-bit layouts round and clamp the value.

        :param x: The x coordinate
        :param y: The y coordinate
        :param value: The new value
        :param channel: The channel, 0 by default
        :param wrap: Wrap instead of clamp
        """
        self.data[self._sample_index(x, y, channel, wrap)] = self.layout.coerce(
            value
        )

    def is_in_bounds(self, x: int, y: int) -> bool:
        """
        Returns if the coordinate lies within the image, without wrapping or
        clamping.
        """
        return 0 <= x < self.width and 0 <= y < self.height

    # ---- iteration ----

    def all_coordinates(self) -> Iterator[Coordinate]:
        """
        Yields all coordinates in row-major order (y outer, x inner).
        """
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    def all_pixels(self) -> Iterator[PixelRecord]:
        """
        Yields all pixels in row-major order together with their coordinate.
        """
        for x, y in self.all_coordinates():
            yield PixelRecord(x, y, self.pixel_at(x, y))

    def channel(self, index: int = 0) -> np.ndarray:
        """
        Returns a (height, width) view of a single channel
        """
        if not 0 <= index < self.channels:
            raise IndexError(f"Channel {index} out of range for {self.layout.value}")
        return self.data[index :: self.channels].reshape(self.height, self.width)

    def to_array(self) -> np.ndarray:
        """
        Returns a copy of the pixels shaped (height, width) for single channel
        and (height, width, channels) for multi channel layouts.
        """
        if self.channels == 1:
            return self.data.reshape(self.height, self.width).copy()
        return self.data.reshape(self.height, self.width, self.channels).copy()

    # ---- transformations ----

    def copy(self) -> Image:
        """
        Creates an independent deep copy of this image.

        :return: The copy, of the same class
        """
        return self._from_buffer(self.buffer.copy())

    def map_self(self, func: Callable[[float, SampleInfo], float]) -> Image:
        """
        Replaces every sample with ``func(value, SampleInfo(x, y, index))``,
        visiting samples in flat index order. Each result is written before
        the next sample is visited.

        x and y are the coordinates of the pixel owning the sample
        (``index // channels``). Historically the raw sample index was
        converted instead, which yields different coordinates for
        multi channel layouts.

        :param func: The mapping function
        :return: Self
        """
        data = self.data
        channels = self.channels
        coerce = self.layout.coerce
        for index in range(data.size):
            x, y = self.buffer.pixel_for_index(index // channels)
            data[index] = coerce(func(data[index].item(), SampleInfo(x, y, index)))
        return self

    def convolve(self, kernel: Image) -> Image:
        """
        Convolves channel 0 of this image with a kernel.

        Every output sample is the sum over all kernel coordinates q of
        ``value_at(p + q - center, wrap=True) * kernel.value_at(q)``, so the
        image is sampled toroidally at its edges. The remaining channels of
        the result are copied unchanged.

        :param kernel: An image with odd width and height. Only its channel
            0 is used.
        :return: The new image, self remains unmodified
        """
        if kernel.width % 2 != 1 or kernel.height % 2 != 1:
            raise ValueError("Convolution matrix must have odd size")
        logger.debug(
            "Convolving %dx%d image with %dx%d kernel",
            self.width,
            self.height,
            kernel.width,
            kernel.height,
        )
        result = self.copy()
        offset_x = kernel.width // 2
        offset_y = kernel.height // 2
        source = self.channel(0).astype(np.float64)
        weights = kernel.channel(0).astype(np.float64)
        total = np.zeros_like(source)
        for qy in range(kernel.height):
            for qx in range(kernel.width):
                # rolled[y, x] == source[(y + qy - offset_y) % h, (x + qx - offset_x) % w]
                rolled = np.roll(source, (offset_y - qy, offset_x - qx), axis=(0, 1))
                total += rolled * weights[qy, qx]
        result.data[0 :: result.channels] = self.layout.coerce(total.reshape(-1))
        return result

    # ---- queries ----

    def max(self) -> PixelRecord | None:
        """
        Returns the pixel with the largest channel 0 value. The first
        occurrence wins ties.

        :return: The pixel record or None if the image has no pixels
        """
        best = None
        for record in self.all_pixels():
            if best is None or best.pixel[0] < record.pixel[0]:
                best = record
        return best

    def min(self) -> PixelRecord | None:
        """
        Returns the pixel with the smallest channel 0 value. The first
        occurrence wins ties.

        :return: The pixel record or None if the image has no pixels
        """
        best = None
        for record in self.all_pixels():
            if best is None or best.pixel[0] > record.pixel[0]:
                best = record
        return best

    def random_pixel(self, rng: np.random.Generator | None = None) -> np.ndarray:
        """
        Returns a view of a uniformly chosen pixel.

        :param rng: Optional random generator, e.g. for reproducible tests
        :return: The pixel view
        """
        if rng is None:
            rng = np.random.default_rng()
        return self.pixel(int(rng.integers(0, len(self))))

    def __eq__(self, other):
        if not isinstance(other, Image):
            return NotImplemented
        return (
            self.layout == other.layout
            and self.size == other.size
            and bool(np.array_equal(self.data, other.data))
        )

    def __str__(self):
        return (
            f"{type(self).__name__} ({self.width}x{self.height} "
            f"{''.join(self.layout.band_names)})"
        )


__all__ = ["Image", "Coordinate", "PixelRecord", "SampleInfo"]
