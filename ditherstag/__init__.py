"""
ditherstag - Typed pixel buffers, toroidal convolution and cached Gaussian
kernels for image processing
"""

from .pixel_format import PixelLayout
from .pixel_buffer import PixelBuffer
from .image import Image, Coordinate, PixelRecord, SampleInfo
from .image_data import ImageData
from .rgba_image import RGBAImage
from .gray_image import GrayImage
from .kernel_cache import KernelCache, KernelKey
from .luminance import brightness_n0f8, brightness_u8, brightness_rgba
from .config import ProcessingConfig, get_config, set_config
from .bitmap_io import (
    image_data_from_bytes,
    image_data_from_source,
    image_data_to_png,
    load_image_data,
    encode_png,
)

__all__ = [
    # Storage
    "PixelLayout",
    "PixelBuffer",
    # Images
    "Image",
    "Coordinate",
    "PixelRecord",
    "SampleInfo",
    "RGBAImage",
    "GrayImage",
    # Kernels
    "KernelCache",
    "KernelKey",
    # Luminance
    "brightness_n0f8",
    "brightness_u8",
    "brightness_rgba",
    # Bitmap boundary
    "ImageData",
    "image_data_from_bytes",
    "image_data_from_source",
    "image_data_to_png",
    "load_image_data",
    "encode_png",
    # Configuration
    "ProcessingConfig",
    "get_config",
    "set_config",
]

__version__ = "0.1.0"
