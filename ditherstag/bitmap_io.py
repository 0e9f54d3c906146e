"""
Decoding and encoding of bitmaps at the host boundary.

The image core itself never touches compressed bytes. These helpers turn
files, URLs and compressed blobs into :class:`~ditherstag.image_data.ImageData`
and back into PNG data. The ``async`` variants run the blocking work in a
worker thread. Failures are raised to the caller, nothing is retried.
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
from urllib.request import urlopen

import filetype
import PIL.Image

from .config import SUPPORTED_IMAGE_FILETYPES, get_config
from .image_data import ImageData

logger = logging.getLogger(__name__)

HTTP_PROTOCOL_URL_HEADER = "http://"
HTTPS_PROTOCOL_URL_HEADER = "https://"

SUPPORTED_IMAGE_FILETYPE_SET = set(SUPPORTED_IMAGE_FILETYPES)
"Set of image file types which can be decoded"


def is_url(source: str) -> bool:
    """
    Returns if the source is a http or https URL
    """
    return source.startswith(HTTP_PROTOCOL_URL_HEADER) or source.startswith(
        HTTPS_PROTOCOL_URL_HEADER
    )


def _load_from_source(source: str) -> bytes:
    """
    Loads image data from a file path or URL.

    :param source: File path or URL
    :return: The loaded bytes
    """
    if is_url(source):
        with urlopen(source, timeout=get_config().url_timeout) as response:
            return response.read()
    if not os.path.exists(source):
        raise FileNotFoundError(f"Image file not found: {source}")
    with open(source, "rb") as f:
        return f.read()


def image_data_from_bytes(blob: bytes) -> ImageData:
    """
    Decodes a compressed image, e.g. a PNG or JPEG file's content.

    :param blob: The compressed data
    :return: The decoded RGBA bitmap

    Raises a ValueError if the data is not a supported or a damaged image
    """
    kind = filetype.guess(blob)
    if kind is None or kind.extension not in SUPPORTED_IMAGE_FILETYPE_SET:
        raise ValueError("Unsupported or unrecognized image data")
    try:
        with PIL.Image.open(io.BytesIO(blob)) as pil_image:
            pil_image.load()
            image_data = ImageData.from_pil(pil_image)
    except (PIL.UnidentifiedImageError, OSError) as e:
        raise ValueError("Invalid or damaged image data") from e
    logger.debug(
        "Decoded %s image of %dx%d", kind.extension, image_data.width, image_data.height
    )
    return image_data


def image_data_from_source(source: str) -> ImageData:
    """
    Loads and decodes an image from a file path or http(s) URL.

    :param source: The file path or URL
    :return: The decoded RGBA bitmap
    """
    return image_data_from_bytes(_load_from_source(source))


def image_data_to_png(image_data: ImageData, compress_level: int | None = None) -> bytes:
    """
    Encodes a bitmap as PNG.

    :param image_data: The bitmap
    :param compress_level: zlib level 0..9. Configured default if None.
    :return: The PNG data
    """
    if compress_level is None:
        compress_level = get_config().png_compress_level
    output_stream = io.BytesIO()
    image_data.to_pil().save(output_stream, format="png", compress_level=compress_level)
    data = output_stream.getvalue()
    logger.debug(
        "Encoded %dx%d image as %d bytes of PNG",
        image_data.width,
        image_data.height,
        len(data),
    )
    return data


async def load_image_data(source: str | bytes) -> ImageData:
    """
    Asynchronously loads and decodes an image.

    :param source: A file path, a http(s) URL or compressed image bytes
    :return: The decoded RGBA bitmap
    """
    if isinstance(source, (bytes, bytearray)):
        return await asyncio.to_thread(image_data_from_bytes, bytes(source))
    return await asyncio.to_thread(image_data_from_source, source)


async def encode_png(image_data: ImageData) -> bytes:
    """
    Asynchronously encodes a bitmap as PNG.
    """
    return await asyncio.to_thread(image_data_to_png, image_data)


__all__ = [
    "image_data_from_bytes",
    "image_data_from_source",
    "image_data_to_png",
    "load_image_data",
    "encode_png",
    "is_url",
]
