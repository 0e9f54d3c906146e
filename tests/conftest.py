"""
Pytest fixtures for ditherstag tests
"""

import io

import numpy as np
import PIL.Image
import pytest

from ditherstag import ImageData, KernelCache, set_config


@pytest.fixture(autouse=True)
def reset_config():
    """
    Ensures every test starts and ends with the environment based
    configuration.
    """
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def kernel_cache() -> KernelCache:
    """
    Returns an isolated kernel cache
    """
    return KernelCache()


@pytest.fixture
def color_image_data() -> ImageData:
    """
    Returns a 3x2 bitmap with distinct, colorful pixels.
    """
    pixels = np.array(
        [
            [[255, 0, 0, 255], [0, 255, 0, 255], [0, 0, 255, 255]],
            [[10, 200, 30, 128], [255, 255, 255, 255], [0, 0, 0, 0]],
        ],
        dtype=np.uint8,
    )
    return ImageData(width=3, height=2, data=pixels)


@pytest.fixture
def png_data(color_image_data) -> bytes:
    """
    Returns the color test bitmap encoded as PNG with Pillow.
    """
    output = io.BytesIO()
    color_image_data.to_pil().save(output, format="png")
    return output.getvalue()
