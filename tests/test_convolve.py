"""
Tests the toroidal 2D convolution of images
"""

import numpy as np
import pytest

from ditherstag import GrayImage, RGBAImage


def _kernel(rows) -> GrayImage:
    rows = np.array(rows, dtype=np.float32)
    return GrayImage(rows.reshape(-1), rows.shape[1], rows.shape[0])


class TestConvolve:
    """Test convolution against hand computed results."""

    def test_identity_kernel(self):
        """A 1x1 kernel holding 1 leaves the image unchanged."""
        rng = np.random.default_rng(7)
        image = GrayImage(rng.random(20, dtype=np.float32), 5, 4)
        result = image.convolve(_kernel([[1]]))
        assert result == image
        assert result is not image

    def test_centered_identity_kernel(self):
        image = GrayImage(np.arange(12, dtype=np.float32), 4, 3)
        kernel = _kernel([[0, 0, 0], [0, 1, 0], [0, 0, 0]])
        assert np.array_equal(image.convolve(kernel).data, image.data)

    def test_wraps_around_right_edge(self):
        """Sampling one step beyond the right edge reads column 0."""
        image = GrayImage(np.array([1, 2, 3, 4], dtype=np.float32), 2, 2)
        kernel = _kernel([[0, 0, 0], [0, 0, 1], [0, 0, 0]])
        result = image.convolve(kernel)
        assert result.data.tolist() == [2, 1, 4, 3]

    def test_wraps_around_top_edge(self):
        image = GrayImage(np.array([1, 2, 3, 4, 5, 6], dtype=np.float32), 2, 3)
        kernel = _kernel([[0, 1, 0], [0, 0, 0], [0, 0, 0]])
        result = image.convolve(kernel)
        # each output reads the row above, row 0 reads the last row
        assert result.data.tolist() == [5, 6, 1, 2, 3, 4]

    def test_weighted_sum(self):
        image = GrayImage(np.arange(9, dtype=np.float32), 3, 3)
        kernel = _kernel([[0.5, 1, 0.25]])
        result = image.convolve(kernel)
        expected = []
        for y in range(3):
            for x in range(3):
                left = image.value_at(x - 1, y, wrap=True)
                right = image.value_at(x + 1, y, wrap=True)
                center = image.value_at(x, y)
                expected.append(0.5 * left + center + 0.25 * right)
        assert np.allclose(result.data, expected)

    def test_kernel_larger_than_image(self):
        """Kernels may exceed the image, sampling wraps repeatedly."""
        image = GrayImage(np.array([1, 3], dtype=np.float32), 2, 1)
        kernel = _kernel([[1, 1, 1, 1, 1]])
        result = image.convolve(kernel)
        # x=0 reads columns -2..2 -> 1, 3, 1, 3, 1
        assert result.data.tolist() == [9, 11]

    def test_source_unmodified(self):
        image = GrayImage(np.array([1, 2, 3, 4], dtype=np.float32), 2, 2)
        before = image.copy()
        image.convolve(_kernel([[1, 1, 1]]))
        assert image == before

    @pytest.mark.parametrize("width, height", [(2, 1), (1, 2), (2, 2), (4, 3)])
    def test_even_kernel_rejected(self, width, height):
        image = GrayImage.empty(3, 3)
        with pytest.raises(ValueError, match="odd size"):
            image.convolve(GrayImage.empty(width, height))

    def test_rgba_only_channel_zero(self):
        """On RGBA images only the red channel is convolved and clamped."""
        data = np.array(
            [200, 1, 2, 255, 100, 3, 4, 255, 50, 5, 6, 128], dtype=np.uint8
        )
        image = RGBAImage(data, 3, 1)
        result = image.convolve(_kernel([[1, 1, 0]]))
        assert isinstance(result, RGBAImage)
        # red: x + left neighbour, wrapped and clamped to 255
        assert result.data[0::4].tolist() == [250, 255, 150]
        assert np.array_equal(result.data[1::4], data[1::4])
        assert np.array_equal(result.data[3::4], data[3::4])
