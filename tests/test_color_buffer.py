"""Tests for the 8-bit ColorBuffer."""

import numpy as np
import pytest

from pathtracer.core.color_buffer import BYTES_PER_COLOR, ColorBuffer
from pathtracer.core.ray import vec3


class TestColorBuffer:
    """Tests for ColorBuffer reads, writes and exports."""

    def test_new_buffer_is_black(self):
        buffer = ColorBuffer(4, 3)
        assert buffer.to_bytes() == bytes(4 * 3 * BYTES_PER_COLOR)

    @pytest.mark.parametrize("size", [(0, 3), (4, 0), (-1, 2)])
    def test_non_positive_size_rejected(self, size):
        with pytest.raises(ValueError):
            ColorBuffer(*size)

    def test_write_scales_and_truncates(self):
        buffer = ColorBuffer(2, 2)
        buffer.write(1, 0, vec3(1.0, 0.5, 0.0))
        # 0.5 * 255 = 127.5 truncates to 127
        assert buffer.read(1, 0) == (255, 127, 0)

    def test_write_clamps_out_of_range(self):
        buffer = ColorBuffer(1, 1)
        buffer.write(0, 0, vec3(2.0, -1.0, 0.999))
        assert buffer.read(0, 0) == (255, 0, 254)

    @pytest.mark.parametrize("coords", [(2, 0), (0, 2), (-1, 0)])
    def test_out_of_bounds_rejected(self, coords):
        buffer = ColorBuffer(2, 2)
        with pytest.raises(IndexError, match="outside the 2x2 buffer"):
            buffer.write(*coords, vec3(1.0, 1.0, 1.0))
        with pytest.raises(IndexError):
            buffer.read(*coords)

    def test_bytes_are_row_major_from_bottom_row(self):
        buffer = ColorBuffer(2, 2)
        buffer.write(1, 0, vec3(1.0, 0.0, 0.0))
        buffer.write(0, 1, vec3(0.0, 0.0, 1.0))

        data = buffer.to_bytes()

        # Row 0 first: pixel (1, 0) occupies bytes 3..5
        assert data[3:6] == bytes([255, 0, 0])
        # Row 1 starts at byte 6: pixel (0, 1)
        assert data[6:9] == bytes([0, 0, 255])

    def test_to_array_is_a_copy(self):
        buffer = ColorBuffer(2, 2)
        array = buffer.to_array()
        array[0, 0] = 255
        assert buffer.read(0, 0) == (0, 0, 0)
        assert array.shape == (2, 2, 3)
        assert array.dtype == np.uint8

    def test_image_array_puts_bottom_row_last(self):
        buffer = ColorBuffer(3, 2)
        buffer.write(0, 0, vec3(1.0, 1.0, 1.0))

        image = buffer.to_image_array()

        assert tuple(image[1, 0]) == (255, 255, 255)
        assert tuple(image[0, 0]) == (0, 0, 0)
        assert image.flags["C_CONTIGUOUS"]

    def test_image_array_without_flip(self):
        buffer = ColorBuffer(3, 2)
        buffer.write(0, 0, vec3(1.0, 1.0, 1.0))
        assert tuple(buffer.to_image_array(flip=False)[0, 0]) == (255, 255, 255)

    def test_repr(self):
        assert repr(ColorBuffer(4, 3)) == "ColorBuffer(width=4, height=3)"
