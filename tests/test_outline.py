"""Tests for Sobel edge detection and outline compositing."""

from __future__ import annotations

import numpy as np
import pytest

from dotforge.buffer import PixelBuffer
from dotforge.errors import InvalidConfiguration
from dotforge.filters.outline import (
    OutlineStrength,
    detect_and_composite,
    edge_mask,
    gradient_magnitude,
    luminance,
)

ACTIVE = [OutlineStrength.WEAK, OutlineStrength.NORMAL, OutlineStrength.STRONG]


def gray_step(left: int, right: int, width: int = 8, height: int = 6) -> PixelBuffer:
    arr = np.full((height, width, 4), 255, dtype=np.uint8)
    arr[:, : width // 2, :3] = left
    arr[:, width // 2 :, :3] = right
    return PixelBuffer.from_array(arr)


class TestLuminance:
    def test_weights(self):
        buf = PixelBuffer(3, 1, [100, 0, 0, 0, 0, 100, 0, 0, 0, 0, 100, 0])
        np.testing.assert_allclose(luminance(buf)[0], [29.9, 58.7, 11.4])


class TestGradientMagnitude:
    def test_border_ring_is_zero(self, noisy_rgba):
        mag = gradient_magnitude(noisy_rgba)
        assert mag.shape == (noisy_rgba.height, noisy_rgba.width)
        assert not mag[0, :].any()
        assert not mag[-1, :].any()
        assert not mag[:, 0].any()
        assert not mag[:, -1].any()

    def test_uniform_image_has_no_gradient(self):
        buf = PixelBuffer.filled(7, 5, (12, 200, 99, 255))
        assert not gradient_magnitude(buf).any()

    def test_saturates_at_255(self, split_8x8):
        mag = gradient_magnitude(split_8x8)
        # Black to white step: |Gx| = 4 * 255, well above the 8-bit ceiling.
        assert mag.dtype == np.uint8
        assert np.all(mag[1:-1, 3:5] == 255)
        assert not mag[1:-1, 1:3].any()
        assert not mag[1:-1, 5:7].any()

    def test_tiny_images_have_no_interior(self):
        buf = PixelBuffer(2, 2, np.arange(16, dtype=np.uint8))
        assert not gradient_magnitude(buf).any()


class TestEdgeMask:
    def test_threshold_is_strict(self):
        # A step of 10 gray levels gives a magnitude of exactly 40.
        buf = gray_step(100, 110)
        assert gradient_magnitude(buf).max() == 40
        assert edge_mask(buf, OutlineStrength.STRONG).any()
        assert not edge_mask(buf, OutlineStrength.NORMAL).any()
        assert not edge_mask(buf, OutlineStrength.WEAK).any()

    def test_none_is_empty(self, split_8x8):
        mask = edge_mask(split_8x8, OutlineStrength.NONE)
        assert mask.shape == (8, 8)
        assert not mask.any()

    def test_thresholds(self):
        assert OutlineStrength.WEAK.threshold == 60
        assert OutlineStrength.NORMAL.threshold == 40
        assert OutlineStrength.STRONG.threshold == 20
        assert OutlineStrength.NONE.threshold is None


class TestDetectAndComposite:
    def test_none_is_identity(self, noisy_rgba):
        assert detect_and_composite(noisy_rgba, OutlineStrength.NONE) is noisy_rgba

    @pytest.mark.parametrize("strength", ACTIVE)
    def test_uniform_image_unchanged(self, strength):
        buf = PixelBuffer.filled(6, 6, (40, 80, 120, 200))
        assert detect_and_composite(buf, strength) == buf

    @pytest.mark.parametrize("strength", ACTIVE)
    def test_border_never_modified(self, noisy_rgba, strength):
        out = detect_and_composite(noisy_rgba, strength)
        src = noisy_rgba.pixels
        np.testing.assert_array_equal(out.pixels[0], src[0])
        np.testing.assert_array_equal(out.pixels[-1], src[-1])
        np.testing.assert_array_equal(out.pixels[:, 0], src[:, 0])
        np.testing.assert_array_equal(out.pixels[:, -1], src[:, -1])

    def test_edges_painted_black_alpha_kept(self, split_8x8):
        out = detect_and_composite(split_8x8, "normal")
        edge = out.pixels[1:-1, 3:5]
        assert not edge[:, :, :3].any()
        assert np.all(edge[:, :, 3] == 128)
        # Everything off the edge columns is untouched.
        np.testing.assert_array_equal(out.pixels[:, :3], split_8x8.pixels[:, :3])
        np.testing.assert_array_equal(out.pixels[:, 5:], split_8x8.pixels[:, 5:])

    def test_source_not_modified(self, split_8x8):
        before = split_8x8.to_array()
        detect_and_composite(split_8x8, OutlineStrength.STRONG)
        np.testing.assert_array_equal(split_8x8.pixels, before)

    def test_unknown_strength(self, split_8x8):
        with pytest.raises(InvalidConfiguration):
            detect_and_composite(split_8x8, "extreme")
