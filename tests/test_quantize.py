"""Tests for per-channel color quantization."""

from __future__ import annotations

import numpy as np
import pytest

from dotforge.buffer import PixelBuffer
from dotforge.errors import InvalidConfiguration
from dotforge.filters.quantize import QuantizationLevel, quantize, quantize_channels

LIMITED = [level for level in QuantizationLevel if level is not QuantizationLevel.UNLIMITED]


class TestQuantize:
    def test_level_4_rounds_200_to_170(self):
        buf = PixelBuffer(1, 1, [200, 200, 200, 200])
        out = quantize(buf, QuantizationLevel.L4)
        assert tuple(out.pixels[0, 0]) == (170, 170, 170, 200)

    def test_level_4_endpoints(self):
        buf = PixelBuffer(2, 1, [0, 42, 43, 255, 255, 127, 128, 0])
        out = quantize(buf, 4)
        assert out.pixels[0, 0].tolist() == [0, 0, 85, 255]
        assert out.pixels[0, 1].tolist() == [255, 85, 170, 0]

    def test_level_8_lands_on_nearest_byte(self):
        # 255 / 7 = 36.43; one step rounds to 36, two steps to 73.
        buf = PixelBuffer(1, 1, [40, 70, 255, 255])
        out = quantize(buf, QuantizationLevel.L8)
        assert out.pixels[0, 0].tolist() == [36, 73, 255, 255]

    def test_unlimited_is_identity(self, noisy_rgba):
        assert quantize(noisy_rgba, QuantizationLevel.UNLIMITED) is noisy_rgba

    @pytest.mark.parametrize("level", LIMITED)
    def test_idempotent(self, noisy_rgba, level):
        once = quantize(noisy_rgba, level)
        assert quantize(once, level) == once

    @pytest.mark.parametrize("level", LIMITED)
    def test_at_most_levels_values_per_channel(self, noisy_rgba, level):
        out = quantize(noisy_rgba, level)
        for c in range(3):
            assert len(np.unique(out.pixels[:, :, c])) <= level.levels

    def test_alpha_untouched_and_source_unchanged(self, noisy_rgba):
        before = noisy_rgba.to_array()
        out = quantize(noisy_rgba, 16)
        np.testing.assert_array_equal(out.pixels[:, :, 3], before[:, :, 3])
        np.testing.assert_array_equal(noisy_rgba.pixels, before)

    def test_quantize_channels_dtype(self):
        out = quantize_channels(np.array([0, 128, 255]), 16)
        assert out.dtype == np.uint8
        assert out.tolist() == [0, 136, 255]


class TestQuantizationLevel:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("16", QuantizationLevel.L16),
            (64, QuantizationLevel.L64),
            ("unlimited", QuantizationLevel.UNLIMITED),
            (None, QuantizationLevel.UNLIMITED),
            (QuantizationLevel.L4, QuantizationLevel.L4),
        ],
    )
    def test_parse(self, value, expected):
        assert QuantizationLevel.parse(value) is expected

    def test_parse_numpy_integer(self):
        assert QuantizationLevel.parse(np.int64(16)) is QuantizationLevel.L16

    @pytest.mark.parametrize("value", [1, 2, 5, "lots", True, 3.5])
    def test_parse_rejects_unknown(self, value):
        with pytest.raises(InvalidConfiguration):
            QuantizationLevel.parse(value)

    def test_factor(self):
        assert QuantizationLevel.L4.factor == 85.0
        assert QuantizationLevel.L16.factor == 17.0
        assert QuantizationLevel.UNLIMITED.factor is None
