"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from dotforge.buffer import PixelBuffer


RED = (255, 0, 0, 255)


def make_buffer(arr) -> PixelBuffer:
    arr = np.asarray(arr, dtype=np.uint8)
    h, w, _ = arr.shape
    return PixelBuffer(w, h, arr)


@pytest.fixture
def red_4x4() -> PixelBuffer:
    return PixelBuffer.filled(4, 4, RED)


@pytest.fixture
def noisy_rgba() -> PixelBuffer:
    rng = np.random.default_rng(1234)
    arr = rng.integers(0, 256, size=(9, 13, 4), dtype=np.uint8)
    return make_buffer(arr)


@pytest.fixture
def split_8x8() -> PixelBuffer:
    """Left half black, right half white, half-transparent alpha."""
    arr = np.zeros((8, 8, 4), dtype=np.uint8)
    arr[:, 4:, :3] = 255
    arr[:, :, 3] = 128
    return make_buffer(arr)
