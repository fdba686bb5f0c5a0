"""Utility functions for dotforge.

Modules:
- loader: Pillow <-> PixelBuffer conversion for files and bytes.
- pixelate: Block pixelation via per-block sampling then block upscale.
- resize: Output canvas sizing.
"""
from .loader import decode_image, encode_image, load_image, save_image
from .pixelate import SamplingStrategy, downscale, pixelate, upscale_blocks
from .resize import fit_output_size

__all__ = [
    "decode_image",
    "encode_image",
    "load_image",
    "save_image",
    "SamplingStrategy",
    "downscale",
    "pixelate",
    "upscale_blocks",
    "fit_output_size",
]
