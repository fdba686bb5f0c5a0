"""Per-pixel filters applied before pixelation.

Exported API
------------
- quantize(buffer, level)
- detect_and_composite(buffer, strength)

Quantization levels
-------------------
4, 8, 16, 32, 64 levels per channel, or "unlimited" (no-op).

Outline strengths
-----------------
- "none"   : no-op
- "weak"   : Sobel magnitude > 60
- "normal" : Sobel magnitude > 40
- "strong" : Sobel magnitude > 20
"""
from __future__ import annotations

from .outline import OutlineStrength, detect_and_composite, edge_mask, gradient_magnitude
from .quantize import QuantizationLevel, quantize

__all__ = [
    "QuantizationLevel",
    "quantize",
    "OutlineStrength",
    "detect_and_composite",
    "edge_mask",
    "gradient_magnitude",
]
