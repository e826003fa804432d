from __future__ import annotations

"""
Alpha mask policy.

A binary alpha channel (every pixel 0 or 255) is already carried losslessly
by the reserved transparent index, so a separate mask is only needed when
some pixel is partially transparent.
"""

from typing import Tuple

import numpy as np

from .core_types import MaskRaster, RasterImage


def needs_mask(image: RasterImage) -> bool:
    """True iff at least one alpha value is strictly between 0 and 255."""
    alpha = image.alpha
    return bool(np.any((alpha != 0) & (alpha != 255)))


def build_mask(image: RasterImage) -> MaskRaster:
    """Copy the alpha channel verbatim into a grayscale raster."""
    return MaskRaster(
        width=image.width,
        height=image.height,
        samples=np.array(image.alpha, dtype=np.uint8, copy=True),
    )


def alpha_summary(image: RasterImage) -> Tuple[int, int, int]:
    """Pixel counts as (opaque, transparent, partial)."""
    alpha = image.alpha
    opaque = int(np.count_nonzero(alpha == 255))
    transparent = int(np.count_nonzero(alpha == 0))
    return opaque, transparent, int(alpha.size) - opaque - transparent


__all__ = ["needs_mask", "build_mask", "alpha_summary"]
