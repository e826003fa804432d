from __future__ import annotations

"""
Nearest-colour quantizer.

Maps every pixel of a RasterImage to the palette index with the smallest
squared RGB distance. When the image declares alpha, index 0 is reserved:
fully transparent pixels map to it and nothing else may.

Unique colours are scored once and scattered back through the inverse
index, so the result is the same as a per-pixel scan in ascending index
order with strict '<' (ties go to the lowest index).
"""

from typing import Tuple

import numpy as np

from .constants import QUANTIZE_CHUNK_ROWS, TRANSPARENT_INDEX
from .core_types import IndexedRaster, Palette, RasterImage, U8Image, U8PaletteRows
from .errors import FormatError


def _unique_colours_with_inverse(rgb_rows: U8Image) -> Tuple[U8Image, np.ndarray]:
    """
    Unique RGB rows and inverse index.

    Returns:
      unique_rgb: uint8 [U,3]
      inverse_idx: int64 [N], unique_rgb[inverse_idx] reconstructs rgb_rows
    """
    if rgb_rows.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.uint8), np.zeros((0,), dtype=np.int64)
    unique_rgb, inverse_idx = np.unique(rgb_rows, axis=0, return_inverse=True)
    return (
        unique_rgb.astype(np.uint8, copy=False),
        inverse_idx.reshape(-1).astype(np.int64, copy=False),
    )


def nearest_palette_indices(
    src_rgb: U8Image, pal_rgb: U8PaletteRows, chunk: int = QUANTIZE_CHUNK_ROWS
) -> np.ndarray:
    """
    For each source RGB row, the index of the nearest palette row.

    Squared Euclidean distance over r,g,b. np.argmin returns the first
    minimum, so equal distances resolve to the lowest palette index.
    """
    num_src = src_rgb.shape[0]
    out = np.empty((num_src,), dtype=np.int32)
    if num_src == 0:
        return out
    if pal_rgb.shape[0] == 0:
        raise ValueError("empty palette search range")

    pal = pal_rgb.astype(np.int32)
    for start in range(0, num_src, chunk):
        block = src_rgb[start : start + chunk].astype(np.int32)
        diff = block[:, None, :] - pal[None, :, :]
        dist2 = np.sum(diff * diff, axis=2)
        out[start : start + chunk] = np.argmin(dist2, axis=1)
    return out


def search_start(image: RasterImage) -> int:
    """First palette index opaque pixels may use."""
    return TRANSPARENT_INDEX + 1 if image.has_alpha_channel else 0


def quantize(image: RasterImage, palette: Palette) -> IndexedRaster:
    """
    Map image to palette indices.

    Raises:
      FormatError: the image declares alpha but the palette has no entry
        besides the reserved transparent index.
    """
    first = search_start(image)
    if palette.ncolors <= first:
        raise FormatError(
            f"palette has {palette.ncolors} colour(s); an image with an alpha "
            "channel needs at least one entry after the transparent index 0"
        )

    flat = image.pixels.reshape(-1, 4)
    indices = np.full((flat.shape[0],), TRANSPARENT_INDEX, dtype=np.uint8)

    if image.has_alpha_channel:
        search_mask = flat[:, 3] != 0
    else:
        search_mask = np.ones((flat.shape[0],), dtype=bool)

    if np.any(search_mask):
        unique_rgb, inverse_idx = _unique_colours_with_inverse(flat[search_mask, :3])
        nearest = nearest_palette_indices(unique_rgb, palette.colours[first:]) + first
        indices[search_mask] = nearest.astype(np.uint8)[inverse_idx]

    return IndexedRaster(
        width=image.width,
        height=image.height,
        indices=indices.reshape(image.height, image.width),
    )


__all__ = ["nearest_palette_indices", "search_start", "quantize"]
