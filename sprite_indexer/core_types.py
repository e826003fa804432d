from __future__ import annotations

"""
Core type aliases and the raster value objects passed between stages.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .constants import MAX_PALETTE_COLOURS

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3) or (H, W, 4)
U8Mask = NDArray[np.uint8]  # (H, W)
U8Indices = NDArray[np.uint8]  # (H, W) palette indices
U8PaletteRows = NDArray[np.uint8]  # (P, 3)


def _frozen(arr: np.ndarray) -> np.ndarray:
    """Return a C-contiguous read-only copy-or-view of arr."""
    out = np.ascontiguousarray(arr)
    if out is arr:
        out = arr.view()
    out.flags.writeable = False
    return out


# Value objects


@dataclass(frozen=True)
class Palette:
    """Fixed target palette: P rows of RGB, 1 <= P <= 256."""

    colours: U8PaletteRows
    source: Optional[Path] = None

    def __post_init__(self) -> None:
        rows = self.colours
        if rows.dtype != np.uint8 or rows.ndim != 2 or rows.shape[1] != 3:
            raise TypeError("expected uint8 (P,3) palette rows")
        if not 1 <= rows.shape[0] <= MAX_PALETTE_COLOURS:
            raise ValueError(
                f"palette must hold 1..{MAX_PALETTE_COLOURS} colours, got {rows.shape[0]}"
            )
        object.__setattr__(self, "colours", _frozen(rows))

    @property
    def ncolors(self) -> int:
        return int(self.colours.shape[0])

    def rgb(self, index: int) -> RGBTuple:
        row = self.colours[index]
        return (int(row[0]), int(row[1]), int(row[2]))

    def to_bytes(self) -> bytes:
        """Packed r,g,b bytes in index order, as PLTE expects."""
        return self.colours.tobytes()


@dataclass(frozen=True)
class RasterImage:
    """
    Decoded truecolour image.

    pixels is uint8 [H,W,4] RGBA. has_alpha_channel records what the source
    format declared (alpha channel or transparency chunk), not whether any
    pixel is actually translucent.
    """

    width: int
    height: int
    pixels: U8Image
    has_alpha_channel: bool

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid image size {self.width}x{self.height}")
        px = self.pixels
        if px.dtype != np.uint8 or px.ndim != 3 or px.shape[-1] != 4:
            raise TypeError("expected uint8 (H,W,4) RGBA pixels")
        if px.shape[:2] != (self.height, self.width):
            raise ValueError(
                f"pixel array shape {px.shape[:2]} does not match {self.height}x{self.width}"
            )
        object.__setattr__(self, "pixels", _frozen(px))

    @property
    def rgb(self) -> U8Image:
        return self.pixels[..., :3]

    @property
    def alpha(self) -> U8Mask:
        return self.pixels[..., 3]


@dataclass(frozen=True)
class IndexedRaster:
    """Quantizer output: uint8 [H,W] palette indices."""

    width: int
    height: int
    indices: U8Indices

    def __post_init__(self) -> None:
        assert_u8_mask_2d(self.indices)
        if self.indices.shape != (self.height, self.width):
            raise ValueError("index array does not match raster size")
        object.__setattr__(self, "indices", _frozen(self.indices))


@dataclass(frozen=True)
class MaskRaster:
    """Grayscale alpha mask: uint8 [H,W] samples copied from source alpha."""

    width: int
    height: int
    samples: U8Mask

    def __post_init__(self) -> None:
        assert_u8_mask_2d(self.samples)
        if self.samples.shape != (self.height, self.width):
            raise ValueError("mask array does not match raster size")
        object.__setattr__(self, "samples", _frozen(self.samples))


# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def assert_u8_mask_2d(mask_array: np.ndarray) -> U8Mask:
    """Validate a uint8 (H,W) array and return it typed as U8Mask."""
    if mask_array.dtype != np.uint8 or mask_array.ndim != 2:
        raise TypeError("expected uint8 (H,W) array")
    return mask_array  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "U8Mask",
    "U8Indices",
    "U8PaletteRows",
    # value objects
    "Palette",
    "RasterImage",
    "IndexedRaster",
    "MaskRaster",
    # helpers
    "rgb_to_hex",
    "assert_u8_mask_2d",
]
