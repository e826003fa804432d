"""
sprite_indexer package.

Purpose:
  Convert RGBA sprites to indexed PNGs with a fixed palette, plus an
  optional grayscale alpha mask. See sprite_indexer.cli for the CLI.

Public API:
  load_palette     : read the colour table of an indexed image.
  decode_truecolor : decode any Pillow-readable image to an RGBA RasterImage.
  quantize         : nearest-colour mapping with the reserved transparent index.
  needs_mask       : does the alpha channel hold partial transparency?
  build_mask       : copy the alpha channel into a MaskRaster.
  convert          : the whole pipeline, palette to output files.
  core_types       : Palette, RasterImage, IndexedRaster, MaskRaster.
  errors           : ConversionError and its kinds.

Quick start:
  from sprite_indexer import convert
  convert("palette.png", "sprite.png", "sprite_indexed.png", "sprite_mask.png")
"""

__version__ = "0.1.0"

from . import constants
from . import core_types
from . import errors
from . import utils

from .core_types import IndexedRaster, MaskRaster, Palette, RasterImage
from .errors import ConversionError, FileAccessError, FormatError, WriteError
from .palette_data import load_palette, palette_from_rgb
from .image_io import decode_truecolor, save_indexed_png, save_mask_png
from .quantize import quantize
from .mask import build_mask, needs_mask
from .pipeline import ConversionResult, convert

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "utils",
    "Palette",
    "RasterImage",
    "IndexedRaster",
    "MaskRaster",
    "ConversionError",
    "FileAccessError",
    "FormatError",
    "WriteError",
    "load_palette",
    "palette_from_rgb",
    "decode_truecolor",
    "save_indexed_png",
    "save_mask_png",
    "quantize",
    "needs_mask",
    "build_mask",
    "ConversionResult",
    "convert",
]
