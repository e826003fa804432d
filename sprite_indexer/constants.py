"""
Tunables shared across the project.

- Palette limits and the reserved transparent index
- PNG encoder settings for both outputs
- Quantizer chunking
"""
from __future__ import annotations

from typing import Tuple, Type

from PIL import Image, UnidentifiedImageError

# =========================
# Palette
# =========================
MAX_PALETTE_COLOURS: int = 256
TRANSPARENT_INDEX: int = 0

# Pillow modes that carry an embedded colour table.
INDEXED_MODES: Tuple[str, ...] = ("P", "PA")

# Pillow modes with a real alpha channel (premultiplied variants included).
ALPHA_MODES: Tuple[str, ...] = ("RGBA", "RGBa", "LA", "La", "PA")

# Single-channel modes wider than 8 bits; reduced to their high byte on decode.
HIGH_DEPTH_GREY_MODES: Tuple[str, ...] = ("I;16", "I;16L", "I;16B", "I;16N", "I")

# Pillow failures while opening or decoding an input file.
DECODE_ERRORS: Tuple[Type[BaseException], ...] = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    EOFError,
    SyntaxError,
    ValueError,
)

# =========================
# Encoder
# =========================
PNG_COMPRESS_LEVEL: int = 9  # zlib best compression
PNG_OPTIMIZE: bool = False
PNG_INDEXED_BITS: int = 8  # PLTE is padded to 256 entries; indices stay < ncolors

# =========================
# Quantizer
# =========================
# Unique source colours scored per numpy block. 4096 x 256 x 3 int32 ~ 12 MiB.
QUANTIZE_CHUNK_ROWS: int = 4096
