from __future__ import annotations

"""
Palette loading.

Exports:
  load_palette(path) -> Palette
    Read the colour table of an indexed image (PNG PLTE, GIF colour table,
    or anything else Pillow opens as mode "P"/"PA").
  palette_from_rgb(rows) -> Palette
    Build a Palette from in-memory RGB rows.
"""

from pathlib import Path
from typing import Sequence, Union

import numpy as np
from PIL import Image

from .constants import DECODE_ERRORS, INDEXED_MODES, MAX_PALETTE_COLOURS
from .core_types import Palette, RGBTuple
from .errors import FileAccessError, FormatError
from .utils import log

PathLike = Union[str, Path]


def palette_from_rgb(rows: Sequence[RGBTuple], source: Path | None = None) -> Palette:
    """Build a Palette from (r,g,b) rows in index order."""
    arr = np.array(rows, dtype=np.uint8).reshape(-1, 3)
    return Palette(colours=arr, source=source)


def load_palette(path: PathLike) -> Palette:
    """
    Load the target palette from an indexed image.

    Raises:
      FileAccessError: the file cannot be opened.
      FormatError: the image is corrupt, is not indexed, or its colour table
        is empty or larger than 256 entries.
    """
    path = Path(path)
    try:
        fp = open(path, "rb")
    except OSError as exc:
        raise FileAccessError(f"cannot open palette image '{path}': {exc}") from exc

    with fp:
        try:
            with Image.open(fp) as im:
                im.load()
                mode = im.mode
                flat = im.getpalette() if mode in INDEXED_MODES else None
        except DECODE_ERRORS as exc:
            raise FormatError(f"cannot decode palette image '{path}': {exc}") from exc

    if flat is None:
        raise FormatError(
            f"failed to read colour table from '{path}' (is it indexed? mode={mode})"
        )

    ncolors = len(flat) // 3
    if ncolors < 1:
        raise FormatError(f"colour table in '{path}' is empty")
    if ncolors > MAX_PALETTE_COLOURS:
        raise FormatError(
            f"colour table in '{path}' has {ncolors} entries (max {MAX_PALETTE_COLOURS})"
        )

    rows = np.array(flat[: ncolors * 3], dtype=np.uint8).reshape(ncolors, 3)
    palette = Palette(colours=rows, source=path)
    log(f"Read palette with {palette.ncolors} colours from {path}")
    return palette


__all__ = ["load_palette", "palette_from_rgb"]
