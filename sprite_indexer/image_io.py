from __future__ import annotations

import io
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from .constants import (
    ALPHA_MODES,
    DECODE_ERRORS,
    HIGH_DEPTH_GREY_MODES,
    PNG_COMPRESS_LEVEL,
    PNG_INDEXED_BITS,
    PNG_OPTIMIZE,
)
from .core_types import IndexedRaster, MaskRaster, Palette, RasterImage, U8Image
from .errors import FileAccessError, FormatError, WriteError
from .utils import log

"""
Image I/O: truecolour decode to RGBA, indexed and grayscale PNG encode.

Outputs are encoded in memory and moved into place atomically, so a failed
run never leaves a half-written file at the destination.
"""

PathLike = Union[str, Path]


def declares_alpha(im: Image.Image) -> bool:
    """True if the mode carries alpha or the file declares a transparency chunk."""
    return im.mode in ALPHA_MODES or "transparency" in im.info


def _high_depth_grey_to_rgba(im: Image.Image) -> U8Image:
    """16-bit grey to RGBA keeping the high byte; tRNS grey level becomes alpha 0."""
    raw = np.clip(np.asarray(im).astype(np.int64), 0, 0xFFFF)
    grey = (raw >> 8).astype(np.uint8)
    H, W = grey.shape
    out = np.empty((H, W, 4), dtype=np.uint8)
    out[..., :3] = grey[..., None]
    out[..., 3] = 255
    trns = im.info.get("transparency")
    if isinstance(trns, int):
        out[raw == trns, 3] = 0
    return out


def _to_rgba_array(im: Image.Image) -> U8Image:
    if im.mode in HIGH_DEPTH_GREY_MODES:
        return _high_depth_grey_to_rgba(im)
    return np.array(im.convert("RGBA"), dtype=np.uint8)


def decode_truecolor(path: PathLike) -> RasterImage:
    """
    Decode any Pillow-readable image into an 8-bit RGBA RasterImage.

    Only the first frame of multi-frame files is used.

    Raises:
      FileAccessError: the file cannot be opened.
      FormatError: the image cannot be decoded.
    """
    path = Path(path)
    try:
        fp = open(path, "rb")
    except OSError as exc:
        raise FileAccessError(f"cannot open image '{path}': {exc}") from exc

    with fp:
        try:
            with Image.open(fp) as im:
                im.load()
                has_alpha = declares_alpha(im)
                rgba = _to_rgba_array(im)
        except DECODE_ERRORS as exc:
            raise FormatError(f"cannot decode image '{path}': {exc}") from exc

    log("has alpha channel" if has_alpha else "no alpha channel")
    H, W = rgba.shape[:2]
    image = RasterImage(width=W, height=H, pixels=rgba, has_alpha_channel=has_alpha)
    log(f"Read image {path}")
    return image


def _output_mode(path: Path) -> int:
    """Permission bits for path: the existing file's, else 0o666 minus umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _write_atomically(path: Path, data: bytes) -> None:
    """Write data to a temp file beside path, then rename it over path."""
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as exc:
        raise FileAccessError(f"cannot create '{path}': {exc}") from exc

    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        # mkstemp creates 0600
        os.chmod(tmp_name, _output_mode(path))
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise FileAccessError(f"cannot write '{path}': {exc}") from exc


def _encode_png(im: Image.Image, path: Path, **params: object) -> bytes:
    buf = io.BytesIO()
    try:
        im.save(
            buf,
            format="PNG",
            optimize=PNG_OPTIMIZE,
            compress_level=PNG_COMPRESS_LEVEL,
            **params,
        )
    except (OSError, ValueError) as exc:
        raise WriteError(f"failed to encode '{path}': {exc}") from exc
    return buf.getvalue()


def save_indexed_png(path: PathLike, indexed: IndexedRaster, palette: Palette) -> Path:
    """
    Save indices as an 8-bit palette PNG.

    The first ncolors PLTE entries are the loaded palette verbatim. Pillow
    pads PLTE to 256 entries at bit depth 8; no index refers to the padding.
    """
    path = Path(path)
    if int(indexed.indices.max(initial=0)) >= palette.ncolors:
        raise WriteError(f"index out of range for {palette.ncolors}-colour palette")
    im = Image.fromarray(indexed.indices.copy())
    im.putpalette(palette.to_bytes(), "RGB")
    _write_atomically(path, _encode_png(im, path, bits=PNG_INDEXED_BITS))
    return path


def save_mask_png(path: PathLike, mask: MaskRaster) -> Path:
    """Save an alpha mask as an 8-bit grayscale PNG."""
    path = Path(path)
    im = Image.fromarray(mask.samples.copy())
    _write_atomically(path, _encode_png(im, path))
    return path


__all__ = [
    "declares_alpha",
    "decode_truecolor",
    "save_indexed_png",
    "save_mask_png",
]
