from __future__ import annotations

"""
Conversion pipeline.

  load palette -> decode source -> quantize -> save indexed PNG
  -> (alpha declared) needs_mask? -> build + save mask

Any stage failure raises a ConversionError and aborts the run.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Union

from .core_types import IndexedRaster, Palette, RasterImage
from .image_io import decode_truecolor, save_indexed_png, save_mask_png
from .mask import alpha_summary, build_mask, needs_mask
from .palette_data import load_palette
from .quantize import quantize
from .utils import (
    debug_log,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    palette_usage_report,
    warn,
)

PathLike = Union[str, Path]

MaskStatus = Literal["no-alpha-channel", "binary-alpha", "written", "skipped-no-path"]


@dataclass(frozen=True)
class ConversionResult:
    palette: Palette
    image: RasterImage
    indexed: IndexedRaster
    result_path: Path
    mask_status: MaskStatus
    mask_path: Optional[Path] = None


def _debug_report(
    image: RasterImage, indexed: IndexedRaster, palette: Palette, top_k: int = 16
) -> None:
    opaque, transparent, partial = alpha_summary(image)
    debug_log(
        key_value_pairs_to_string(
            [
                ("Size", f"{image.width}x{image.height}"),
                ("Alpha channel", image.has_alpha_channel),
                ("Alpha=255", opaque),
                ("Alpha=0", transparent),
                ("Partial", partial),
            ]
        )
    )
    usage = palette_usage_report(indexed, palette)
    debug_log(f"palette usage (top {top_k} of {len(usage)} used):")
    for j, hex_code, count in usage[:top_k]:
        debug_log(f"  [{j:3d}] {hex_code}: {count:,}")


def convert(
    palette_path: PathLike,
    source_path: PathLike,
    result_path: PathLike,
    mask_path: Optional[PathLike] = None,
    *,
    debug: bool = False,
) -> ConversionResult:
    """
    Run one conversion end-to-end.

    mask_path may be omitted. If the source then turns out to need a mask,
    a warning is logged and no mask is written.
    """
    t_start = time.perf_counter()
    result_path = Path(result_path)
    mask_out = Path(mask_path) if mask_path is not None else None

    palette = load_palette(palette_path)
    image = decode_truecolor(source_path)
    t_loaded = time.perf_counter()

    indexed = quantize(image, palette)
    t_mapped = time.perf_counter()

    save_indexed_png(result_path, indexed, palette)
    log(f"Saved result to '{result_path}'")

    if debug:
        _debug_report(image, indexed, palette)

    written_mask: Optional[Path] = None
    status: MaskStatus
    if not image.has_alpha_channel:
        status = "no-alpha-channel"
        log("No alpha mask needed (source has no alpha channel)")
    elif not needs_mask(image):
        status = "binary-alpha"
        log("No alpha mask needed (simple alpha channel)")
    elif mask_out is None:
        status = "skipped-no-path"
        warn("source has partial transparency but no mask path was given; mask skipped")
    else:
        written_mask = save_mask_png(mask_out, build_mask(image))
        status = "written"
        log(f"Saved alpha mask to '{written_mask}'")

    if debug:
        t_end = time.perf_counter()
        debug_log(
            key_value_pairs_to_string(
                [
                    ("load", format_seconds_compact(t_loaded - t_start)),
                    ("quantize", format_seconds_compact(t_mapped - t_loaded)),
                    ("save", format_seconds_compact(t_end - t_mapped)),
                ]
            )
        )

    return ConversionResult(
        palette=palette,
        image=image,
        indexed=indexed,
        result_path=result_path,
        mask_status=status,
        mask_path=written_mask,
    )


__all__ = ["MaskStatus", "ConversionResult", "convert"]
