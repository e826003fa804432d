from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Sequence, Tuple

import numpy as np
import pytest
from PIL import Image

from sprite_indexer.core_types import RasterImage

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]

BLACK: RGB = (0, 0, 0)
RED: RGB = (255, 0, 0)
GREEN: RGB = (0, 255, 0)
WHITE: RGB = (255, 255, 255)


def make_raster(rows: Sequence[Sequence[RGBA]], has_alpha: bool) -> RasterImage:
    arr = np.array(rows, dtype=np.uint8).reshape(len(rows), len(rows[0]), 4)
    return RasterImage(
        width=arr.shape[1], height=arr.shape[0], pixels=arr, has_alpha_channel=has_alpha
    )


def write_palette_png(path: Path, colours: List[RGB]) -> Path:
    im = Image.new("P", (len(colours), 1))
    im.putpalette([c for rgb in colours for c in rgb])
    im.putdata(list(range(len(colours))))
    im.save(path)
    return path


@pytest.fixture
def palette_png(tmp_path: Path) -> Callable[[List[RGB]], Path]:
    def _make(colours: List[RGB], name: str = "palette.png") -> Path:
        return write_palette_png(tmp_path / name, colours)

    return _make


@pytest.fixture
def rgba_png(tmp_path: Path) -> Callable[..., Path]:
    def _make(rows: Sequence[Sequence[RGBA]], name: str = "source.png") -> Path:
        arr = np.array(rows, dtype=np.uint8)
        path = tmp_path / name
        Image.fromarray(arr).save(path)
        return path

    return _make


@pytest.fixture
def rgb_png(tmp_path: Path) -> Callable[..., Path]:
    def _make(rows: Sequence[Sequence[RGB]], name: str = "source.png") -> Path:
        arr = np.array(rows, dtype=np.uint8)
        path = tmp_path / name
        Image.fromarray(arr).save(path)
        return path

    return _make
