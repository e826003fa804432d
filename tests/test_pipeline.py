import numpy as np
import pytest
from PIL import Image

from sprite_indexer.errors import FormatError
from sprite_indexer.pipeline import convert

from conftest import BLACK, GREEN, RED, WHITE


def _indices(path):
    with Image.open(path) as im:
        return np.array(im).tolist()


def test_end_to_end_binary_alpha(tmp_path, palette_png, rgba_png, capsys):
    pal = palette_png([BLACK, RED, GREEN, WHITE])
    src = rgba_png([[(255, 0, 0, 255), (0, 0, 0, 0)]])
    result = tmp_path / "result.png"
    mask = tmp_path / "mask.png"

    res = convert(pal, src, result, mask)

    assert _indices(result) == [[1, 0]]
    assert res.indexed.indices.tolist() == [[1, 0]]
    assert res.mask_status == "binary-alpha"
    assert res.mask_path is None
    assert not mask.exists()
    assert "simple alpha channel" in capsys.readouterr().out


def test_partial_alpha_writes_mask(tmp_path, palette_png, rgba_png):
    pal = palette_png([BLACK, RED, GREEN, WHITE])
    src = rgba_png([[(0, 250, 0, 128), (255, 255, 255, 255), (3, 3, 3, 0)]])
    result = tmp_path / "result.png"
    mask = tmp_path / "mask.png"

    res = convert(pal, src, result, mask)

    assert res.mask_status == "written"
    assert res.mask_path == mask
    assert _indices(result) == [[2, 3, 0]]
    with Image.open(mask) as im:
        assert im.mode == "L"
        assert im.size == (3, 1)
        assert np.array(im).tolist() == [[128, 255, 0]]


def test_no_alpha_source_never_writes_mask(tmp_path, palette_png, rgb_png, capsys):
    pal = palette_png([BLACK, WHITE])
    src = rgb_png([[(10, 10, 10), (250, 250, 250)]])
    result = tmp_path / "result.png"
    mask = tmp_path / "mask.png"

    res = convert(pal, src, result, mask)

    assert res.mask_status == "no-alpha-channel"
    assert not mask.exists()
    assert _indices(result) == [[0, 1]]
    assert "source has no alpha channel" in capsys.readouterr().out


def test_needed_mask_without_path_warns_and_skips(tmp_path, palette_png, rgba_png, capsys):
    pal = palette_png([BLACK, RED, GREEN, WHITE])
    src = rgba_png([[(255, 0, 0, 40)]])
    result = tmp_path / "result.png"

    res = convert(pal, src, result)

    assert res.mask_status == "skipped-no-path"
    assert result.exists()
    assert sorted(p.name for p in tmp_path.iterdir()) == sorted(
        ["palette.png", "source.png", "result.png"]
    )
    assert "[warn]" in capsys.readouterr().err


def test_dimensions_preserved(tmp_path, palette_png, rgba_png):
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(5, 8, 4), dtype=np.uint8)
    pal = palette_png([BLACK, RED, GREEN, WHITE])
    src = rgba_png(pixels.tolist())
    res = convert(pal, src, tmp_path / "r.png", tmp_path / "m.png")
    assert (res.indexed.width, res.indexed.height) == (8, 5)
    with Image.open(tmp_path / "r.png") as im:
        assert im.size == (8, 5)
    with Image.open(tmp_path / "m.png") as im:
        assert im.size == (8, 5)


def test_non_indexed_palette_aborts_before_output(tmp_path, rgba_png):
    pal = tmp_path / "rgb_palette.png"
    Image.new("RGB", (2, 1)).save(pal)
    src = rgba_png([[(1, 1, 1, 255)]])
    result = tmp_path / "result.png"
    with pytest.raises(FormatError):
        convert(pal, src, result)
    assert not result.exists()


def test_single_colour_palette_with_alpha_aborts(tmp_path, palette_png, rgba_png):
    pal = palette_png([BLACK])
    src = rgba_png([[(1, 1, 1, 255)]])
    result = tmp_path / "result.png"
    with pytest.raises(FormatError):
        convert(pal, src, result)
    assert not result.exists()


def test_debug_report(tmp_path, palette_png, rgba_png, capsys):
    pal = palette_png([BLACK, RED, GREEN, WHITE])
    src = rgba_png([[(255, 0, 0, 255), (255, 0, 0, 255), (0, 0, 0, 0)]])
    convert(pal, src, tmp_path / "r.png", debug=True)
    out = capsys.readouterr().out
    assert "[debug] palette usage" in out
    assert "#ff0000: 2" in out
    assert "quantize:" in out


def test_result_png_is_8_bit_indexed(tmp_path, palette_png, rgba_png):
    pal = palette_png([BLACK, RED, GREEN, WHITE])
    src = rgba_png([[(255, 0, 0, 255), (0, 0, 0, 0)]])
    result = tmp_path / "result.png"
    convert(pal, src, result)
    data = result.read_bytes()
    assert (data[24], data[25]) == (8, 3)
