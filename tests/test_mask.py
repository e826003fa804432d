from sprite_indexer.mask import alpha_summary, build_mask, needs_mask

from conftest import make_raster


def test_binary_alpha_needs_no_mask():
    img = make_raster([[(1, 2, 3, 0), (4, 5, 6, 255)], [(0, 0, 0, 255), (9, 9, 9, 0)]], True)
    assert needs_mask(img) is False


def test_partial_alpha_needs_mask_and_is_copied():
    img = make_raster([[(1, 2, 3, 255), (4, 5, 6, 128), (7, 8, 9, 0)]], True)
    assert needs_mask(img) is True
    mask = build_mask(img)
    assert (mask.width, mask.height) == (img.width, img.height)
    assert mask.samples.tolist() == [[255, 128, 0]]


def test_build_mask_is_independent_of_needs_mask():
    img = make_raster([[(0, 0, 0, 255), (0, 0, 0, 0)]], True)
    assert needs_mask(img) is False
    assert build_mask(img).samples.tolist() == [[255, 0]]


def test_extreme_partial_values_count():
    assert needs_mask(make_raster([[(0, 0, 0, 1)]], True))
    assert needs_mask(make_raster([[(0, 0, 0, 254)]], True))


def test_alpha_summary_counts():
    img = make_raster([[(0, 0, 0, 255), (0, 0, 0, 0), (0, 0, 0, 64), (0, 0, 0, 255)]], True)
    assert alpha_summary(img) == (2, 1, 1)
