"""
Tests for page-size vocabulary and font resolution in conversion.
"""

import logging

import pytest

from conversion.fonts import STANDARD_FONTS, FitzFontMetrics, load_font
from conversion.page_sizes import PAGE_SIZES, canonical_page_size, resolve_page_size


class TestPageSizes:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Letter", (612, 792)),
            ("legal", (612, 1008)),
            ("A4", (595, 842)),
            ("a4", (595, 842)),
        ],
    )
    def test_known_sizes_resolve_case_insensitively(self, name, expected):
        assert resolve_page_size(name) == expected

    def test_every_name_resolves_to_portrait(self):
        for name in PAGE_SIZES:
            width, height = resolve_page_size(name)
            assert 0 < width < height

    def test_a_series_shrinks(self):
        areas = [
            w * h for w, h in (resolve_page_size(f"A{i}") for i in range(7))
        ]
        assert areas == sorted(areas, reverse=True)

    def test_unknown_size_rejected(self):
        with pytest.raises(ValueError, match="Unknown page size"):
            resolve_page_size("Tabloid")

    def test_canonical_spelling(self):
        assert canonical_page_size(" LETTER ") == "Letter"


class TestLoadFont:
    def test_default_is_helvetica(self):
        loaded = load_font()
        assert loaded.name == "Helvetica"
        assert loaded.fontname == "helv"
        assert not loaded.is_embedded

    def test_all_standard_fonts_load(self):
        for name in STANDARD_FONTS:
            assert load_font(name).name == name

    def test_unknown_standard_font_falls_back_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="conversion.fonts"):
            loaded = load_font("Comic-Sans")

        assert loaded.name == "Helvetica"
        assert "Comic-Sans" in caplog.text

    def test_both_sources_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            load_font("Courier", tmp_path / "font.ttf")

    def test_truetype_font_loads_for_embedding(self, ttf_path):
        loaded = load_font(ttf_path=ttf_path)

        assert loaded.is_embedded
        assert loaded.fontname == "F0"
        assert loaded.name == ttf_path.stem
        metrics = FitzFontMetrics(loaded)
        assert metrics.width("café", 10) > 0
        assert metrics.line_advance(10) > 0

    def test_missing_ttf_rejected(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_font(ttf_path=tmp_path / "missing.ttf")


class TestFitzFontMetrics:
    def test_courier_is_monospaced(self):
        courier = FitzFontMetrics(load_font("Courier"))
        assert courier.width("abc", 10) == pytest.approx(18.0)
        assert courier.width("iii", 10) == courier.width("WWW", 10)

    def test_width_scales_with_size(self):
        metrics = FitzFontMetrics(load_font())
        assert metrics.width("hello", 20) == pytest.approx(2 * metrics.width("hello", 10))
        assert metrics.width("", 10) == 0

    def test_line_advance_is_bbox_height_times_size(self):
        metrics = FitzFontMetrics(load_font())
        bbox = metrics.loaded.font.bbox
        expected = (bbox.y1 - bbox.y0) * 10

        assert metrics.line_advance(10) == pytest.approx(expected)
        assert 10 < metrics.line_advance(10) < 20

    def test_line_advance_scales_with_size(self):
        metrics = FitzFontMetrics(load_font())
        assert metrics.line_advance(10) > 0
        assert metrics.line_advance(20) == pytest.approx(2 * metrics.line_advance(10))

    def test_widths_are_memoised(self):
        metrics = FitzFontMetrics(load_font())
        metrics.width("repeat", 10)
        metrics.width("repeat", 10)
        assert metrics.cache_info().hits == 1
