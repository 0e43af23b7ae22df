"""Tests for imgcat.size_spec — width/height option parsing."""

from __future__ import annotations

import pytest

from imgcat.errors import InvalidSizeSyntax
from imgcat.size_spec import (
    AUTO,
    SizeSpec,
    SizeUnit,
    cells,
    parse_size_spec,
    percent,
    pixels,
)


class TestParseAuto:
    @pytest.mark.parametrize("text", [None, "", "   ", "auto", "AUTO", " Auto "])
    def test_auto_forms(self, text):
        assert parse_size_spec(text) == AUTO
        assert parse_size_spec(text).unit is SizeUnit.AUTO


class TestParseUnits:
    def test_bare_integer_is_cells(self):
        assert parse_size_spec("40") == SizeSpec(SizeUnit.CELLS, 40)

    def test_px_suffix_is_pixels(self):
        assert parse_size_spec("250px") == pixels(250)

    def test_px_suffix_case_insensitive(self):
        assert parse_size_spec("250PX") == pixels(250)

    def test_percent_suffix(self):
        assert parse_size_spec("100%") == percent(100)

    def test_surrounding_whitespace_ignored(self):
        assert parse_size_spec("  12 ") == cells(12)

    def test_zero_cells_parses(self):
        # rejected later by the resolver, not at parse time
        assert parse_size_spec("0") == cells(0)


class TestParseErrors:
    @pytest.mark.parametrize("text", ["-5", "-10px", "-1%"])
    def test_negative_rejected(self, text):
        with pytest.raises(InvalidSizeSyntax, match="negative"):
            parse_size_spec(text)

    def test_zero_percent_rejected(self):
        with pytest.raises(InvalidSizeSyntax):
            parse_size_spec("0%")

    @pytest.mark.parametrize("text", ["abc", "10em", "1.5", "px", "%", "10 px", "10%%", "50x"])
    def test_garbage_rejected(self, text):
        with pytest.raises(InvalidSizeSyntax) as excinfo:
            parse_size_spec(text)
        assert excinfo.value.text == text

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_size_spec("wide")


class TestRender:
    def test_render_forms(self):
        assert AUTO.render() == "auto"
        assert cells(7).render() == "7"
        assert pixels(300).render() == "300px"
        assert percent(50).render() == "50%"

    @pytest.mark.parametrize("text", ["auto", "7", "300px", "50%"])
    def test_render_parses_back(self, text):
        spec = parse_size_spec(text)
        assert parse_size_spec(spec.render()) == spec

    def test_str_matches_render(self):
        assert str(percent(25)) == "25%"
