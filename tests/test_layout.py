import logging

import pytest

from image_font import (
    Automatic,
    EmptyDescription,
    GlyphRect,
    Manual,
    ManualMonospace,
    into_char_map,
)


def test_grid_two_by_two():
    char_map = into_char_map(Automatic("AB\nCD"), 4, 4)
    assert char_map == {
        "A": GlyphRect(0, 0, 2, 2),
        "B": GlyphRect(2, 0, 4, 2),
        "C": GlyphRect(0, 2, 2, 4),
        "D": GlyphRect(2, 2, 4, 4),
    }


def test_grid_strips_one_leading_and_trailing_newline():
    assert into_char_map(Automatic("\nAB\nCD\n"), 4, 4) == into_char_map(Automatic("AB\nCD"), 4, 4)


def test_grid_only_strips_a_single_newline():
    char_map = into_char_map(Automatic("\n\nAB"), 4, 4)
    # the second newline leaves an empty first row
    assert char_map["A"] == GlyphRect(0, 2, 2, 4)


def test_grid_keeps_spaces():
    char_map = into_char_map(Automatic(" A \nBCD"), 6, 2)
    assert char_map[" "] == GlyphRect(4, 0, 6, 1)
    assert set(char_map) == {" ", "A", "B", "C", "D"}


def test_grid_last_duplicate_wins():
    char_map = into_char_map(Automatic("AB\nBA"), 4, 4)
    assert char_map["A"] == GlyphRect(2, 2, 4, 4)
    assert char_map["B"] == GlyphRect(0, 2, 2, 4)


def test_grid_ragged_lines_use_longest_line():
    char_map = into_char_map(Automatic("ABC\nD"), 6, 4)
    assert char_map["C"] == GlyphRect(4, 0, 6, 2)
    assert char_map["D"] == GlyphRect(0, 2, 2, 4)


def test_grid_ignores_crlf_line_endings():
    assert into_char_map(Automatic("AB\r\nCD\r\n"), 4, 4) == into_char_map(Automatic("AB\nCD"), 4, 4)


def test_grid_counts_characters_not_bytes():
    char_map = into_char_map(Automatic("é€"), 4, 2)
    assert char_map["é"] == GlyphRect(0, 0, 2, 2)
    assert char_map["€"] == GlyphRect(2, 0, 4, 2)


def test_grid_inexact_division_warns_and_truncates(caplog):
    caplog.set_level(logging.WARNING, logger="image_font.layout")
    char_map = into_char_map(Automatic("AB\nCD"), 5, 5)
    assert char_map["D"] == GlyphRect(2, 2, 4, 4)
    messages = [record.getMessage() for record in caplog.records]
    assert any("width 5" in message for message in messages)
    assert any("height 5" in message for message in messages)


def test_grid_exact_division_does_not_warn(caplog):
    caplog.set_level(logging.WARNING, logger="image_font.layout")
    into_char_map(Automatic("AB\nCD"), 4, 4)
    assert caplog.records == []


@pytest.mark.parametrize("grid", ["", "\n", "\n\n", "\n\n\n"])
def test_grid_empty_description(grid):
    with pytest.raises(EmptyDescription):
        into_char_map(Automatic(grid), 4, 4)


def test_monospace():
    layout = ManualMonospace(size=(4, 8), coords={"a": (0, 0), "b": (10, 0)})
    assert into_char_map(layout, 16, 8) == {
        "a": GlyphRect(0, 0, 4, 8),
        "b": GlyphRect(10, 0, 14, 8),
    }


def test_monospace_does_not_check_bounds():
    layout = ManualMonospace(size=(4, 4), coords={"a": (100, 100)})
    assert into_char_map(layout, 4, 4)["a"] == GlyphRect(100, 100, 104, 104)


def test_manual_passes_rects_through():
    rects = {"a": GlyphRect(0, 0, 10, 20), "b": GlyphRect(20, 20, 25, 25)}
    assert into_char_map(Manual(rects), 30, 30) == rects


def test_glyph_rect_from_corners_orders_coordinates():
    rect = GlyphRect.from_corners((5, 6), (1, 2))
    assert rect == GlyphRect(1, 2, 5, 6)
    assert (rect.width, rect.height) == (4, 4)
