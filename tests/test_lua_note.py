# tests/test_lua_note.py
import pytest

from lunatex.lua_note import find_safe_delimiter, text_to_lua_script
from lunatex.schemas import NoteStyle


@pytest.mark.parametrize("text, expected", [
    ("plain", ""),
    ("a]]b", "="),
    ("]]]=]", "=="),
])
def test_find_safe_delimiter(text, expected):
    assert find_safe_delimiter(text) == expected


def test_delimiter_search_is_bounded():
    text = "".join(f"]{'=' * n}]" for n in range(20))
    assert find_safe_delimiter(text) == "=" * 11


def test_script_embeds_converted_text():
    script = text_to_lua_script("Area: \\pi r^2")
    assert "local text = [[Area: π r²]]" in script
    assert "function on.paint(gc)" in script
    assert "function on.arrowKey(key)" in script


def test_script_uses_safe_delimiter():
    script = text_to_lua_script("a]]b")
    assert "local text = [=[a]]b]=]" in script


def test_style_values_are_substituted():
    style = NoteStyle(font_family='serif', font_size=14, line_height=18, margin_x=6, margin_top=10)
    script = text_to_lua_script("hi", style)
    assert "local FONT_SIZE = 14" in script
    assert "local LINE_HEIGHT = 18" in script
    assert "local MARGIN_X = 6" in script
    assert "local MARGIN_TOP = 10" in script
    assert 'gc:setFont("serif", "r", FONT_SIZE)' in script


def test_default_style():
    script = text_to_lua_script("hi")
    assert "local FONT_SIZE = 11" in script
    assert 'gc:setFont("sansserif", "r", FONT_SIZE)' in script


def test_dollar_signs_in_text_survive():
    assert "[[costs $5]]" in text_to_lua_script("costs $5")
