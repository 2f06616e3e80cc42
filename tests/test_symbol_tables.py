# tests/test_symbol_tables.py
import pytest

from lunatex.schemas import AsciiWord, UnicodeGlyph
from lunatex.symbol_tables import (
    LOWERCASE_GREEK,
    SCRIPT_CHARSET,
    SUBSCRIPTS,
    SUPERSCRIPTS,
    SYMBOL_CLASSES,
    SYMBOL_TABLE,
    UPPERCASE_GREEK,
    _merge_tables,
)


def test_merged_table_has_every_class_entry():
    assert len(SYMBOL_TABLE) == sum(len(table) for table in SYMBOL_CLASSES.values())


def test_duplicate_command_names_are_rejected():
    classes = {'a': {'pi': AsciiWord(text='pi')}, 'b': {'pi': UnicodeGlyph(code_point=0x3C0)}}
    with pytest.raises(ValueError, match="pi"):
        _merge_tables(classes)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        SYMBOL_TABLE['alpha'] = AsciiWord(text='a')


def test_greek_classes():
    assert all(isinstance(rule, UnicodeGlyph) for rule in LOWERCASE_GREEK.values())
    assert all(isinstance(rule, AsciiWord) for rule in UPPERCASE_GREEK.values())
    assert UPPERCASE_GREEK['Omega'].text == 'Omega'


def test_command_names_have_no_backslash():
    assert not any(name.startswith('\\') for name in SYMBOL_TABLE)


def test_script_tables_cover_the_representable_set():
    assert set(SUPERSCRIPTS) == set(SCRIPT_CHARSET)
    assert set(SUBSCRIPTS) == set(SCRIPT_CHARSET)
    assert len(set(SUPERSCRIPTS.values())) == len(SCRIPT_CHARSET)
    assert len(set(SUBSCRIPTS.values())) == len(SCRIPT_CHARSET)


@pytest.mark.parametrize("char, sup, sub", [
    ('0', '⁰', '₀'),
    ('9', '⁹', '₉'),
    ('+', '⁺', '₊'),
    ('n', 'ⁿ', 'ₙ'),
    ('y', 'ʸ', 'ᵧ'),
])
def test_script_glyphs(char, sup, sub):
    assert SUPERSCRIPTS[char] == sup
    assert SUBSCRIPTS[char] == sub


def test_letters_outside_the_set_have_no_script_form():
    assert 'a' not in SUPERSCRIPTS
    assert 'z' not in SUBSCRIPTS


def test_subscript_y_is_the_gamma_look_alike():
    assert SUBSCRIPTS['y'] == '\u1d67'
