# tests/test_problem_xml.py
import pytest

from lunatex.errors import ContainerError
from lunatex.problem_xml import (
    DEFAULT_DOCUMENT_XML,
    LUA_FOOTER,
    LUA_HEADER,
    PY_FOOTER,
    PY_HEADER,
    PYTHON_FILENAME_LIMIT,
    TI_ENCRYPTED_HEADER,
    fix_cdata_end_seq,
    wrap_lua_script,
    wrap_python_script,
)


def test_constants():
    assert LUA_HEADER.startswith(b"TIXC0100-1.0?><prob")
    assert LUA_HEADER.endswith(b"<![CDATA[")
    assert LUA_FOOTER.startswith(b"]]>")
    assert len(TI_ENCRYPTED_HEADER) == 40
    assert DEFAULT_DOCUMENT_XML.startswith(TI_ENCRYPTED_HEADER[:8])
    assert len(DEFAULT_DOCUMENT_XML) % 8 == 0


@pytest.mark.parametrize("script, expected", [
    (b"print(1)", b"print(1)"),
    (b"a]]>b", b"a]]]]><![CDATA[>b"),
    (b"]]>]]>", b"]]]]><![CDATA[>]]]]><![CDATA[>"),
    (b"x = t[a[1]]", b"x = t[a[1]]"),
])
def test_fix_cdata_end_seq(script, expected):
    assert fix_cdata_end_seq(script) == expected


def test_wrap_lua_script():
    wrapped = wrap_lua_script(b"print('hi')")
    assert wrapped == LUA_HEADER + b"print('hi')" + LUA_FOOTER


def test_wrap_lua_script_reopens_cdata_after_split():
    wrapped = wrap_lua_script(b"s = ']]>'")
    body = wrapped[len(LUA_HEADER):-len(LUA_FOOTER)]
    assert body.count(b"<![CDATA[") == 1


def test_wrap_python_script():
    assert wrap_python_script("demo.py") == PY_HEADER + b"demo.py" + PY_FOOTER
    assert PY_HEADER.endswith(b"<py:name>")


def test_python_filename_limit():
    assert wrap_python_script("a" * PYTHON_FILENAME_LIMIT).startswith(PY_HEADER)
    with pytest.raises(ContainerError):
        wrap_python_script("a" * (PYTHON_FILENAME_LIMIT + 1))


def test_python_filename_limit_counts_utf8_bytes():
    with pytest.raises(ContainerError):
        wrap_python_script("é" * 121)
