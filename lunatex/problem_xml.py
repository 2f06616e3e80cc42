# lunatex/problem_xml.py
"""
Problem1.xml payloads for TI-Nspire documents.

The headers below are already in the handheld's compressed-XML dialect (the
0x0E nn bytes close elements), so they are stored as opaque byte strings
rather than built with an XML library.
"""
from .errors import ContainerError

PYTHON_FILENAME_LIMIT = 240

CDATA_RESTART = b"]]><![CDATA["

# --- 1. Lua script widget ---
LUA_HEADER = (
    b"\x54\x49\x58\x43\x30\x31\x30\x30\x2D\x31\x2E\x30\x3F\x3E\x3C\x70\x72"
    b"\x6F\x62\x20\x78\x6D\x6C\x6E\x73\x3D\x22\x75\x72\x6E\x3A\x54\x49\x2E"
    b"\x50\xA8\x5F\x5B\x1F\x0A\x22\x20\x76\x65\x72\x3D\x22\x31\x2E\x30\x22"
    b"\x20\x70\x62\x6E\x61\x6D\x65\x3D\x22\x22\x3E\x3C\x73\x79\x6D\x3E\x0E"
    b"\x01\x3C\x63\x61\x72\x64\x20\x63\x6C\x61\x79\x3D\x22\x30\x22\x20\x68"
    b"\x31\x3D\x22\xF1\x00\x00\xFF\x22\x20\x68\x32\x3D\x22\xF1\x00\x00\xFF"
    b"\x22\x20\x77\x31\x3D\x22\xF1\x00\x00\xFF\x22\x20\x77\x32\x3D\x22\xF1"
    b"\x00\x00\xFF\x22\x3E\x3C\x69\x73\x44\x75\x6D\x6D\x79\x43\x61\x72\x64"
    b"\x3E\x30\x0E\x03\x3C\x66\x6C\x61\x67\x3E\x30\x0E\x04\x3C\x77\x64\x67"
    b"\x74\x20\x78\x6D\x6C\x6E\x73\x3A\x73\x63\x3D\x22\x75\x72\x6E\x3A\x54"
    b"\x49\x2E\x53\xAC\x84\xF2\x2A\x41\x70\x70\x22\x20\x74\x79\x70\x65\x3D"
    b"\x22\x54\x49\x2E\x53\xAC\x84\xF2\x2A\x41\x70\x70\x22\x20\x76\x65\x72"
    b"\x3D\x22\x31\x2E\x30\x22\x3E\x3C\x73\x63\x3A\x6D\x46\x6C\x61\x67\x73"
    b"\x3E\x30\x0E\x06\x3C\x73\x63\x3A\x76\x61\x6C\x75\x65\x3E\x2D\x31\x0E"
    b"\x07\x3C\x73\x63\x3A\x73\x63\x72\x69\x70\x74\x20\x76\x65\x72\x73\x69"
    b"\x6F\x6E\x3D\x22\x35\x31\x32\x22\x20\x69\x64\x3D\x22\x30\x22\x3E"
    b"<![CDATA["
)
LUA_FOOTER = b"]]>\x0E\x08\x0E\x05\x0E\x02\x0E\x00"

# --- 2. Python editor widget (the .py file itself is a separate archive member) ---
PY_HEADER = (
    b'TIXC0100-1.0?><prob xmlns="urn:TI.Problem" ver="1.0" pbname="">'
    b'<sym>\x0E\x01<card clay="0" h1="10000" h2="10000" w1="10000" '
    b'w2="10000"><isDummyCard>0\x0E\x03<flag>0\x0E\x04<wdgt xmlns:py="urn:'
    b'TI.PythonEditor" type="TI.PythonEditor" ver="1.0"><py:data><py:name>'
)
PY_FOOTER = (
    b"\x0E\x07<py:dirf>-10000000\x0E\x08\x0E\x06<py:mFlags>1024\x0E\x09"
    b"<py:value>10\x0E\x0A\x0E\x05\x0E\x02\x0E\x00"
)

# --- 3. Fixed document parts ---
# Document.xml, already deflated and encrypted.
DEFAULT_DOCUMENT_XML = (
    b"\x0F\xCE\xD8\xD2\x81\x06\x86\x5B\x4A\x4A\xC5\xCE\xA9\x16\xF2\xD5\x1D\xA8\x2F\x6E"
    b"\x00\x22\xF2\xF0\xC1\xA6\x06\x77\x4D\x7E\xA6\xC0\x3A\xF0\x5C\x74\xBA\xAA\x44\x60"
    b"\xCD\x58\xE6\x70\xD7\x40\xF6\x9C\x17\xDC\xF0\x94\x77\xBF\xCA\xDE\xF7\x02\x09\xC9"
    b"\x62\xB1\x5D\xEF\x22\xFA\x51\x37\xA0\x81\x91\x48\xE1\x83\x4D\xAD\x08\x31\x2D\xD0"
    b"\xD3\xE3\x2D\x60\xAB\x13\xC2\x98\x2B\xED\x39\x5B\x09\x24\x39\x92\x2F\x0C\x7A\x4C"
    b"\x95\x74\x91\x3B\x0C\xF4\x60\xCC\x73\x27\xCB\x07\x7E\x7F\xA9\x17\x87\xE2\xAC\xA2"
    b"\x3B\xCC\xA0\xC4\xE3\x8E\x89\xF0\xC0\x51\x9F\xC2\xBE\xCE\x28\x45\xC3\xD4\x11\x90"
    b"\xA6\xEC\x53\xA0\xFB\x5B\x46\x6B\x41\xAD\xE9\x53\xBB\x97\xDB\xB1\xD2\x68\xE2\xF6"
    b"\x36\x0F\x26\x36\x75\x9B\xE9\x1F\x48\xAD\xE9\x29\x67\x00\x58\x19\xC3\xC0\x12\x76"
    b"\xA0\x4A\x73\xF3\xB1\xD3\x09\x18\xD6\x06\xDD\x97\x24\x53\x3E\x22\xA4\xFB\x82\x50"
    b"\x7B\x7C\x12\x88\x4E\x7D\x41\x80\xFE\x72\x92\x29\x87\xE8\x5C\x56\x72\xFF\x29\x16"
    b"\x8C\x42\x5B\x8B\x9B\xA7\xD2\x08\x6D\xD3\x98\xFF\x91\xA9\x9E\xF3\x93\xA8\x2E\x1C"
    b"\xB2\xA9\x6B\x6A\xDF\xF6\xCE\x2D\x15\x17\xCE\x6E\xC0\x4F\x9A\x9C\x0E\xDF\x19\x8D"
    b"\x2D\xFA\x69\x9F\x11\xD2\x20\x12\xE0\x79\x14\x04\x4E\x62\x8F\x0A\x2A\x18\x72\x5A"
    b"\x8B\x80\xB3\x3C\x9B\xD5\x67\x59\x4B\x51\x4D\xE0\xC3\x38\x28\xC3\xDC\xCD\x39\x22"
    b"\x12\x8C\x40\x55"
)

# Prefix of every encrypted Problem payload.
TI_ENCRYPTED_HEADER = (
    b"\x0F\xCE\xD8\xD2\x81\x06\x86\x5B\x99\xDD\xA2\x3D\xD9\xE9\x4B\xD4\x31\xBB\x50\xB6"
    b"\x4D\xB3\x29\x24\x70\x60\x49\x38\x1C\x30\xF8\x99\x00\x4B\x92\x64\xE4\x58\xE6\xBC"
)


def fix_cdata_end_seq(script: bytes) -> bytes:
    """Splits the CDATA section around every `]]>` so the script cannot close it early."""
    return script.replace(b"]]>", b"]]" + CDATA_RESTART + b">")


def wrap_lua_script(script: bytes) -> bytes:
    return LUA_HEADER + fix_cdata_end_seq(script) + LUA_FOOTER


def wrap_python_script(python_filename: str) -> bytes:
    """
    Builds the Python editor Problem XML that points at `python_filename`.

    Raises:
        ContainerError: if the UTF-8 name is longer than the handheld accepts.
    """
    name = python_filename.encode('utf-8')
    if len(name) > PYTHON_FILENAME_LIMIT:
        raise ContainerError(f"Python script filenames are limited to {PYTHON_FILENAME_LIMIT} characters.")
    return PY_HEADER + name + PY_FOOTER
