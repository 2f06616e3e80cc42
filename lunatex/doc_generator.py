# lunatex/doc_generator.py
import zlib
from typing import Callable, List, Optional

from . import doccrypt
from .errors import ContainerError
from .lua_note import text_to_lua_script
from .problem_xml import DEFAULT_DOCUMENT_XML, TI_ENCRYPTED_HEADER, wrap_lua_script, wrap_python_script
from .schemas import DEFLATE_METHOD, ContentKind, NoteStyle, TnsEntry
from .tns_writer import write_tns

DOCUMENT_XML_NAME = "Document.xml"
PROBLEM_XML_NAME = "Problem1.xml"


def _noop(message: str):
    pass


def encrypt_problem(problem_xml: bytes) -> bytes:
    """Deflate, pad, encrypt, then prefix the TI header, as the handheld expects for Problem parts."""
    compressed = doccrypt.compress_xml(problem_xml)
    padded = doccrypt.pad_to_8_bytes(compressed)
    return TI_ENCRYPTED_HEADER + doccrypt.encrypt_document(padded)


def _base_entries(problem_xml: bytes) -> List[TnsEntry]:
    return [
        TnsEntry(filename=DOCUMENT_XML_NAME, data=DEFAULT_DOCUMENT_XML),
        TnsEntry(filename=PROBLEM_XML_NAME, data=encrypt_problem(problem_xml)),
    ]


# --- 1. Per-kind builders ---
def embed_lua(script: str, log: Callable[[str], None] = _noop) -> bytes:
    log(f"  [LUA] Wrapping {len(script)} characters of Lua into {PROBLEM_XML_NAME}.")
    problem_xml = wrap_lua_script(script.encode('utf-8'))
    return write_tns(_base_entries(problem_xml))


def embed_python(source: str, filename: str, log: Callable[[str], None] = _noop) -> bytes:
    log(f"  [PYTHON] Storing '{filename}' as a deflated archive member.")
    raw = source.encode('utf-8')
    entries = _base_entries(wrap_python_script(filename))
    entries.append(TnsEntry(
        filename=filename,
        data=doccrypt.compress_xml(raw),
        method=DEFLATE_METHOD,
        uncompressed_size=len(raw),
        crc32=zlib.crc32(raw),
    ))
    return write_tns(entries)


def embed_text(text: str, style: Optional[NoteStyle] = None, log: Callable[[str], None] = _noop) -> bytes:
    log("  [TEXT] Converting LaTeX markup and building the Lua text note.")
    return embed_lua(text_to_lua_script(text, style), log)


# --- 2. Entry point ---
def embed(
        content: str,
        content_kind: ContentKind,
        filename: Optional[str] = None,
        style: Optional[NoteStyle] = None,
        log_callback: Optional[Callable[[str], None]] = None,
) -> bytes:
    """
    Packs a script or a text note into a complete .tns document.

    Args:
        content (str): Lua source, Python source, or text with LaTeX markup.
        content_kind (ContentKind): 'lua', 'python' or 'text'.
        filename (Optional[str]): Name of the Python file inside the document. Required for 'python'.
        style (Optional[NoteStyle]): Layout for text notes.
        log_callback (Optional[Callable[[str], None]]): Receives progress messages.

    Returns:
        bytes: The .tns file content.
    """
    log = log_callback or _noop
    if content_kind == 'lua':
        return embed_lua(content, log)
    if content_kind == 'python':
        if not filename:
            raise ContainerError("A Python document needs the name of its script file.")
        return embed_python(content, filename, log)
    if content_kind == 'text':
        return embed_text(content, style, log)
    raise ValueError(f"Unknown content kind: {content_kind!r}")
