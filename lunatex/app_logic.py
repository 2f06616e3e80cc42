# lunatex/app_logic.py
import os
import tempfile
from typing import Callable, Optional

from .config import EXTENSION_KINDS
from .doc_generator import embed
from .errors import ConversionError, UnsupportedInputError
from .schemas import ContentKind, NoteStyle


def detect_content_kind(path: str) -> ContentKind:
    extension = os.path.splitext(path)[1].lower()
    try:
        return EXTENSION_KINDS[extension]
    except KeyError:
        supported = ", ".join(sorted(EXTENSION_KINDS))
        raise UnsupportedInputError(
            f"Unsupported file type '{extension or os.path.basename(path)}'. Expected one of: {supported}."
        ) from None


def convert_source(
        filename: str,
        data: bytes,
        style: Optional[NoteStyle] = None,
        logger: Optional[Callable[[str], None]] = None
) -> tuple[bytes, str]:
    """
    Converts the bytes of one input file into a .tns document.

    Args:
        filename (str): Original file name, used for dispatch and as the Python member name.
        data (bytes): Raw file content, UTF-8 with an optional BOM.
        style (Optional[NoteStyle]): Layout of text notes.
        logger (Optional[Callable[[str], None]]): Callback for streaming log lines.

    Returns:
        tuple[bytes, str]: The .tns bytes and the full log.
    """
    log_stream = []

    def log(message: str):
        log_stream.append(message)
        if logger:
            logger(message)

    content_kind = detect_content_kind(filename)
    log(f"[READ] {filename}: {len(data)} bytes, treated as {content_kind}.")

    try:
        content = data.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise ConversionError(f"{filename} is not valid UTF-8: {e}") from e

    log("[CONVERT] Building the TI-Nspire document...")
    tns_bytes = embed(
        content,
        content_kind,
        filename=os.path.basename(filename),
        style=style,
        log_callback=log,
    )
    log(f"[CONVERT] Document ready ({len(tns_bytes)} bytes).")
    return tns_bytes, "\n".join(log_stream)


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def _write_atomic(path: str, data: bytes):
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".lunatex-", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        # mkstemp creates the file as 0600; give it the mode a plain open() would.
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def convert_file(
        input_path: str,
        output_path: str,
        style: Optional[NoteStyle] = None,
        logger: Optional[Callable[[str], None]] = None
) -> str:
    """
    Reads `input_path`, converts it and writes the .tns to `output_path`.
    The output file only appears once the whole document has been written.
    Returns the conversion log.
    """
    # Fail on the extension before touching the disk.
    detect_content_kind(input_path)

    with open(input_path, 'rb') as f:
        data = f.read()

    tns_bytes, log = convert_source(input_path, data, style=style, logger=logger)

    _write_atomic(output_path, tns_bytes)
    message = f"[WRITE] {output_path}: {len(tns_bytes)} bytes."
    if logger:
        logger(message)
    return log + "\n" + message
