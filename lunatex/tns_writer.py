# lunatex/tns_writer.py
"""
Serializes archive entries into a .tns file.

A .tns file is a ZIP archive with two TI twists: the first local header starts
with `*TIMLP` plus a four-digit version instead of `PK\\x03\\x04`, and the end of
central directory record starts with `TIPD` instead of `PK\\x05\\x06`.
"""
import io
import struct
import zlib
from dataclasses import dataclass
from typing import List

from .schemas import TnsEntry

TI_HEADER_MAGIC = b"*TIMLP"
TI_VERSION_DEFAULT = b"0500"
TI_VERSION_BITMAP = b"0700"
STD_LOCAL_HEADER_SIG = b"PK\x03\x04"
CENTRAL_DIR_SIG = b"PK\x01\x02"
TI_END_SIG = b"TIPD"

VERSION_NEEDED = 20
VERSION_MADE_BY = 20
DOS_TIMESTAMP = 0x00200000


@dataclass
class _WrittenEntry:
    name: bytes
    method: int
    crc32: int
    compressed_size: int
    uncompressed_size: int
    local_header_offset: int


def _local_header_fields(entry: _WrittenEntry) -> bytes:
    # version, flags, method, dos time/date, crc, sizes, name length, extra length
    return struct.pack(
        '<HHHIIIIHH',
        VERSION_NEEDED, 0, entry.method, DOS_TIMESTAMP,
        entry.crc32, entry.compressed_size, entry.uncompressed_size,
        len(entry.name), 0,
    ) + entry.name


def _central_dir_entry(entry: _WrittenEntry) -> bytes:
    return CENTRAL_DIR_SIG + struct.pack(
        '<HHHHIIIIHHHHHII',
        VERSION_MADE_BY, VERSION_NEEDED, 0, entry.method, DOS_TIMESTAMP,
        entry.crc32, entry.compressed_size, entry.uncompressed_size,
        len(entry.name), 0, 0, 0, 0, 0,
        entry.local_header_offset,
    ) + entry.name


def write_tns(entries: List[TnsEntry], has_bitmap: bool = False) -> bytes:
    """
    Builds the complete archive in memory.

    Args:
        entries (List[TnsEntry]): Archive members in order. The first one gets the TI header.
        has_bitmap (bool): Marks the document as carrying a bitmap (version 0700).

    Returns:
        bytes: The .tns file content.
    """
    buffer = io.BytesIO()
    written: List[_WrittenEntry] = []
    version = TI_VERSION_BITMAP if has_bitmap else TI_VERSION_DEFAULT

    for i, entry in enumerate(entries):
        compressed_size = len(entry.data)
        record = _WrittenEntry(
            name=entry.filename.encode('utf-8'),
            method=entry.method,
            crc32=entry.crc32 if entry.crc32 is not None else zlib.crc32(entry.data),
            compressed_size=compressed_size,
            uncompressed_size=entry.uncompressed_size if entry.uncompressed_size is not None else compressed_size,
            local_header_offset=buffer.tell(),
        )
        signature = TI_HEADER_MAGIC + version if i == 0 else STD_LOCAL_HEADER_SIG
        buffer.write(signature)
        buffer.write(_local_header_fields(record))
        buffer.write(entry.data)
        written.append(record)

    central_dir_offset = buffer.tell()
    for record in written:
        buffer.write(_central_dir_entry(record))
    central_dir_size = buffer.tell() - central_dir_offset

    buffer.write(TI_END_SIG)
    buffer.write(struct.pack('<HHHHIIH', 0, 0, len(written), len(written), central_dir_size, central_dir_offset, 0))
    return buffer.getvalue()
