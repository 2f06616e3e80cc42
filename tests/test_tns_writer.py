# tests/test_tns_writer.py
import struct
import zlib

from lunatex.schemas import DEFLATE_METHOD, TI_ENCRYPTED_METHOD, TnsEntry
from lunatex.tns_writer import write_tns


def _entries():
    return [
        TnsEntry(filename="Document.xml", data=b"D" * 16),
        TnsEntry(filename="Problem1.xml", data=b"P" * 24),
    ]


def test_archive_framing():
    archive = write_tns(_entries())
    assert archive.startswith(b"*TIMLP0500")
    assert archive[-22:-18] == b"TIPD"
    assert b"PK\x05\x06" not in archive


def test_bitmap_version():
    assert write_tns(_entries(), has_bitmap=True).startswith(b"*TIMLP0700")


def test_second_entry_uses_standard_header():
    archive = write_tns(_entries())
    second_offset = 10 + 26 + len("Document.xml") + 16
    assert archive[second_offset:second_offset + 4] == b"PK\x03\x04"


def test_first_local_header_fields():
    archive = write_tns(_entries())
    version, flags, method, dos_time, crc, csize, usize, name_len, extra_len = struct.unpack_from(
        '<HHHIIIIHH', archive, 10
    )
    assert (version, flags, method, dos_time) == (20, 0, TI_ENCRYPTED_METHOD, 0x00200000)
    assert crc == zlib.crc32(b"D" * 16)
    assert csize == usize == 16
    assert (name_len, extra_len) == (12, 0)
    assert archive[36:48] == b"Document.xml"


def test_central_directory(read_tns_entries):
    entries = read_tns_entries(write_tns(_entries()))
    assert list(entries) == ["Document.xml", "Problem1.xml"]
    assert entries["Problem1.xml"]["data"] == b"P" * 24
    assert entries["Problem1.xml"]["method"] == TI_ENCRYPTED_METHOD


def test_explicit_crc_and_size_are_kept(read_tns_entries):
    raw = b"print('x')\n" * 10
    deflated = TnsEntry(
        filename="x.py",
        data=b"compressed",
        method=DEFLATE_METHOD,
        uncompressed_size=len(raw),
        crc32=zlib.crc32(raw),
    )
    entries = read_tns_entries(write_tns(_entries() + [deflated]))
    assert entries["x.py"]["method"] == DEFLATE_METHOD
    assert entries["x.py"]["crc32"] == zlib.crc32(raw)
    assert entries["x.py"]["uncompressed_size"] == len(raw)
    assert entries["x.py"]["data"] == b"compressed"


def test_end_record_counts():
    archive = write_tns(_entries())
    _, _, disk_entries, total_entries, cd_size, cd_offset, comment_len = struct.unpack('<HHHHIIH', archive[-18:])
    assert disk_entries == total_entries == 2
    assert comment_len == 0
    assert cd_offset + cd_size == len(archive) - 22
