# tests/conftest.py
import struct

import pytest

from lunatex.config import STYLE_ENV_VAR


@pytest.fixture(autouse=True)
def no_style_env(monkeypatch):
    monkeypatch.delenv(STYLE_ENV_VAR, raising=False)


def _read_tns_entries(data: bytes) -> dict:
    """Walks the TIPD end record and the central directory of a .tns file."""
    assert data[-22:-18] == b"TIPD"
    _, _, count, _, cd_size, cd_offset, _ = struct.unpack('<HHHHIIH', data[-18:])
    entries = {}
    pos = cd_offset
    for _ in range(count):
        assert data[pos:pos + 4] == b"PK\x01\x02"
        fields = struct.unpack('<HHHHIIIIHHHHHII', data[pos + 4:pos + 46])
        method, crc, compressed_size, uncompressed_size, name_len = fields[3], fields[5], fields[6], fields[7], fields[8]
        offset = fields[14]
        name = data[pos + 46:pos + 46 + name_len].decode('utf-8')
        signature_len = 10 if offset == 0 else 4
        start = offset + signature_len + 26 + name_len
        entries[name] = {
            'method': method,
            'crc32': crc,
            'uncompressed_size': uncompressed_size,
            'data': data[start:start + compressed_size],
        }
        pos += 46 + name_len
    assert pos == cd_offset + cd_size
    return entries


@pytest.fixture
def read_tns_entries():
    return _read_tns_entries
