# lunatex/doccrypt.py
"""
Compression and encryption of TI document parts.

TI-encrypted parts are raw-deflated, zero padded to the 3DES block size and then
XORed with a keystream. The keystream block for index i is the 3DES-ECB
encryption of an 8-byte counter block built from IVEC_BASE + (i mod 1024).
"""
import struct
import zlib

from Crypto.Cipher import DES3

from .errors import ContainerError, EncryptionError

BLOCK_SIZE = 8

# Fixed keys of the TI document format (K1 | K2 | K3).
TI_DES_KEY = bytes([
    0x16, 0xA7, 0xA7, 0x32, 0x68, 0xA7, 0xBA, 0x73,
    0xD9, 0xA8, 0x86, 0xA4, 0x34, 0x45, 0x94, 0x10,
    0x3D, 0x80, 0x8C, 0xB5, 0xDF, 0xB3, 0x80, 0x6B,
])
IVEC_BASE = 0x6fe21307
COUNTER_WRAP = 1024


# --- 1. Raw deflate ---
def compress_xml(data: bytes) -> bytes:
    compressor = zlib.compressobj(zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, -15)
    return compressor.compress(data) + compressor.flush()


def decompress_xml(data: bytes) -> bytes:
    try:
        decompressor = zlib.decompressobj(-15)
        return decompressor.decompress(data) + decompressor.flush()
    except zlib.error as e:
        raise ContainerError(f"Invalid deflate data: {e}") from e


def pad_to_8_bytes(data: bytes) -> bytes:
    remainder = len(data) % BLOCK_SIZE
    if remainder == 0:
        return data
    return data + b"\x00" * (BLOCK_SIZE - remainder)


# --- 2. 3DES keystream ---
def _counter_block(index: int) -> bytes:
    ivec = (IVEC_BASE + index % COUNTER_WRAP) & 0xFFFFFFFF
    return b"\x00\x00\x00\x00" + struct.pack('<I', ivec)


def encrypt_document(data: bytes) -> bytes:
    """
    Applies the TI document keystream to `data`.

    The operation is an XOR, so running it twice returns the input.

    Raises:
        EncryptionError: if the length is not a multiple of 8 bytes.
    """
    if len(data) % BLOCK_SIZE != 0:
        raise EncryptionError(f"Data length must be a multiple of 8 bytes, got {len(data)} bytes.")

    block_count = len(data) // BLOCK_SIZE
    if block_count == 0:
        return b""
    # The counter repeats every 1024 blocks, so at most 1024 distinct keystream blocks.
    counters = b"".join(_counter_block(i) for i in range(min(block_count, COUNTER_WRAP)))
    keystream_cycle = DES3.new(TI_DES_KEY, DES3.MODE_ECB).encrypt(counters)

    out = bytearray(len(data))
    for i in range(block_count):
        start = i * BLOCK_SIZE
        key_start = (i % COUNTER_WRAP) * BLOCK_SIZE
        for j in range(BLOCK_SIZE):
            out[start + j] = data[start + j] ^ keystream_cycle[key_start + j]
    return bytes(out)
