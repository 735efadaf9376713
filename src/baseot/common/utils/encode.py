# common/utils/encode.py
from __future__ import annotations

# =========================
# Byte utilities
# =========================

def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two equal-length byte strings."""
    if len(a) != len(b):
        raise ValueError("xor_bytes: length mismatch")
    return bytes(x ^ y for x, y in zip(a, b))

# =========================
# Fixed-length scalar encodings (little-endian, as libsodium expects)
# =========================

def i2osp_le(x: int, length: int) -> bytes:
    """
    Integer to little-endian octet string of fixed length.
    Raises if x cannot fit into `length` bytes.
    """
    if length < 0:
        raise ValueError("i2osp_le: length must be non-negative")
    if x < 0 or x >= (1 << (8 * length)):
        raise ValueError("i2osp_le: integer too large for the requested length")
    return int(x).to_bytes(length, "little")

def os2ip_le(b: bytes) -> int:
    """Little-endian octet string to integer."""
    if not isinstance(b, (bytes, bytearray)):
        raise TypeError("os2ip_le: input must be bytes")
    return int.from_bytes(b, "little")
