# common/crypto/kdf.py
# random-oracle KDF for the masked-XOR base OT

from __future__ import annotations
import hashlib

DEFAULT_HASH = "sha256"


def digest_size(hash_name: str = DEFAULT_HASH) -> int:
    """
    Output length of the named hashlib algorithm.
    Variable-length functions (shake_*) report 0 and are refused: the
    masked-XOR payload length is pinned to the digest size.
    """
    try:
        size = hashlib.new(hash_name).digest_size
    except (ValueError, TypeError) as e:
        raise ValueError(f"unsupported hash {hash_name!r}: {e}") from e
    if size <= 0:
        raise ValueError(f"hash {hash_name!r} has no fixed digest size")
    return size


def kdf(element: bytes, hash_name: str = DEFAULT_HASH) -> bytes:
    """
    KDF(k) = H(encode(k)).
    * element: canonical group element encoding (the shared DH secret)
    * returns digest_size(hash_name) bytes
    """
    if not isinstance(element, (bytes, bytearray)) or len(element) == 0:
        raise TypeError("element must be non-empty bytes")
    h = hashlib.new(hash_name)
    h.update(bytes(element))
    return h.digest()
