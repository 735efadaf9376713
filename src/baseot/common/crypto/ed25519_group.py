# common/crypto/ed25519_group.py
from __future__ import annotations

import nacl.bindings
import nacl.utils

from baseot.common.errors import InvalidGroupElement
from baseot.common.utils.checks import ensure_in_Zq_star
from baseot.common.utils.encode import i2osp_le, os2ip_le


class Ed25519Group:
    """
    Prime-order subgroup of edwards25519, backed by libsodium (PyNaCl bindings).

    Conventions:
      - group elements are the 32-byte canonical point encodings (bytes);
        the encoding is also what gets hashed in the KDF
      - exponents are ints in Z_q^* and are only turned into bytes at the
        libsodium boundary; they never leave this object as bytes
      - multiplicative notation as in the paper: power(P, e) = e*P, and
        add/sub are the group operation and its inverse

    The *_noclamp scalar multiplications are used throughout: clamping would
    change the exponent and break g^(ar) == (g^a)^r.
    """

    q = 2**252 + 27742317777372353535851937790883648493
    ELEMENT_LEN = nacl.bindings.crypto_core_ed25519_BYTES
    SCALAR_LEN = nacl.bindings.crypto_core_ed25519_SCALARBYTES
    _WIDE_LEN = nacl.bindings.crypto_core_ed25519_NONREDUCEDSCALARBYTES

    def __init__(self):
        self.g = nacl.bindings.crypto_scalarmult_ed25519_base_noclamp(i2osp_le(1, self.SCALAR_LEN))

    # -------- scalars --------
    def get_random_exponent(self) -> int:
        """Uniform exponent in 1..q-1 (64 random bytes reduced mod q)."""
        while True:
            wide = nacl.utils.random(self._WIDE_LEN)
            e = os2ip_le(nacl.bindings.crypto_core_ed25519_scalar_reduce(wide))
            if e != 0:
                return e

    def _scalar_bytes(self, e: int) -> bytes:
        ensure_in_Zq_star(e, self.q, name="exponent")
        return i2osp_le(e, self.SCALAR_LEN)

    # -------- elements --------
    def is_element(self, P: bytes) -> bool:
        if not isinstance(P, (bytes, bytearray)) or len(P) != self.ELEMENT_LEN:
            return False
        return bool(nacl.bindings.crypto_core_ed25519_is_valid_point(bytes(P)))

    def ensure_element(self, P: bytes, *, name: str = "element") -> bytes:
        if not self.is_element(P):
            raise InvalidGroupElement(f"{name} is not a valid ed25519 subgroup element")
        return bytes(P)

    def encode(self, P: bytes) -> bytes:
        """Canonical fixed-width encoding (the point bytes themselves)."""
        return self.ensure_element(P)

    def base_power(self, e: int) -> bytes:
        """g^e"""
        return nacl.bindings.crypto_scalarmult_ed25519_base_noclamp(self._scalar_bytes(e))

    def power(self, P: bytes, e: int) -> bytes:
        """P^e"""
        return nacl.bindings.crypto_scalarmult_ed25519_noclamp(self._scalar_bytes(e), bytes(P))

    def add(self, P: bytes, Q: bytes) -> bytes:
        return nacl.bindings.crypto_core_ed25519_add(bytes(P), bytes(Q))

    def sub(self, P: bytes, Q: bytes) -> bytes:
        return nacl.bindings.crypto_core_ed25519_sub(bytes(P), bytes(Q))

    def random_element(self) -> bytes:
        """g^t for a fresh t; t is not returned and not kept."""
        return self.base_power(self.get_random_exponent())
