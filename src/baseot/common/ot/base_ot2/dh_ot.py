# common/ot/base_ot2/dh_ot.py
# Semi-honest 1-of-2 OT from DH key agreement, protocol 5.1 of
# Asharov, Lindell, Schneider, Zohner, "More Efficient Oblivious Transfer
# and Extensions for Faster Secure Computation" (ePrint 2013/552).

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Literal, Optional

from baseot.common.crypto.ed25519_group import Ed25519Group
from baseot.common.crypto.kdf import kdf
from baseot.common.ot.params import OTParams
from baseot.common.utils.checks import ensure_bit, ensure_bytes_fixed
from baseot.common.utils.encode import xor_bytes

logger = logging.getLogger(__name__)

Variant = Literal["xor", "group"]


@dataclass(frozen=True)
class ReceiverSetup:
    """
    Round-1 output. `a` stays with the Receiver; (h0, h1) go to the Sender.
    Unpacks as (a, h0, h1).
    """
    a: int = field(repr=False)
    h0: bytes
    h1: bytes

    def public(self) -> tuple[bytes, bytes]:
        return self.h0, self.h1

    def __iter__(self):
        return iter((self.a, self.h0, self.h1))


@dataclass(frozen=True)
class SenderResponse:
    """Round-2 output, sent back to the Receiver. Unpacks as (u, v0, v1)."""
    u: bytes
    v0: bytes
    v1: bytes

    def ciphertext(self, bit: int) -> bytes:
        ensure_bit(bit, name="bit")
        return self.v1 if bit else self.v0

    def __iter__(self):
        return iter((self.u, self.v0, self.v1))


class OTScheme(ABC):
    """
    One run = setup -> respond -> recover; every call is independent.

    The DH part (who exponentiates what) is shared. Subclasses only decide
    how a shared secret k_b blinds the payload x_b, and how to undo it.
    Sender and Receiver must use the same subclass for a run.
    """

    variant: Variant

    def __init__(self, group: Optional[Ed25519Group] = None, params: OTParams = OTParams()):
        params.sanity_check()
        self.group = group if group is not None else Ed25519Group()
        self.params = params

    # -------- round 1 (Receiver) --------
    def setup(self, sigma: int) -> ReceiverSetup:
        ensure_bit(sigma)
        a = self.group.get_random_exponent()
        h_sigma = self.group.base_power(a)
        h_other = self.group.random_element()
        if sigma == 0:
            return ReceiverSetup(a=a, h0=h_sigma, h1=h_other)
        return ReceiverSetup(a=a, h0=h_other, h1=h_sigma)

    # -------- round 2 (Sender) --------
    def respond(self, h0: bytes, h1: bytes, x0: bytes, x1: bytes) -> SenderResponse:
        h0 = self.group.ensure_element(h0, name="h0")
        h1 = self.group.ensure_element(h1, name="h1")
        self.check_message(x0, name="x0")
        self.check_message(x1, name="x1")

        # one r for both branches
        r = self.group.get_random_exponent()
        u = self.group.base_power(r)
        v0 = self.blind(self.group.power(h0, r), bytes(x0))
        v1 = self.blind(self.group.power(h1, r), bytes(x1))
        return SenderResponse(u=u, v0=v0, v1=v1)

    # -------- output (Receiver) --------
    def recover(self, sigma: int, a: int, u: bytes, v0: bytes, v1: bytes) -> bytes:
        ensure_bit(sigma)
        u = self.group.ensure_element(u, name="u")
        v_sigma = v1 if sigma else v0
        self.check_ciphertext(v_sigma, name=f"v{sigma}")
        k_sigma = self.group.power(u, a)  # u^a = g^(ra) = h_sigma^r
        return self.unblind(k_sigma, bytes(v_sigma))

    # -------- encoding-specific --------
    @abstractmethod
    def check_message(self, x: bytes, *, name: str) -> None:
        """Raise unless x is a valid payload for this encoding."""

    def check_ciphertext(self, v: bytes, *, name: str) -> None:
        self.check_message(v, name=name)

    @abstractmethod
    def blind(self, k: bytes, x: bytes) -> bytes:
        """v = E(k, x)"""

    @abstractmethod
    def unblind(self, k: bytes, v: bytes) -> bytes:
        """x = D(k, v)"""


class MaskedXorOT(OTScheme):
    """
    v_b = H(encode(k_b)) XOR x_b.
    Payloads are opaque byte strings of exactly params.message_len bytes.
    """

    variant = "xor"

    @property
    def message_len(self) -> int:
        return self.params.message_len

    def check_message(self, x: bytes, *, name: str) -> None:
        ensure_bytes_fixed(x, self.message_len, name=name)

    def _pad(self, k: bytes) -> bytes:
        return kdf(self.group.encode(k), self.params.hash_name)

    def blind(self, k: bytes, x: bytes) -> bytes:
        return xor_bytes(self._pad(k), x)

    def unblind(self, k: bytes, v: bytes) -> bytes:
        return xor_bytes(self._pad(k), v)


class DirectGroupOT(OTScheme):
    """
    v_b = h_b^r + x_b, computed in the group, no hashing.
    Payloads are group elements.
    """

    variant = "group"

    def check_message(self, x: bytes, *, name: str) -> None:
        self.group.ensure_element(x, name=name)

    def blind(self, k: bytes, x: bytes) -> bytes:
        return self.group.add(k, x)

    def unblind(self, k: bytes, v: bytes) -> bytes:
        return self.group.sub(v, k)


_SCHEMES = {
    MaskedXorOT.variant: MaskedXorOT,
    DirectGroupOT.variant: DirectGroupOT,
}


def make_ot_scheme(
    variant: Variant = "xor",
    group: Optional[Ed25519Group] = None,
    params: OTParams = OTParams(),
) -> OTScheme:
    """
    Pick the payload encoding once per run:
      - "xor":   MaskedXorOT (byte strings, hash-masked)
      - "group": DirectGroupOT (group elements, additively blinded)
    """
    try:
        cls = _SCHEMES[variant]
    except KeyError:
        raise ValueError(f"Unknown OT variant {variant!r} (expected one of {sorted(_SCHEMES)})") from None
    logger.debug("base OT scheme: variant=%s hash=%s", variant, params.hash_name)
    return cls(group, params)
