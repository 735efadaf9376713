# common/utils/checks.py
from __future__ import annotations
from typing import Iterable, List, Sequence

from baseot.common.errors import (
    BatchArityMismatch,
    InvalidChoiceBit,
    PayloadLengthMismatch,
)

# ---------- basic type/length checks ----------

def ensure_bytes(x: bytes, *, name: str = "value") -> None:
    if not isinstance(x, (bytes, bytearray)):
        raise TypeError(f"{name} must be bytes")

def ensure_bytes_fixed(x: bytes, length: int, *, name: str = "value") -> None:
    ensure_bytes(x, name=name)
    if len(x) != length:
        raise PayloadLengthMismatch(f"{name} must be exactly {length} bytes, got {len(x)}")

# ---------- integers / ranges ----------

def ensure_int(x: int, *, name: str = "value") -> None:
    # bool is an int subclass; True/False are not accepted as integers here
    if not isinstance(x, int) or isinstance(x, bool):
        raise TypeError(f"{name} must be int")

def ensure_bit(x: int, *, name: str = "sigma") -> None:
    if isinstance(x, bool) or not isinstance(x, int) or x not in (0, 1):
        raise InvalidChoiceBit(f"{name} must be 0 or 1, got {x!r}")

def ensure_bits(xs: Iterable[int], *, name: str = "sigma_vec") -> List[int]:
    """
    Materialize and validate a choice vector in one pass.
    Returns the list so callers can iterate it again.
    """
    out = list(xs)
    for i, x in enumerate(out):
        ensure_bit(x, name=f"{name}[{i}]")
    return out

# ---------- group / field checks (Z_q) ----------

def ensure_in_Zq_star(x: int, q: int, *, name: str = "value") -> None:
    """
    For prime q, Z_q^* = {1..q-1}.
    """
    ensure_int(x, name=name)
    if not (0 < x < q):
        raise ValueError(f"{name} must be in Z_q^* (1..q-1)")

# ---------- batches ----------

def ensure_same_length(*seqs: Sequence, names: Sequence[str]) -> int:
    """
    All batched inputs must describe the same instances index by index.
    Returns the common length.
    """
    if len(seqs) != len(names):
        raise ValueError("ensure_same_length: one name per sequence")
    if not seqs:
        return 0
    n = len(seqs[0])
    for s, nm in zip(seqs[1:], names[1:]):
        if len(s) != n:
            raise BatchArityMismatch(f"{nm} has length {len(s)}, expected {n} (like {names[0]})")
    return n
