# common/net/messages.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple
import base64

from baseot.common.errors import VariantMismatch
from baseot.common.utils.checks import ensure_same_length

# =========================
# Protocol constants
# =========================

PROTO_VERSION = "1.0"
MEDIA_TYPE_JSON = "application/baseot+json;v=1"
POINT_LEN = 32  # canonical ed25519 encoding

VARIANTS = ("xor", "group")

__all__ = [
    "PROTO_VERSION", "MEDIA_TYPE_JSON", "POINT_LEN", "VARIANTS",
    "SetupMessage", "ResponseMessage",
    "b64encode_bytes", "b64decode_bytes",
]


# =========================
# Helpers
# =========================

def b64encode_bytes(data: bytes) -> str:
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("b64encode_bytes expects bytes")
    return base64.b64encode(bytes(data)).decode("ascii")

def b64decode_bytes(s: str) -> bytes:
    if not isinstance(s, str):
        raise TypeError("b64decode_bytes expects str")
    return base64.b64decode(s.encode("ascii"), validate=True)

def _require_fields(obj: Dict[str, Any], fields: Tuple[str, ...]) -> None:
    missing = [k for k in fields if k not in obj]
    if missing:
        raise ValueError(f"missing required field(s): {missing}")

def _b64_list(name: str, xs: Any) -> List[bytes]:
    if not isinstance(xs, list):
        raise TypeError(f"{name} must be a list of base64 strings")
    return [b64decode_bytes(x) for x in xs]

def _check_variant(variant: Any) -> str:
    if variant not in VARIANTS:
        raise ValueError(f"unknown variant {variant!r}")
    return variant

def _check_points(name: str, xs: List[bytes]) -> None:
    for i, p in enumerate(xs):
        if len(p) != POINT_LEN:
            raise ValueError(f"{name}[{i}] must be {POINT_LEN} bytes, got {len(p)}")

def _check_version(ver: Any) -> str:
    if not isinstance(ver, str):
        raise TypeError("ver must be str")
    if ver != PROTO_VERSION:
        raise ValueError(f"protocol version mismatch: got {ver}, expect {PROTO_VERSION}")
    return ver


# =========================
# Round 1: Receiver -> Sender
# =========================

@dataclass(frozen=True)
class SetupMessage:
    """
    Public part of the Receiver setup for n instances (n = 1 for a single OT).

    Fields:
      - variant: payload encoding both parties agreed on ("xor" | "group")
      - h0, h1: canonical group elements, index i = instance i
      - ver: protocol version
    The private scalars never appear here.
    """
    variant: str
    h0: List[bytes]
    h1: List[bytes]
    ver: str = PROTO_VERSION

    def sanity_check(self) -> None:
        _check_variant(self.variant)
        ensure_same_length(self.h0, self.h1, names=("h0", "h1"))
        _check_points("h0", self.h0)
        _check_points("h1", self.h1)

    def expect_variant(self, variant: str) -> None:
        if self.variant != variant:
            raise VariantMismatch(f"setup message is for variant {self.variant!r}, local variant is {variant!r}")

    def __len__(self) -> int:
        return len(self.h0)

    def to_json(self) -> Dict[str, Any]:
        self.sanity_check()
        return {
            "variant": self.variant,
            "h0_b64": [b64encode_bytes(h) for h in self.h0],
            "h1_b64": [b64encode_bytes(h) for h in self.h1],
            "ver": self.ver,
        }

    @staticmethod
    def from_json(obj: Dict[str, Any]) -> "SetupMessage":
        _require_fields(obj, ("variant", "h0_b64", "h1_b64"))
        msg = SetupMessage(
            variant=_check_variant(obj["variant"]),
            h0=_b64_list("h0_b64", obj["h0_b64"]),
            h1=_b64_list("h1_b64", obj["h1_b64"]),
            ver=_check_version(obj.get("ver", PROTO_VERSION)),
        )
        msg.sanity_check()
        return msg


# =========================
# Round 2: Sender -> Receiver
# =========================

@dataclass(frozen=True)
class ResponseMessage:
    """
    Sender response for n instances.

    Fields:
      - variant: must echo the SetupMessage variant
      - u: ephemeral keys g^r
      - v0, v1: masked payloads (digest-sized bytes for "xor", points for "group")
      - ver: protocol version
    """
    variant: str
    u: List[bytes]
    v0: List[bytes]
    v1: List[bytes]
    ver: str = PROTO_VERSION

    def sanity_check(self) -> None:
        _check_variant(self.variant)
        ensure_same_length(self.u, self.v0, self.v1, names=("u", "v0", "v1"))
        _check_points("u", self.u)
        if self.variant == "group":
            _check_points("v0", self.v0)
            _check_points("v1", self.v1)

    def expect_variant(self, variant: str) -> None:
        if self.variant != variant:
            raise VariantMismatch(f"response message is for variant {self.variant!r}, local variant is {variant!r}")

    def __len__(self) -> int:
        return len(self.u)

    def to_json(self) -> Dict[str, Any]:
        self.sanity_check()
        return {
            "variant": self.variant,
            "u_b64": [b64encode_bytes(x) for x in self.u],
            "v0_b64": [b64encode_bytes(x) for x in self.v0],
            "v1_b64": [b64encode_bytes(x) for x in self.v1],
            "ver": self.ver,
        }

    @staticmethod
    def from_json(obj: Dict[str, Any]) -> "ResponseMessage":
        _require_fields(obj, ("variant", "u_b64", "v0_b64", "v1_b64"))
        msg = ResponseMessage(
            variant=_check_variant(obj["variant"]),
            u=_b64_list("u_b64", obj["u_b64"]),
            v0=_b64_list("v0_b64", obj["v0_b64"]),
            v1=_b64_list("v1_b64", obj["v1_b64"]),
            ver=_check_version(obj.get("ver", PROTO_VERSION)),
        )
        msg.sanity_check()
        return msg
