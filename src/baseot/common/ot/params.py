# common/ot/params.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from baseot.common.crypto.kdf import DEFAULT_HASH, digest_size


@dataclass(frozen=True)
class OTParams:
    """
    Knobs shared by both payload encodings:
      - hash_name:          hashlib name of the KDF (masked-XOR only); fixes the message length
      - max_workers:        thread-pool size for batches (None -> executor default)
      - min_parallel_batch: batches shorter than this are evaluated inline
    Neither party's choice of variant lives here: it is picked once per run via make_ot_scheme.
    """
    hash_name: str = DEFAULT_HASH
    max_workers: Optional[int] = None
    min_parallel_batch: int = 8

    def sanity_check(self) -> None:
        digest_size(self.hash_name)  # raises on unknown / variable-length hashes
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1 (or None)")
        if self.min_parallel_batch < 1:
            raise ValueError("min_parallel_batch must be >= 1")

    @property
    def message_len(self) -> int:
        """Masked-XOR payload length in bytes."""
        return digest_size(self.hash_name)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "OTParams":
        unknown = set(d.keys()) - {"hash_name", "max_workers", "min_parallel_batch"}
        if unknown:
            raise ValueError(f"unknown OTParams field(s): {sorted(unknown)}")
        params = OTParams(**d)
        params.sanity_check()
        return params
