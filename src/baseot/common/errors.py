# common/errors.py
from __future__ import annotations


class OTError(Exception):
    """Base class for base-OT failures."""


class InvalidChoiceBit(OTError, ValueError):
    """Choice bit outside {0, 1}."""


class PayloadLengthMismatch(OTError, ValueError):
    """Masked-XOR payload does not match the KDF digest size."""


class BatchArityMismatch(OTError, ValueError):
    """Batched inputs of different lengths."""


class InvalidGroupElement(OTError, ValueError):
    """Bytes are not a canonical point of the prime-order subgroup."""


class VariantMismatch(OTError, ValueError):
    """Message produced for the other payload encoding."""
