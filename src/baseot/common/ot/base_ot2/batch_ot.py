# common/ot/base_ot2/batch_ot.py
# many independent base OTs in one exchange; NOT an OT extension

from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Sequence, Tuple, TypeVar, Union

from baseot.common.ot.base_ot2.dh_ot import OTScheme, ReceiverSetup, SenderResponse
from baseot.common.utils.checks import ensure_bits, ensure_same_length

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray]
T = TypeVar("T")


class BatchOT:
    """
    Lifts the three rounds of an OTScheme over vectors of independent instances.

    Index i of every input vector is instance i. Each instance draws its own
    randomness; nothing is shared between indices, so they are evaluated on a
    bounded thread pool (libsodium releases the GIL). Output order always
    matches input order.

    API (same shape as the single-instance rounds, columns instead of scalars):
      - batch_setup(sigma_vec) -> (a_vec, h0_vec, h1_vec)
      - batch_respond(h0_vec, h1_vec, x0_vec, x1_vec) -> (u_vec, v0_vec, v1_vec)
      - batch_recover(sigma_vec, a_vec, u_vec, v0_vec, v1_vec) -> x_vec
      - batch_transfer(sigma_vec, x0_vec, x1_vec) -> x_vec   (both parties in-process)
    """

    def __init__(self, scheme: OTScheme):
        self.scheme = scheme
        self.params = scheme.params

    # -------- plumbing --------
    def _map(self, fn: Callable[..., T], *columns: Sequence) -> List[T]:
        n = len(columns[0]) if columns else 0
        if n == 0:
            return []
        workers = self.params.max_workers
        if n < self.params.min_parallel_batch or workers == 1:
            return [fn(*row) for row in zip(*columns)]
        logger.debug("batch of %d %s OTs on %s workers", n, self.scheme.variant, workers or "default")
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields in submission order and re-raises the first worker error
            return list(pool.map(fn, *columns))

    # -------- round 1 --------
    def batch_setup(self, sigma_vec: Iterable[int]) -> Tuple[List[int], List[bytes], List[bytes]]:
        # every bit is checked before the first instance samples anything
        sigmas = ensure_bits(sigma_vec)
        setups: List[ReceiverSetup] = self._map(self.scheme.setup, sigmas)
        return (
            [s.a for s in setups],
            [s.h0 for s in setups],
            [s.h1 for s in setups],
        )

    # -------- round 2 --------
    def batch_respond(
        self,
        h0_vec: Sequence[bytes],
        h1_vec: Sequence[bytes],
        x0_vec: Sequence[BytesLike],
        x1_vec: Sequence[BytesLike],
    ) -> Tuple[List[bytes], List[bytes], List[bytes]]:
        h0_vec, h1_vec, x0_vec, x1_vec = list(h0_vec), list(h1_vec), list(x0_vec), list(x1_vec)
        ensure_same_length(h0_vec, h1_vec, x0_vec, x1_vec,
                           names=("h0_vec", "h1_vec", "x0_vec", "x1_vec"))
        responses: List[SenderResponse] = self._map(self.scheme.respond, h0_vec, h1_vec, x0_vec, x1_vec)
        return (
            [r.u for r in responses],
            [r.v0 for r in responses],
            [r.v1 for r in responses],
        )

    # -------- output --------
    def batch_recover(
        self,
        sigma_vec: Sequence[int],
        a_vec: Sequence[int],
        u_vec: Sequence[bytes],
        v0_vec: Sequence[bytes],
        v1_vec: Sequence[bytes],
    ) -> List[bytes]:
        sigmas = ensure_bits(sigma_vec)
        a_vec, u_vec, v0_vec, v1_vec = list(a_vec), list(u_vec), list(v0_vec), list(v1_vec)
        ensure_same_length(sigmas, a_vec, u_vec, v0_vec, v1_vec,
                           names=("sigma_vec", "a_vec", "u_vec", "v0_vec", "v1_vec"))
        return self._map(self.scheme.recover, sigmas, a_vec, u_vec, v0_vec, v1_vec)

    # -------- local simulation --------
    def batch_transfer(
        self,
        sigma_vec: Iterable[int],
        x0_vec: Sequence[BytesLike],
        x1_vec: Sequence[BytesLike],
    ) -> List[bytes]:
        """
        Run Receiver and Sender back to back in this process.
        Handy for tests and benchmarks; a real deployment moves the two
        round outputs over its own transport instead.
        """
        sigmas = ensure_bits(sigma_vec)
        x0_vec, x1_vec = list(x0_vec), list(x1_vec)
        ensure_same_length(sigmas, x0_vec, x1_vec, names=("sigma_vec", "x0_vec", "x1_vec"))
        a_vec, h0_vec, h1_vec = self.batch_setup(sigmas)
        u_vec, v0_vec, v1_vec = self.batch_respond(h0_vec, h1_vec, x0_vec, x1_vec)
        return self.batch_recover(sigmas, a_vec, u_vec, v0_vec, v1_vec)
