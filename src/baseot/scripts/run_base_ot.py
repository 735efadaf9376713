# src/baseot/scripts/run_base_ot.py
from __future__ import annotations
import argparse
import json
import logging
import os
import secrets
import sys
import time
from typing import List, Optional

from baseot.common.crypto.ed25519_group import Ed25519Group
from baseot.common.net.messages import ResponseMessage, SetupMessage
from baseot.common.ot.base_ot2.batch_ot import BatchOT
from baseot.common.ot.base_ot2.dh_ot import OTScheme, make_ot_scheme
from baseot.common.ot.params import OTParams

logger = logging.getLogger("baseot.scripts.run_base_ot")


# ============================================================
# Payloads
# ============================================================

def random_payloads(scheme: OTScheme, n: int) -> List[bytes]:
    """n fresh payloads valid for the scheme's encoding."""
    if scheme.variant == "group":
        return [scheme.group.random_element() for _ in range(n)]
    return [os.urandom(scheme.params.message_len) for _ in range(n)]


# ============================================================
# One batched run, both rounds through JSON
# ============================================================

def run_once(scheme: OTScheme, n: int, *, show_transcript: bool = False) -> int:
    """
    Receiver and Sender share this process; the two round outputs still go
    through json.dumps/json.loads so the wire messages are exercised.
    Returns the number of indices where the wrong message came back.
    """
    batch = BatchOT(scheme)
    sigmas = [secrets.randbelow(2) for _ in range(n)]
    x0 = random_payloads(scheme, n)
    x1 = random_payloads(scheme, n)

    # 1) Receiver
    a_vec, h0_vec, h1_vec = batch.batch_setup(sigmas)
    wire1 = json.dumps(SetupMessage(scheme.variant, h0_vec, h1_vec).to_json())

    # 2) Sender
    setup_msg = SetupMessage.from_json(json.loads(wire1))
    setup_msg.expect_variant(scheme.variant)
    u_vec, v0_vec, v1_vec = batch.batch_respond(setup_msg.h0, setup_msg.h1, x0, x1)
    wire2 = json.dumps(ResponseMessage(scheme.variant, u_vec, v0_vec, v1_vec).to_json())

    # 3) Receiver
    resp_msg = ResponseMessage.from_json(json.loads(wire2))
    resp_msg.expect_variant(scheme.variant)
    out = batch.batch_recover(sigmas, a_vec, resp_msg.u, resp_msg.v0, resp_msg.v1)

    if show_transcript:
        print("round 1:", wire1)
        print("round 2:", wire2)

    failures = 0
    for i, (s, x) in enumerate(zip(sigmas, out)):
        expected = x1[i] if s else x0[i]
        if x != expected:
            logger.error("index %d: recovered value does not match x%d", i, s)
            failures += 1
    return failures


# ============================================================
# CLI
# ============================================================

def parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a batch of semi-honest 1-of-2 base OTs (ALSZ13 protocol 5.1) locally")
    p.add_argument("--variant", choices=["xor", "group"], default="xor",
                   help="Payload encoding: 'xor' (hash-masked bytes) or 'group' (group elements)")
    p.add_argument("--n", type=int, default=16, help="Number of OT instances in the batch")
    p.add_argument("--hash", default="sha256", help="hashlib name of the KDF (xor variant)")
    p.add_argument("--workers", type=int, default=None, help="Thread-pool size for batches (default: executor default)")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging level")
    p.add_argument("--show-transcript", action="store_true", help="Print both JSON messages")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.n < 1:
        raise SystemExit("--n must be >= 1")
    params = OTParams(hash_name=args.hash, max_workers=args.workers)
    try:
        params.sanity_check()
    except ValueError as e:
        raise SystemExit(f"invalid parameters: {e}")

    scheme = make_ot_scheme(args.variant, Ed25519Group(), params)

    t0 = time.perf_counter()
    failures = run_once(scheme, args.n, show_transcript=args.show_transcript)
    elapsed = time.perf_counter() - t0

    print("\nSummary:")
    print(f"  variant   : {scheme.variant}")
    print(f"  instances : {args.n}")
    if scheme.variant == "xor":
        print(f"  kdf       : {params.hash_name} ({params.message_len} B payloads)")
    print(f"  workers   : {params.max_workers or 'default'}")
    print(f"  elapsed   : {elapsed * 1000:.1f} ms")
    if failures:
        print(f"[FAIL] {failures}/{args.n} instances recovered the wrong value")
        return 1
    print("[OK] every instance recovered the chosen message")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
