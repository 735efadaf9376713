# tests/test_messages.py
from __future__ import annotations
import json
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from baseot.common.crypto.ed25519_group import Ed25519Group
from baseot.common.errors import BatchArityMismatch, VariantMismatch
from baseot.common.net.messages import PROTO_VERSION, ResponseMessage, SetupMessage
from baseot.common.ot.base_ot2.batch_ot import BatchOT
from baseot.common.ot.base_ot2.dh_ot import make_ot_scheme
from baseot.common.ot.params import OTParams
from baseot.scripts.run_base_ot import main as cli_main

GROUP = Ed25519Group()

def banner(msg: str):
    print("\n" + "="*8 + " " + msg + " " + "="*8)

# -----------------------
# wire messages
# -----------------------

def test_messages_carry_a_full_run():
    banner("messages: batched run over JSON")
    for variant in ("xor", "group"):
        batch = BatchOT(make_ot_scheme(variant, GROUP))
        sigmas = [1, 0, 1, 1]
        if variant == "group":
            x0 = [GROUP.random_element() for _ in sigmas]
            x1 = [GROUP.random_element() for _ in sigmas]
        else:
            x0 = [os.urandom(32) for _ in sigmas]
            x1 = [os.urandom(32) for _ in sigmas]

        a_vec, h0_vec, h1_vec = batch.batch_setup(sigmas)
        wire1 = json.dumps(SetupMessage(variant, h0_vec, h1_vec).to_json())
        m1 = SetupMessage.from_json(json.loads(wire1))
        assert len(m1) == 4 and m1.h0 == h0_vec and m1.h1 == h1_vec
        assert "a" not in json.loads(wire1)

        u_vec, v0_vec, v1_vec = batch.batch_respond(m1.h0, m1.h1, x0, x1)
        wire2 = json.dumps(ResponseMessage(variant, u_vec, v0_vec, v1_vec).to_json())
        m2 = ResponseMessage.from_json(json.loads(wire2))
        assert m2.ver == PROTO_VERSION

        out = batch.batch_recover(sigmas, a_vec, m2.u, m2.v0, m2.v1)
        assert out == [x1[0], x0[1], x1[2], x1[3]]
    print("[OK] both variants survive a JSON round trip")

def test_variant_mismatch():
    banner("messages: variant mismatch")
    msg = SetupMessage("group", [GROUP.random_element()], [GROUP.random_element()])
    msg.expect_variant("group")
    try:
        msg.expect_variant("xor")
        raise AssertionError("expected VariantMismatch")
    except VariantMismatch:
        pass
    resp = ResponseMessage("xor", [GROUP.random_element()], [os.urandom(32)], [os.urandom(32)])
    try:
        resp.expect_variant("group")
        raise AssertionError("expected VariantMismatch")
    except VariantMismatch:
        pass
    print("[OK] mixing encodings is detected")

def test_malformed_messages():
    banner("messages: malformed input")
    P = GROUP.random_element()
    try:
        SetupMessage("xor", [P, P], [P]).to_json()
        raise AssertionError("expected BatchArityMismatch")
    except BatchArityMismatch:
        pass
    try:
        SetupMessage.from_json({"variant": "xor", "h0_b64": []})
        raise AssertionError("expected missing field error")
    except ValueError:
        pass
    try:
        SetupMessage.from_json({"variant": "aes", "h0_b64": [], "h1_b64": []})
        raise AssertionError("expected unknown variant error")
    except ValueError:
        pass
    good = SetupMessage("xor", [P], [P]).to_json()
    try:
        SetupMessage.from_json(dict(good, ver="0.9"))
        raise AssertionError("expected version mismatch")
    except ValueError:
        pass
    try:
        ResponseMessage("group", [P], [b"\x00" * 31], [P]).to_json()
        raise AssertionError("group ciphertexts must be points")
    except ValueError:
        pass
    print("[OK] arity, fields, variant, version and sizes checked")

# -----------------------
# CLI
# -----------------------

def test_cli_smoke():
    banner("CLI smoke run")
    assert cli_main(["--variant", "xor", "--n", "5"]) == 0
    assert cli_main(["--variant", "group", "--n", "10", "--workers", "2"]) == 0
    assert cli_main(["--variant", "xor", "--n", "3", "--hash", "sha512"]) == 0
    print("[OK] CLI runs both variants")

def test_params_dict():
    banner("params: to_dict / from_dict")
    p = OTParams(hash_name="sha512", max_workers=2)
    assert OTParams.from_dict(p.to_dict()) == p
    for bad in ({"hash_name": "shake_256"}, {"max_workers": 0}, {"nope": 1}):
        try:
            OTParams.from_dict(bad)
            raise AssertionError(f"{bad} should be refused")
        except ValueError:
            pass
    print("[OK] params validated")

# -----------------------
# main
# -----------------------

def main():
    test_messages_carry_a_full_run()
    test_variant_mismatch()
    test_malformed_messages()
    test_cli_smoke()
    test_params_dict()

    print("\nAll message tests passed")

if __name__ == "__main__":
    main()
