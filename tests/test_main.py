import hashlib

import pytest

from curve import TOY263
from main import hash_message, main


def test_hash_message_matches_sha256():
    expected = int(hashlib.sha256(b"Hello ECDSA").hexdigest(), 16) % TOY263.n
    assert hash_message("Hello ECDSA", TOY263.n) == expected
    assert 0 <= hash_message("anything", 13) < 13


@pytest.mark.parametrize("curve_name", ["toy263", "secp256k1"])
def test_demo_run(capsys, curve_name):
    assert main(["--curve", curve_name, "--seed", "7", "--message", "Hello threshold ECDSA"]) == 0
    out = capsys.readouterr().out
    assert "Signature valid? True" in out
    assert "DH secrets match? True" in out


def test_demo_is_deterministic_with_seed(capsys):
    main(["--curve", "toy11", "--seed", "3"])
    first = capsys.readouterr().out
    main(["--curve", "toy11", "--seed", "3"])
    assert capsys.readouterr().out == first


def test_unknown_curve_rejected():
    with pytest.raises(SystemExit):
        main(["--curve", "curve25519"])
