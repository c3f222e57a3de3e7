import random

import pytest

from curve import P256, SECP256K1, TOY11, TOY23, TOY263, Curve


class SequenceRandom:
    """Hands out a fixed sequence of values from randint, for nonce retry tests."""

    def __init__(self, values):
        self._values = iter(values)

    def randint(self, a, b):
        value = next(self._values)
        assert a <= value <= b
        return value


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def toy23(rng):
    return Curve(TOY23, rng=rng, max_sign_attempts=50)


@pytest.fixture
def toy11(rng):
    return Curve(TOY11, rng=rng)


@pytest.fixture
def toy263(rng):
    return Curve(TOY263, rng=rng)


@pytest.fixture
def secp256k1(rng):
    return Curve(SECP256K1, rng=rng)


@pytest.fixture
def p256(rng):
    return Curve(P256, rng=rng)
