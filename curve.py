import logging
from dataclasses import dataclass
from typing import NamedTuple

from Crypto.Random.random import StrongRandom
from sympy import isprime

from ecc import FieldElement, Point
from inverse import NoInverseError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIGN_ATTEMPTS = 1000


class CurveNotFoundError(Exception):
    def __init__(self, name):
        self.message = "{0} is not found. Supported named curves are: {1}".format(
            name, DomainParameters.supported_curves()
        )
        super().__init__(self.message)


class SigningError(Exception):
    def __init__(self, message):
        self.message = f"Signing failed. {message}"
        super().__init__(self.message)


class KeyAgreementError(Exception):
    def __init__(self, message):
        self.message = f"Key agreement failed. {message}"
        super().__init__(self.message)


@dataclass(frozen=True)
class DomainParameters:
    name: str
    """The name of the elliptic curve."""
    p: int
    """The prime modulus of the coordinate field."""
    a: int
    """Linear coefficient of y^2 = x^3 + ax + b."""
    b: int
    """Constant coefficient of y^2 = x^3 + ax + b."""
    n: int
    """The order of the generator."""
    h: int
    """The cofactor, number of curve points divided by n."""
    gx: int
    """x coordinate of the generator."""
    gy: int
    """y coordinate of the generator."""

    def __post_init__(self):
        if not isprime(self.p):
            raise ValueError(f"Field modulus {self.p} of curve {self.name} is not prime")
        if self.n < 2:
            raise ValueError(f"Group order of curve {self.name} must be at least 2, got {self.n}")
        # self.generator raises if (gx, gy) is off the curve
        if not (self.n * self.generator).is_identity():
            raise ValueError(f"Generator of curve {self.name} does not have order {self.n}")

    @property
    def generator(self) -> Point:
        return Point(self.gx, self.gy, self.a, self.b, self.p)

    @property
    def identity(self) -> Point:
        return Point.identity(self.a, self.b, self.p)

    def point(self, x: int, y: int) -> Point:
        return Point(x, y, self.a, self.b, self.p)

    def contains(self, point: Point) -> bool:
        return (
            isinstance(point, Point)
            and point.prime == self.p
            and point.a.num == self.a
            and point.b.num == self.b
        )

    def scalar(self, value) -> FieldElement:
        """Element of the scalar field mod n. Ints must already be reduced."""
        if isinstance(value, FieldElement):
            if value.prime != self.n:
                raise ValueError(f"Scalar {value} is not reduced mod the group order {self.n}")
            return value
        return FieldElement(value, self.n)

    @classmethod
    def from_name(cls, name: str) -> "DomainParameters":
        key = name.lower()
        if key not in _NAMED_CURVES:
            raise CurveNotFoundError(name)
        return _NAMED_CURVES[key]

    @staticmethod
    def supported_curves():
        return list(_NAMED_CURVES)

    def __repr__(self):
        return "<DomainParameters name={} p=0x{:x} a=0x{:x} b=0x{:x} n=0x{:x} h={} g=(0x{:x}, 0x{:x})>".format(
            self.name, self.p, self.a, self.b, self.n, self.h, self.gx, self.gy
        )


# y^2 = x^3 + x over F_23. The curve has 24 points and (9, 5) has order 6.
TOY23 = DomainParameters("toy23", p=23, a=1, b=0, n=6, h=4, gx=9, gy=5)

# Textbook curves whose groups have prime order
TOY11 = DomainParameters("toy11", p=11, a=1, b=6, n=13, h=1, gx=5, gy=9)
TOY263 = DomainParameters("toy263", p=263, a=6, b=9, n=269, h=1, gx=0, gy=3)

SECP256K1 = DomainParameters(
    "secp256k1",
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=7,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    h=1,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)

P256 = DomainParameters(
    "p256",
    p=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF,
    a=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC,
    b=0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    n=0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    h=1,
    gx=0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296,
    gy=0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5,
)

_NAMED_CURVES = {
    params.name: params for params in (TOY23, TOY11, TOY263, SECP256K1, P256)
}


class KeyPair(NamedTuple):
    secret_key: FieldElement
    public_key: Point


@dataclass(frozen=True)
class Signature:
    r: int
    s: int

    def __iter__(self):
        yield self.r
        yield self.s

    def __repr__(self):
        return "<Signature r=0x{:x} s=0x{:x}>".format(self.r, self.s)


class Curve:
    """ECDSA and Diffie-Hellman over one set of domain parameters.

    Attributes:
        |  params (DomainParameters): The curve, its generator and the generator order.
        |  rng: Source of nonces and secret keys, anything with randint(a, b).
        |       Defaults to pycryptodome's StrongRandom.
        |  max_sign_attempts (int): Nonces tried by sign before giving up.
    """

    def __init__(self, params: DomainParameters, rng=None, max_sign_attempts: int = DEFAULT_MAX_SIGN_ATTEMPTS):
        if max_sign_attempts < 1:
            raise ValueError("max_sign_attempts must be at least 1")
        self.params = params
        self.rng = rng if rng is not None else StrongRandom()
        self.max_sign_attempts = max_sign_attempts

    def random_scalar(self) -> FieldElement:
        """Uniform scalar in [1, n - 1]."""
        return FieldElement(self.rng.randint(1, self.params.n - 1), self.params.n)

    def _secret(self, value) -> FieldElement:
        d = self.params.scalar(value)
        if d.is_zero():
            raise ValueError(f"Secret key must be in [1, {self.params.n - 1}]")
        return d

    def public_key(self, secret_key) -> Point:
        return self._secret(secret_key) * self.params.generator

    def generate_keypair(self) -> KeyPair:
        d = self.random_scalar()
        return KeyPair(d, self.public_key(d))

    def sign(self, secret_key, z) -> Signature:
        d = self._secret(secret_key)
        e = self.params.scalar(z)
        n = self.params.n

        for attempt in range(1, self.max_sign_attempts + 1):
            k = self.random_scalar()
            R = k * self.params.generator
            if R.is_identity():
                logger.debug("Nonce %d of %d hit the point at infinity", attempt, self.max_sign_attempts)
                continue
            r = R.x.rem(n)
            if r.is_zero():
                logger.debug("Nonce %d of %d gave r = 0", attempt, self.max_sign_attempts)
                continue
            try:
                s = k.mul_inverse() * (e + r * d)
            except NoInverseError:
                # only possible when n is composite
                logger.debug("Nonce %d of %d is not invertible mod %d", attempt, self.max_sign_attempts, n)
                continue
            # s = 0 included, verification needs s^-1
            if not s.is_invertible():
                logger.debug("Nonce %d of %d gave non-invertible s = %d", attempt, self.max_sign_attempts, s.num)
                continue
            return Signature(r.num, s.num)

        logger.warning("Giving up signing on curve %s after %d nonces", self.params.name, self.max_sign_attempts)
        raise SigningError(f"No usable nonce found in {self.max_sign_attempts} attempts.")

    def verify(self, public_key: Point, z, signature: Signature) -> bool:
        n = self.params.n
        r, s = signature
        if not (1 <= r < n and 1 <= s < n):
            return False
        if not self.params.contains(public_key) or public_key.is_identity():
            return False

        e = self.params.scalar(z)
        try:
            w = FieldElement(s, n).mul_inverse()
        except NoInverseError:
            return False
        u1 = e * w
        u2 = FieldElement(r, n) * w

        P = u1 * self.params.generator + u2 * public_key
        if P.is_identity():
            return False
        return P.x.rem(n).num == r

    def diffie_hellman(self, secret_key, other_public_key: Point) -> FieldElement:
        """Shared secret: x coordinate of secret_key * other_public_key."""
        if not self.params.contains(other_public_key) or other_public_key.is_identity():
            raise ValueError(f"Public key {other_public_key} is not a point of curve {self.params.name}")
        session = self._secret(secret_key) * other_public_key
        if session.is_identity():
            raise KeyAgreementError("Shared point is the point at infinity.")
        return session.x

    def __repr__(self):
        return f"<Curve {self.params.name}>"
