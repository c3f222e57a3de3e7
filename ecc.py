# ecc.py
from functools import total_ordering

from inverse import extended_gcd, mod_inverse, normalize


def binary(value: int) -> list[bool]:
    """Bits of value, most significant first. Zero has no bits."""
    if value < 0:
        raise ValueError(f"Cannot decompose negative value {value}")
    if value == 0:
        return []
    return [bit == "1" for bit in format(value, "b")]


@total_ordering
class FieldElement:
    def __init__(self, num, prime):
        if num >= prime or num < 0:
            raise ValueError(f"Num {num} not in field range 0 to {prime - 1}")
        self.num = num
        self.prime = prime

    @classmethod
    def reduce(cls, num, prime):
        return cls(normalize(num, prime), prime)

    def __eq__(self, other):
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self.num == other.num and self.prime == other.prime

    def __lt__(self, other):
        self._check_field(other)
        return self.num < other.num

    def __hash__(self):
        return hash((self.num, self.prime))

    def __int__(self):
        return self.num

    def __add__(self, other):
        self._check_field(other)
        return self.__class__((self.num + other.num) % self.prime, self.prime)

    def __sub__(self, other):
        self._check_field(other)
        if self.num >= other.num:
            return self.__class__(self.num - other.num, self.prime)
        return self.__class__(self.prime - (other.num - self.num), self.prime)

    def __mul__(self, other):
        if not isinstance(other, FieldElement):
            # lets Point.__rmul__ handle FieldElement * Point
            return NotImplemented
        self._check_field(other)
        return self.__class__((self.num * other.num) % self.prime, self.prime)

    def __pow__(self, exp):
        if exp < 0:
            return self.mul_inverse() ** -exp
        return self.__class__(pow(self.num, exp, self.prime), self.prime)

    def __truediv__(self, other):
        self._check_field(other)
        return self * other.mul_inverse()

    def __neg__(self):
        return self.add_inverse()

    def __mod__(self, modulus):
        return self.rem(modulus)

    def rem(self, modulus):
        """This element's residue as a member of the field of the given modulus."""
        return self.__class__(normalize(self.num, modulus), modulus)

    def add_inverse(self):
        if self.num == 0:
            return self
        return self.__class__(self.prime - self.num, self.prime)

    def mul_inverse(self):
        """Raises NoInverseError when gcd(num, prime) != 1, zero included."""
        return self.__class__(mod_inverse(self.num, self.prime), self.prime)

    def is_zero(self):
        return self.num == 0

    def is_invertible(self):
        gcd, _, _ = extended_gcd(self.num, self.prime)
        return gcd == 1

    def bits(self):
        return binary(self.num)

    def _check_field(self, other):
        if not isinstance(other, FieldElement) or self.prime != other.prime:
            raise TypeError("Cannot operate on two numbers in different Fields.")

    def __repr__(self):
        return f"FieldElement_{self.prime}({self.num})"


class Point:
    def __init__(self, x, y, a, b, prime):
        self.a = FieldElement(a, prime)
        self.b = FieldElement(b, prime)
        self.prime = prime

        if x is None and y is None:
            self.x = self.y = None  # Point at infinity
        else:
            self.x = FieldElement(x, prime)
            self.y = FieldElement(y, prime)

            if not self._is_on_curve():
                raise ValueError(f"Point ({x}, {y}) is not on the curve")

    @classmethod
    def identity(cls, a, b, prime):
        return cls(None, None, a, b, prime)

    def is_identity(self):
        return self.x is None

    def _is_on_curve(self):
        if self.x is None:
            return True
        left = self.y ** 2
        right = self.x ** 3 + self.a * self.x + self.b
        return left == right

    def same_curve(self, other):
        return self.a == other.a and self.b == other.b and self.prime == other.prime

    def _infinity(self):
        return self.__class__(None, None, self.a.num, self.b.num, self.prime)

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return (
            self.x == other.x and
            self.y == other.y and
            self.same_curve(other)
        )

    def __hash__(self):
        return hash((self.x, self.y, self.a, self.b))

    def __neg__(self):
        if self.x is None:
            return self
        return self.__class__(self.x.num, (-self.y).num, self.a.num, self.b.num, self.prime)

    def __add__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        if not self.same_curve(other):
            raise TypeError("Points are not on the same curve")

        if self.x is None:
            return other
        if other.x is None:
            return self

        # Vertical line, P + (-P)
        if self.x == other.x and self.y != other.y:
            return self._infinity()

        if self == other:
            # Tangent is vertical for points of order two
            if self.y.is_zero():
                return self._infinity()
            three = FieldElement.reduce(3, self.prime)
            two = FieldElement.reduce(2, self.prime)
            m = (three * self.x ** 2 + self.a) / (two * self.y)
        else:
            m = (self.y - other.y) / (self.x - other.x)

        x3 = m ** 2 - self.x - other.x
        # third intersection, reflected over the x axis
        y3 = -(self.y + m * (x3 - self.x))

        return self.__class__(x3.num, y3.num, self.a.num, self.b.num, self.prime)

    def __sub__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self + (-other)

    def __rmul__(self, coef):
        if isinstance(coef, FieldElement):
            coef = coef.num
        if not isinstance(coef, int):
            return NotImplemented
        if coef < 0:
            return (-coef) * (-self)

        result = self._infinity()
        addend = self

        # double and add, lowest bit first
        for bit in reversed(binary(coef)):
            if bit:
                result += addend
            addend += addend

        return result

    __mul__ = __rmul__

    def __repr__(self):
        if self.x is None:
            return "Point(infinity)"
        return f"Point({self.x.num}, {self.y.num})"
