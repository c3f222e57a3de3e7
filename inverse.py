class NoInverseError(ZeroDivisionError):
    def __init__(self, value, modulus):
        self.value = value
        self.modulus = modulus
        self.message = f"{value} has no multiplicative inverse modulo {modulus}"
        super().__init__(self.message)


def normalize(value: int, modulus: int) -> int:
    """Map any integer, negative ones included, into [0, modulus)."""
    if modulus <= 0:
        raise ValueError(f"Modulus must be positive, got {modulus}")
    return value % modulus


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Extended Euclidean algorithm. Returns (gcd, x, y) with a*x + b*y == gcd."""
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        quot = old_r // r
        old_r, r = r, old_r - quot * r
        old_x, x = x, old_x - quot * x
        old_y, y = y, old_y - quot * y
    return old_r, old_x, old_y


def mod_inverse(a: int, modulus: int) -> int:
    """Modular inverse using Extended Euclidean Algorithm."""
    gcd, x, _ = extended_gcd(normalize(a, modulus), modulus)
    if gcd != 1:
        raise NoInverseError(a, modulus)
    # x may be negative
    return normalize(x, modulus)
