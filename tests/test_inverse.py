import pytest

from inverse import NoInverseError, extended_gcd, mod_inverse, normalize


class TestNormalize:
    def test_negative_values_wrap_into_range(self):
        assert normalize(-5, 23) == 18
        assert normalize(-23, 23) == 0
        assert normalize(-1, 6) == 5

    def test_large_values_are_reduced(self):
        assert normalize(30, 23) == 7
        assert normalize(123456, 23) == 15

    def test_non_positive_modulus_rejected(self):
        with pytest.raises(ValueError):
            normalize(5, 0)
        with pytest.raises(ValueError):
            normalize(5, -7)


class TestExtendedGcd:
    def test_known_bezout_coefficients(self):
        assert extended_gcd(240, 46) == (2, -9, 47)

    @pytest.mark.parametrize("a, b", [(240, 46), (10, 23), (17, 3120), (0, 23), (6, 4), (1, 1)])
    def test_bezout_identity(self, a, b):
        gcd, x, y = extended_gcd(a, b)
        assert a * x + b * y == gcd

    def test_coprime_pair_has_unit_gcd(self):
        gcd, _, _ = extended_gcd(9, 23)
        assert gcd == 1


class TestModInverse:
    def test_known_inverses(self):
        assert mod_inverse(10, 23) == 7
        assert mod_inverse(3, 23) == 8
        assert mod_inverse(7, 11) == 8

    def test_negative_input_is_normalised(self):
        assert mod_inverse(-1, 23) == 22

    def test_every_nonzero_residue_is_invertible_mod_prime(self):
        for a in range(1, 23):
            assert a * mod_inverse(a, 23) % 23 == 1

    def test_zero_has_no_inverse(self):
        with pytest.raises(NoInverseError) as excinfo:
            mod_inverse(0, 23)
        assert excinfo.value.value == 0
        assert excinfo.value.modulus == 23

    def test_multiple_of_modulus_has_no_inverse(self):
        with pytest.raises(NoInverseError):
            mod_inverse(46, 23)

    def test_shared_factor_has_no_inverse(self):
        with pytest.raises(NoInverseError):
            mod_inverse(4, 6)

    def test_no_inverse_is_a_zero_division(self):
        with pytest.raises(ZeroDivisionError):
            mod_inverse(0, 13)
