"""Tests for exact scale factor handling."""

from decimal import Decimal
from fractions import Fraction

import pytest

from quantity_scaler import coerce_scale_factor, is_identity, scale
from scaling_errors import ScaleFactorError


class TestCoerceScaleFactor:

    @pytest.mark.parametrize("factor, expected", [
        (2, Fraction(2)),
        (Fraction(3, 2), Fraction(3, 2)),
        (0.1, Fraction(1, 10)),
        (2.5, Fraction(5, 2)),
        (Decimal("0.25"), Fraction(1, 4)),
        ("3/2", Fraction(3, 2)),
        (" 1.5 ", Fraction(3, 2)),
        ("-2", Fraction(-2)),
        (0, Fraction(0)),
    ])
    def test_exact_values(self, factor, expected):
        assert coerce_scale_factor(factor) == expected

    @pytest.mark.parametrize("factor", [
        True, "abc", "", "1/0", float("nan"), float("inf"), Decimal("NaN"), None, [2],
    ])
    def test_rejected(self, factor):
        with pytest.raises(ScaleFactorError) as exc_info:
            coerce_scale_factor(factor)
        assert exc_info.value.error_code == "ScaleFactorError"


def test_scale_is_exact():
    assert scale(Fraction(1, 3), Fraction(3)) == 1
    assert scale(Fraction(1, 10), Fraction(3)) == Fraction(3, 10)


def test_identity():
    assert is_identity(Fraction(1))
    assert is_identity(coerce_scale_factor("2/2"))
    assert not is_identity(Fraction(2))
