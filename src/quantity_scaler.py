#!/usr/bin/env python3
"""
Exact quantity scaling.

Scale factors are turned into Fractions at the boundary and every product is
computed on Fractions, so scaling never accumulates floating-point error.
"""

from decimal import Decimal, InvalidOperation
from fractions import Fraction
from numbers import Rational
from typing import Union

from scaling_errors import ScaleFactorError

ScaleFactorLike = Union[int, Fraction, Decimal, float, str]

IDENTITY = Fraction(1)


def coerce_scale_factor(factor: ScaleFactorLike) -> Fraction:
    """
    Read a scale factor as an exact rational.

    Floats go through their shortest decimal representation, so 0.1 becomes
    1/10 rather than its binary approximation.

    Args:
        factor: int, Fraction, Decimal, float, or a string such as "2.5" or "3/2"

    Returns:
        Reduced Fraction

    Raises:
        ScaleFactorError: If the value is not a finite rational number
    """
    if isinstance(factor, bool):
        raise ScaleFactorError("Scale factor must be a number, not a boolean",
                               details={"factor": factor})
    try:
        if isinstance(factor, Rational):
            return Fraction(factor)
        if isinstance(factor, float):
            return Fraction(repr(factor))
        if isinstance(factor, Decimal):
            return Fraction(factor)
        if isinstance(factor, str):
            return Fraction(factor.strip())
    except (ValueError, ZeroDivisionError, OverflowError, InvalidOperation) as e:
        raise ScaleFactorError(f"Invalid scale factor: {factor!r}",
                               details={"factor": str(factor)}) from e
    raise ScaleFactorError(f"Unsupported scale factor type: {type(factor).__name__}",
                           details={"factor": repr(factor)})


def scale(value: Fraction, factor: Fraction) -> Fraction:
    """Multiply a quantity by a scale factor, exactly."""
    return Fraction(value) * Fraction(factor)


def is_identity(factor: Fraction) -> bool:
    return factor == IDENTITY
