#!/usr/bin/env python3
"""
Unicode vulgar fraction tables.

Maps single-codepoint glyphs to exact rationals and back. Fractions with no
glyph of their own (most sixteenths) are composed from superscript digits,
the fraction slash and subscript digits, e.g. 1/16 -> "¹⁄₁₆". Both forms are
accepted by the numeral grammar so rendered output always re-parses.
"""

from fractions import Fraction
from typing import Dict, Optional


UNICODE_FRACTIONS: Dict[str, Fraction] = {
    '½': Fraction(1, 2),
    '⅓': Fraction(1, 3), '⅔': Fraction(2, 3),
    '¼': Fraction(1, 4), '¾': Fraction(3, 4),
    '⅕': Fraction(1, 5), '⅖': Fraction(2, 5), '⅗': Fraction(3, 5), '⅘': Fraction(4, 5),
    '⅙': Fraction(1, 6), '⅚': Fraction(5, 6),
    '⅐': Fraction(1, 7),
    '⅛': Fraction(1, 8), '⅜': Fraction(3, 8), '⅝': Fraction(5, 8), '⅞': Fraction(7, 8),
    '⅑': Fraction(1, 9),
    '⅒': Fraction(1, 10),
}

GLYPHS_BY_VALUE: Dict[Fraction, str] = {value: glyph for glyph, value in UNICODE_FRACTIONS.items()}

FRACTION_SLASH = '⁄'
SUPERSCRIPT_DIGITS = '⁰¹²³⁴⁵⁶⁷⁸⁹'
SUBSCRIPT_DIGITS = '₀₁₂₃₄₅₆₇₈₉'

_TO_SUPERSCRIPT = str.maketrans('0123456789', SUPERSCRIPT_DIGITS)
_TO_SUBSCRIPT = str.maketrans('0123456789', SUBSCRIPT_DIGITS)
_FROM_SUPERSCRIPT = str.maketrans(SUPERSCRIPT_DIGITS, '0123456789')
_FROM_SUBSCRIPT = str.maketrans(SUBSCRIPT_DIGITS, '0123456789')

# Regex fragments used by the numeral grammar
GLYPH_CLASS = '[' + ''.join(UNICODE_FRACTIONS) + ']'
COMPOSED_PATTERN = f'[{SUPERSCRIPT_DIGITS}]+{FRACTION_SLASH}[{SUBSCRIPT_DIGITS}]+'
UNICODE_FRACTION_PATTERN = f'(?:{GLYPH_CLASS}|{COMPOSED_PATTERN})'


def glyph_for(value: Fraction) -> Optional[str]:
    """Single-codepoint glyph for a proper fraction, if one exists."""
    return GLYPHS_BY_VALUE.get(value)


def compose_fraction(value: Fraction) -> str:
    """Compose a proper fraction from superscript and subscript digits."""
    numerator = str(value.numerator).translate(_TO_SUPERSCRIPT)
    denominator = str(value.denominator).translate(_TO_SUBSCRIPT)
    return f"{numerator}{FRACTION_SLASH}{denominator}"


def unicode_fraction(value: Fraction) -> str:
    """Render a proper fraction as a glyph, falling back to the composed form."""
    return glyph_for(value) or compose_fraction(value)


def parse_unicode_fraction(text: str) -> Optional[Fraction]:
    """
    Parse a single glyph or a composed superscript/subscript fraction.

    Args:
        text: Glyph text such as "¾" or "¹⁄₁₆"

    Returns:
        Exact value, or None when the text is not a unicode fraction
    """
    if text in UNICODE_FRACTIONS:
        return UNICODE_FRACTIONS[text]

    numerator, slash, denominator = text.partition(FRACTION_SLASH)
    if not slash or not numerator or not denominator:
        return None
    numerator = numerator.translate(_FROM_SUPERSCRIPT)
    denominator = denominator.translate(_FROM_SUBSCRIPT)
    if not all(part.isascii() and part.isdigit() for part in (numerator, denominator)):
        return None
    if int(denominator) == 0:
        return None
    return Fraction(int(numerator), int(denominator))
