#!/usr/bin/env python3
"""
Quantity renderer.

Turns a scaled Fraction back into display text. Fraction-style values that
changed are rounded to the nearest sixteenth (ties round up) and shown as
unicode glyphs or "a/b" text; values left unchanged by scaling are shown
exactly so they re-parse to the same rational. Decimal-style values are
rounded half-up to a fixed number of places. The changed flag always
compares exact values, never strings.
"""

import math
from decimal import Decimal
from fractions import Fraction
from typing import Tuple

from fraction_glyphs import unicode_fraction
from quantity_models import DisplayStyle, FormatKind, QuantityToken, RenderedQuantity
from scaling_config import ScalingSettings

HALF = Fraction(1, 2)


def round_half_up(value: Fraction, denominator: int) -> Fraction:
    """Round to the nearest multiple of 1/denominator, ties rounding up."""
    return Fraction(math.floor(value * denominator + HALF), denominator)


def split_whole(value: Fraction, denominator: int = 16, exact: bool = False) -> Tuple[int, Fraction]:
    """
    Split a non-negative value into a whole part and a display remainder.

    Args:
        value: Value to split
        denominator: Rounding grid for the remainder, sixteenths by default
        exact: Keep the remainder as is instead of rounding it

    Returns:
        Whole part and remainder in [0, 1); a remainder rounding up to 1
        is carried into the whole part
    """
    whole, numerator = divmod(value.numerator, value.denominator)
    remainder = Fraction(numerator, value.denominator)
    if not exact:
        remainder = round_half_up(remainder, denominator)
    if remainder >= 1:
        whole += 1
        remainder -= 1
    return whole, remainder


def format_fraction(value: Fraction, unicode_fractions: bool = True, denominator: int = 16,
                    exact: bool = False) -> str:
    """
    Render a non-negative value as a whole number and/or fraction.

    Args:
        value: Value to render
        unicode_fractions: Use glyphs ("1¾") instead of text ("1 3/4")
        denominator: Rounding grid for the fractional part
        exact: Render the value without rounding it to the grid

    Returns:
        Display text
    """
    whole, remainder = split_whole(value, denominator, exact)
    if remainder == 0:
        return str(whole)

    if unicode_fractions:
        fraction_text = unicode_fraction(remainder)
        return f"{whole}{fraction_text}" if whole else fraction_text

    fraction_text = f"{remainder.numerator}/{remainder.denominator}"
    return f"{whole} {fraction_text}" if whole else fraction_text


def format_decimal(value: Fraction, places: int = 2) -> str:
    """Render a non-negative value as a decimal, rounded half-up, without trailing zeros."""
    scaled = math.floor(value * 10 ** places + HALF)
    text = format(Decimal(scaled).scaleb(-places), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


class QuantityRenderer:
    """Renders scaled quantities according to the display settings."""

    def __init__(self, settings: ScalingSettings):
        self.settings = settings

    def display_style(self, token: QuantityToken, scaled_value: Fraction) -> DisplayStyle:
        """
        Choose fraction or decimal display for a token.

        Decimal sources stay decimal and fraction sources stay fractional;
        integer sources that scale to a non-integral value follow the unit's
        display preference.
        """
        if token.format_kind is FormatKind.DECIMAL:
            return DisplayStyle.DECIMAL
        if token.format_kind is FormatKind.INTEGER and scaled_value.denominator != 1:
            return self.settings.display_preference(token.unit_text)
        return DisplayStyle.FRACTION

    def format_number(self, token: QuantityToken, scaled_value: Fraction) -> str:
        """Display text for a scaled value, without any unit spacing."""
        sign = '-' if scaled_value < 0 else ''
        magnitude = abs(scaled_value)
        if magnitude.denominator == 1:
            return f"{sign}{magnitude.numerator}"

        if self.display_style(token, scaled_value) is DisplayStyle.DECIMAL:
            places = max(self.settings.decimal_places, token.decimal_places)
            text = format_decimal(magnitude, places)
        else:
            text = format_fraction(magnitude,
                                   unicode_fractions=self.settings.render_unicode_fractions,
                                   denominator=self.settings.rounding_denominator,
                                   exact=scaled_value == token.value)
        if text == '0':
            return text
        return f"{sign}{text}"

    def render(self, token: QuantityToken, scaled_value: Fraction) -> RenderedQuantity:
        """
        Render one token.

        Args:
            token: Token as found in the source
            scaled_value: Token value multiplied by the scale factor

        Returns:
            Replacement text (with exactly one space before the unit, if any)
            and whether the value changed
        """
        number_text = self.format_number(token, scaled_value)
        text = f"{number_text} " if token.unit_span is not None else number_text
        return RenderedQuantity(
            token=token,
            text=text,
            number_text=number_text,
            scaled_value=scaled_value,
            changed=scaled_value != token.value,
        )
