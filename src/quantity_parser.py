#!/usr/bin/env python3
"""
Numeral parser for recipe quantities.

Each of the seven supported notations has its own small grammar. Parsing a
position tries every grammar and keeps the longest match, so "2 3/4" wins over
the bare "2" and "1-1/4" over "1". Values are exact Fractions; a substring that
fits no grammar simply yields None.

    Integer             450
    Decimal             3.5
    TextFraction        1/4
    UnicodeFraction     ½        (also composed forms such as ¹⁄₁₆)
    MixedTextNumber     2 3/4
    MixedUnicodeNumber  1¾, 1 ¾
    DashSeparatedMixed  1-1/4, 1-¼
"""

import re
from fractions import Fraction
from typing import Callable, List, Optional, Tuple

from fraction_glyphs import GLYPH_CLASS, SUPERSCRIPT_DIGITS, UNICODE_FRACTION_PATTERN, parse_unicode_fraction
from quantity_models import FormatKind, ParsedNumeral, SeparatorStyle

# Whole and fractional parts of a mixed number may be joined by a space or a no-break space
MIXED_SEPARATOR = '[ \u00a0]'

NUMERAL_START = re.compile(rf'[0-9]|{GLYPH_CLASS}|[{SUPERSCRIPT_DIGITS}]')

# Listed in tie-break order: on equal length the earlier grammar wins
GRAMMARS: Tuple[Tuple[FormatKind, str], ...] = (
    (FormatKind.MIXED_TEXT_NUMBER,
     rf'(?P<whole>[0-9]+)(?P<sep>{MIXED_SEPARATOR})(?P<num>[0-9]+)/(?P<den>[0-9]+)'),
    (FormatKind.MIXED_UNICODE_NUMBER,
     rf'(?P<whole>[0-9]+)(?P<sep>{MIXED_SEPARATOR}?)(?P<glyph>{UNICODE_FRACTION_PATTERN})'),
    (FormatKind.DASH_SEPARATED_MIXED,
     rf'(?P<whole>[0-9]+)(?P<sep>-)(?:(?P<num>[0-9]+)/(?P<den>[0-9]+)|(?P<glyph>{UNICODE_FRACTION_PATTERN}))'),
    (FormatKind.DECIMAL, r'(?P<whole>[0-9]+)\.(?P<decimals>[0-9]+)'),
    (FormatKind.TEXT_FRACTION, r'(?P<num>[0-9]+)/(?P<den>[0-9]+)'),
    (FormatKind.UNICODE_FRACTION, rf'(?P<glyph>{UNICODE_FRACTION_PATTERN})'),
    (FormatKind.INTEGER, r'(?P<whole>[0-9]+)'),
)


def _separator_style(format_kind: FormatKind, separator: Optional[str]) -> Optional[SeparatorStyle]:
    if not format_kind.is_mixed:
        return None
    if separator == '-':
        return SeparatorStyle.DASH
    if separator:
        return SeparatorStyle.SPACE
    return SeparatorStyle.NONE


class NumberParser:
    """Parser for numerals in the seven supported notations."""

    def __init__(self):
        self._grammars: List[Tuple[FormatKind, "re.Pattern[str]"]] = [
            (format_kind, re.compile(pattern)) for format_kind, pattern in GRAMMARS
        ]

    def parse_at(self, text: str, pos: int, endpos: Optional[int] = None) -> Optional[ParsedNumeral]:
        """
        Parse the longest numeral starting exactly at a position.

        Args:
            text: Text being scanned
            pos: Offset where the numeral must begin
            endpos: Offset the numeral may not extend past

        Returns:
            Parsed numeral, or None if no grammar matches
        """
        if endpos is None:
            endpos = len(text)
        return self._longest(lambda pattern: pattern.match(text, pos, endpos))

    def parse(self, text: str) -> Optional[ParsedNumeral]:
        """
        Parse a string that must consist of exactly one numeral.

        Args:
            text: Numeral text, surrounding whitespace allowed

        Returns:
            Parsed numeral with offsets into the stripped text, or None
        """
        stripped = text.strip()
        if not stripped:
            return None
        return self._longest(lambda pattern: pattern.fullmatch(stripped))

    def _longest(self, attempt: Callable[["re.Pattern[str]"], Optional["re.Match[str]"]]) -> Optional[ParsedNumeral]:
        best: Optional[ParsedNumeral] = None
        for format_kind, pattern in self._grammars:
            match = attempt(pattern)
            if not match:
                continue
            numeral = self._build(format_kind, match)
            if numeral is not None and (best is None or numeral.length > best.length):
                best = numeral
        return best

    def _build(self, format_kind: FormatKind, match: "re.Match[str]") -> Optional[ParsedNumeral]:
        groups = match.groupdict()
        value = Fraction(int(groups['whole'])) if groups.get('whole') else Fraction(0)
        decimal_places = 0

        if groups.get('decimals'):
            decimals = groups['decimals']
            decimal_places = len(decimals)
            value = Fraction(int(groups['whole'] + decimals), 10 ** decimal_places)
        elif groups.get('den'):
            denominator = int(groups['den'])
            if denominator == 0:
                return None
            value += Fraction(int(groups['num']), denominator)
        elif groups.get('glyph'):
            fraction = parse_unicode_fraction(groups['glyph'])
            if fraction is None:
                return None
            value += fraction

        return ParsedNumeral(
            start=match.start(),
            end=match.end(),
            raw_text=match.group(0),
            value=value,
            format_kind=format_kind,
            separator_style=_separator_style(format_kind, groups.get('sep')),
            decimal_places=decimal_places,
        )


_default_parser = NumberParser()


def parse_numeral(text: str) -> Optional[ParsedNumeral]:
    """Parse a standalone numeral with the shared parser."""
    return _default_parser.parse(text)
