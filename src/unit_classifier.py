#!/usr/bin/env python3
"""
Unit and context classifier.

Decides whether a parsed numeral is a genuine quantity rather than stray digits
(a version number, a time, an ordinal), and finds the unit written after it.
"""

import re
from dataclasses import replace
from typing import List, Optional

from quantity_models import ParsedNumeral, QuantityToken
from quantity_parser import NumberParser
from unit_lexicon import UNIT_PUNCTUATION, UnitLexicon, UnitMatch

# Characters that glue a numeral to what precedes or follows it ("v2.5", "10:30", "1/0")
_NUMERIC_GLUE = '.:/'

_RANGE_JOINER = re.compile(r' ?[-–—] ?| to ')


def find_adjacent_unit(text: str, end: int, lexicon: UnitLexicon) -> Optional[UnitMatch]:
    """
    Find a lexicon unit right after a numeral, allowing one whitespace character between.

    Args:
        text: Text being scanned
        end: Offset just past the numeral
        lexicon: Recognized unit spellings

    Returns:
        The unit match, or None
    """
    pos = end
    if pos < len(text) and text[pos].isspace() and text[pos] not in '\r\n':
        pos += 1
    return lexicon.match_at(text, pos)


def has_left_boundary(text: str, start: int) -> bool:
    """True unless the numeral is glued to a preceding word or number."""
    if start == 0:
        return True
    previous = text[start - 1]
    if previous.isalnum() or previous == '_' or previous in _NUMERIC_GLUE:
        return False
    if previous == ',' and start >= 2 and text[start - 2].isdigit():
        return False
    return True


def has_right_boundary(text: str, end: int) -> bool:
    """True unless the numeral continues into more digits ("1,000", "10:30", "1.2.3")."""
    if end >= len(text):
        return True
    following = text[end]
    if following.isdigit():
        return False
    if following in _NUMERIC_GLUE + ',' and end + 1 < len(text) and text[end + 1].isdigit():
        return False
    return True


class UnitClassifier:
    """Confirms quantities and attaches their units."""

    def __init__(self, lexicon: UnitLexicon, parser: Optional[NumberParser] = None):
        self.lexicon = lexicon
        self.parser = parser or NumberParser()

    def is_quantity(self, text: str, numeral: ParsedNumeral, leading_start: Optional[int] = None) -> bool:
        """
        Apply the heuristic quantity rules to a numeral.

        A numeral counts when it is followed by a unit, or when it opens a
        quantity-bearing block (leading_start is the offset of the block's
        first non-blank character, None when the rule does not apply).

        Args:
            text: Text being scanned
            numeral: Candidate numeral
            leading_start: Offset where a leading count may start

        Returns:
            Whether the numeral is a quantity
        """
        if not has_left_boundary(text, numeral.start) or not has_right_boundary(text, numeral.end):
            return False
        if find_adjacent_unit(text, numeral.end, self.lexicon) is not None:
            return True
        if self._opens_range(text, numeral):
            return True
        if numeral.start == leading_start:
            # "1st", "2x": a leading numeral glued to a word that is not a unit
            return not (numeral.end < len(text) and text[numeral.end].isalpha())
        return False

    def _opens_range(self, text: str, numeral: ParsedNumeral) -> bool:
        # "2-3 cloves", "1 to 2 cups": the lower bound shares the upper bound's unit
        joiner = _RANGE_JOINER.match(text, numeral.end)
        if not joiner:
            return False
        upper = self.parser.parse_at(text, joiner.end())
        if upper is None or not has_right_boundary(text, upper.end):
            return False
        return find_adjacent_unit(text, upper.end, self.lexicon) is not None

    def classify(self, text: str, token: QuantityToken) -> QuantityToken:
        """Attach the adjacent unit, if any, to a token."""
        unit = find_adjacent_unit(text, token.end, self.lexicon)
        if unit is None:
            return token
        unit_text = unit.raw_text.strip(UNIT_PUNCTUATION) or unit.raw_text
        return replace(token, unit_text=unit_text, unit_span=(unit.start, unit.end))

    def classify_all(self, text: str, tokens: List[QuantityToken]) -> List[QuantityToken]:
        return [self.classify(text, token) for token in tokens]
