#!/usr/bin/env python3
"""
Quantity scanner.

Walks a marker-stripped text block left to right, parses the longest numeral
at each candidate position and keeps the ones that qualify as quantities.
Scanning always resumes after a candidate's span, so tokens never overlap.
"""

from typing import Iterator, List, Optional, Tuple

from manual_markers import MarkedText, extract_override_regions
from quantity_models import OverrideMode, ParsedNumeral, QuantityToken
from quantity_parser import NUMERAL_START, NumberParser
from unit_classifier import UnitClassifier
from unit_lexicon import UnitLexicon


def leading_offset(text: str) -> int:
    """Offset of the first non-blank character of a block."""
    return len(text) - len(text.lstrip())


class QuantityScanner:
    """Finds quantity tokens in a text block."""

    def __init__(self, lexicon: UnitLexicon, parser: Optional[NumberParser] = None):
        """
        Initialize the scanner.

        Args:
            lexicon: Recognized unit spellings
            parser: Numeral parser, a fresh one when omitted
        """
        self.parser = parser or NumberParser()
        self.classifier = UnitClassifier(lexicon, self.parser)

    def candidates(self, marked: MarkedText) -> Iterator[Tuple[ParsedNumeral, OverrideMode]]:
        """
        Yield every numeral outside no-parse regions, in source order.

        Candidates never cross an override region boundary.
        """
        text = marked.text
        for segment in marked.segments():
            if segment.mode is OverrideMode.FORCE_SKIP:
                continue
            pos = segment.start
            while pos < segment.end:
                start = NUMERAL_START.search(text, pos, segment.end)
                if not start:
                    break
                numeral = self.parser.parse_at(text, start.start(), segment.end)
                if numeral is None:
                    pos = start.start() + 1
                    continue
                yield numeral, segment.mode
                pos = numeral.end

    def scan(self, marked: MarkedText, leading_quantity: bool = True) -> List[QuantityToken]:
        """
        Scan a block for quantity tokens.

        Args:
            marked: Marker-stripped text and its override regions
            leading_quantity: Whether a numeral opening the block counts as a quantity

        Returns:
            Accepted tokens in source order, without units attached
        """
        text = marked.text
        leading_start = leading_offset(text) if leading_quantity else None

        tokens = []
        for numeral, mode in self.candidates(marked):
            if mode is OverrideMode.FORCE_PARSE or self.classifier.is_quantity(text, numeral, leading_start):
                tokens.append(QuantityToken.from_numeral(numeral, mode))
        return tokens

    def scan_text(self, text: str, leading_quantity: bool = True) -> List[QuantityToken]:
        """Strip markers from raw text, scan it and attach units."""
        marked = extract_override_regions(text)
        tokens = self.scan(marked, leading_quantity)
        return self.classifier.classify_all(marked.text, tokens)
