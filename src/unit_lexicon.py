#!/usr/bin/env python3
"""
Unit lexicon for quantity detection.

A fixed but extensible table of unit spellings (volume, weight and count
units with their plural and abbreviated forms). The scanner uses it to decide
whether a numeral is followed by a unit; the renderer uses the canonical names
to look up fraction/decimal display preferences.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple


# Volume units
VOLUME_UNITS: Dict[str, List[str]] = {
    "cup": ["cup", "cups", "c", "c."],
    "tablespoon": ["tablespoon", "tablespoons", "tbsp", "tbsp.", "tbs", "tbs.", "T", "T."],
    "teaspoon": ["teaspoon", "teaspoons", "tsp", "tsp.", "t", "t."],
    "fluid_ounce": ["fl oz", "fl. oz", "fl. oz.", "fl oz.", "fluid ounce", "fluid ounces"],
    "pint": ["pint", "pints", "pt", "pt."],
    "quart": ["quart", "quarts", "qt", "qt."],
    "gallon": ["gallon", "gallons", "gal", "gal."],
    "milliliter": ["ml", "mL", "ml.", "milliliter", "milliliters", "millilitre", "millilitres"],
    "centiliter": ["cl", "cL", "centiliter", "centiliters", "centilitre", "centilitres"],
    "deciliter": ["dl", "dL", "deciliter", "deciliters", "decilitre", "decilitres"],
    "liter": ["l", "L", "liter", "liters", "litre", "litres"],
}

# Weight units
WEIGHT_UNITS: Dict[str, List[str]] = {
    "pound": ["pound", "pounds", "lb", "lbs", "lb.", "lbs."],
    "ounce": ["ounce", "ounces", "oz", "oz."],
    "milligram": ["mg", "milligram", "milligrams", "milligramme", "milligrammes"],
    "gram": ["gram", "grams", "gramme", "grammes", "g", "g.", "gr"],
    "kilogram": ["kilogram", "kilograms", "kilo", "kilos", "kg", "kg."],
}

# Count units
COUNT_UNITS: Dict[str, List[str]] = {
    "piece": ["piece", "pieces", "pc", "pcs"],
    "item": ["item", "items"],
    "clove": ["clove", "cloves"],
    "slice": ["slice", "slices"],
    "sheet": ["sheet", "sheets"],
    "leaf": ["leaf", "leaves"],
    "sprig": ["sprig", "sprigs"],
    "head": ["head", "heads"],
    "bunch": ["bunch", "bunches"],
    "stick": ["stick", "sticks"],
    "pinch": ["pinch", "pinches"],
    "dash": ["dash", "dashes"],
    "handful": ["handful", "handfuls"],
    "package": ["package", "packages", "pkg", "pkg."],
    "can": ["can", "cans"],
    "jar": ["jar", "jars"],
    "bottle": ["bottle", "bottles"],
    "box": ["box", "boxes"],
}

ALL_UNITS: Dict[str, List[str]] = {**VOLUME_UNITS, **WEIGHT_UNITS, **COUNT_UNITS}

# Metric units read better as decimals ("37.5 g" rather than "37½ g")
DECIMAL_PREFERRED_UNITS = ("milliliter", "centiliter", "deciliter", "liter",
                           "milligram", "gram", "kilogram")

UNIT_PUNCTUATION = ".,;:!?()[]{}\"'"


def default_display_preferences() -> Dict[str, str]:
    """Seed fraction/decimal display preferences keyed by lowercase unit spelling."""
    preferences = {}
    for standard_unit in DECIMAL_PREFERRED_UNITS:
        for variation in ALL_UNITS[standard_unit]:
            preferences[variation.lower().strip(UNIT_PUNCTUATION)] = "decimal"
    return preferences


@dataclass(frozen=True)
class UnitMatch:
    """A lexicon entry found in the text."""
    start: int
    end: int
    raw_text: str


class UnitLexicon:
    """Case-insensitive table of recognized unit spellings."""

    def __init__(self, units: Iterable[str], canonical_names: Optional[Mapping[str, str]] = None):
        """
        Initialize the lexicon.

        Args:
            units: Unit spellings to recognize
            canonical_names: Optional spelling -> standard unit name mapping
        """
        cleaned = {unit.strip() for unit in units if unit and unit.strip()}
        # Longest spelling first so "fl oz" wins over "fl" and "tbsp." over "tbsp"
        self._entries: Tuple[str, ...] = tuple(sorted(cleaned, key=lambda u: (-len(u), u)))
        self._canonical: Dict[str, str] = dict(canonical_names or {})
        self._canonical_folded: Dict[str, str] = {}
        for spelling, name in self._canonical.items():
            self._canonical_folded.setdefault(spelling.lower(), name)
        self._pattern = self._compile_pattern(self._entries)

    @classmethod
    def default(cls) -> "UnitLexicon":
        """Lexicon seeded with common cooking units."""
        canonical = {}
        for standard_unit, variations in ALL_UNITS.items():
            for variation in variations:
                canonical[variation] = standard_unit
        return cls(canonical.keys(), canonical)

    @staticmethod
    def _compile_pattern(entries: Tuple[str, ...]) -> Optional["re.Pattern[str]"]:
        if not entries:
            return None
        alternatives = []
        for entry in entries:
            pattern = re.escape(entry)
            if sum(ch.isalpha() for ch in entry) == 1:
                # Single letters are case sensitive: "T" is a tablespoon, "C" is not a cup
                pattern = f'(?-i:{pattern})'
            if entry[-1].isalnum():
                pattern += r'(?!\w)'
            alternatives.append(pattern)
        return re.compile('|'.join(alternatives), re.IGNORECASE)

    def extend(self, units: Iterable[str]) -> "UnitLexicon":
        """Return a new lexicon with additional spellings."""
        return UnitLexicon(self._entries + tuple(units), self._canonical)

    def match_at(self, text: str, pos: int) -> Optional[UnitMatch]:
        """
        Match a unit starting exactly at a position.

        Args:
            text: Text being scanned
            pos: Offset where the unit must begin

        Returns:
            The longest matching lexicon entry, or None
        """
        if self._pattern is None:
            return None
        match = self._pattern.match(text, pos)
        if not match:
            return None
        return UnitMatch(start=match.start(), end=match.end(), raw_text=match.group(0))

    def canonical_name(self, unit: str) -> Optional[str]:
        """Standard name for a spelling, trying it with and without trailing punctuation."""
        for key in (unit, unit.strip(UNIT_PUNCTUATION)):
            if key in self._canonical:
                return self._canonical[key]
        for key in (unit.lower(), unit.lower().strip(UNIT_PUNCTUATION)):
            if key in self._canonical_folded:
                return self._canonical_folded[key]
        return None

    @property
    def entries(self) -> Tuple[str, ...]:
        return self._entries

    def __contains__(self, unit: object) -> bool:
        if not isinstance(unit, str):
            return False
        return unit.strip().lower() in {entry.lower() for entry in self._entries}

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnitLexicon):
            return NotImplemented
        return set(self._entries) == set(other._entries)

    def __hash__(self) -> int:
        return hash(frozenset(self._entries))

    def __repr__(self) -> str:
        return f"UnitLexicon({len(self._entries)} units)"
