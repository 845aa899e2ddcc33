#!/usr/bin/env python3
"""
Data model shared by the quantity scaling stages.
Tokens, rendered quantities and pipeline results are plain immutable values.
"""

from dataclasses import dataclass, asdict, field
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, List, Optional, Tuple


class FormatKind(Enum):
    """Notation family a numeral was written in."""
    INTEGER = "Integer"
    DECIMAL = "Decimal"
    TEXT_FRACTION = "TextFraction"
    UNICODE_FRACTION = "UnicodeFraction"
    MIXED_TEXT_NUMBER = "MixedTextNumber"
    MIXED_UNICODE_NUMBER = "MixedUnicodeNumber"
    DASH_SEPARATED_MIXED = "DashSeparatedMixed"

    @property
    def is_mixed(self) -> bool:
        return self in (FormatKind.MIXED_TEXT_NUMBER,
                        FormatKind.MIXED_UNICODE_NUMBER,
                        FormatKind.DASH_SEPARATED_MIXED)


class SeparatorStyle(Enum):
    """How the whole and fractional parts of a mixed number were joined."""
    SPACE = "space"
    NONE = "none"
    DASH = "dash"


class OverrideMode(Enum):
    """Manual override applied to a span of text."""
    NONE = "none"
    FORCE_PARSE = "forceParse"
    FORCE_SKIP = "forceSkip"


class DisplayStyle(Enum):
    """Whether a non-integral quantity is shown as a fraction or a decimal."""
    FRACTION = "fraction"
    DECIMAL = "decimal"


@dataclass(frozen=True)
class ParsedNumeral:
    """Result of parsing one numeral substring."""
    start: int
    end: int
    raw_text: str
    value: Fraction
    format_kind: FormatKind
    separator_style: Optional[SeparatorStyle] = None
    decimal_places: int = 0

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class QuantityToken:
    """A numeral occurrence accepted as a quantity."""
    span: Tuple[int, int]
    raw_text: str
    value: Fraction
    format_kind: FormatKind
    separator_style: Optional[SeparatorStyle] = None
    unit_text: Optional[str] = None
    unit_span: Optional[Tuple[int, int]] = None
    override_mode: OverrideMode = OverrideMode.NONE
    decimal_places: int = 0

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]

    @property
    def replace_end(self) -> int:
        """End of the text replaced on render: the numeral plus any gap before its unit."""
        if self.unit_span is not None:
            return self.unit_span[0]
        return self.span[1]

    @classmethod
    def from_numeral(cls, numeral: ParsedNumeral,
                     override_mode: OverrideMode = OverrideMode.NONE) -> "QuantityToken":
        return cls(
            span=(numeral.start, numeral.end),
            raw_text=numeral.raw_text,
            value=numeral.value,
            format_kind=numeral.format_kind,
            separator_style=numeral.separator_style,
            override_mode=override_mode,
            decimal_places=numeral.decimal_places,
        )


@dataclass(frozen=True)
class RenderedQuantity:
    """Replacement text for one token."""
    token: QuantityToken
    text: str
    number_text: str
    scaled_value: Fraction
    changed: bool


@dataclass
class RenderedSpan:
    """Position of a rendered quantity in the output text."""
    span: Tuple[int, int]
    source_span: Tuple[int, int]
    changed: bool
    value: Fraction
    scaled_value: Fraction
    format_kind: FormatKind
    unit_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data["span"] = list(self.span)
        data["source_span"] = list(self.source_span)
        data["value"] = str(self.value)
        data["scaled_value"] = str(self.scaled_value)
        data["format_kind"] = self.format_kind.value
        return data


@dataclass
class ScalingResult:
    """Rendered text of one block plus the quantities found in it."""
    rendered_text: str
    tokens: List[RenderedSpan] = field(default_factory=list)

    @property
    def changed_spans(self) -> List[Tuple[int, int]]:
        return [t.span for t in self.tokens if t.changed]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "rendered_text": self.rendered_text,
            "tokens": [t.to_dict() for t in self.tokens],
        }
