#!/usr/bin/env python3
"""
Manual override markers.

Recipe authors can wrap text in <span data-qty-parse>...</span> to force it to
be treated as a quantity, or in <span data-qty-no-parse>...</span> to keep it
untouched. This module strips the markers and reports the regions they covered
as an explicit override channel, so the scanner never has to know about markup.

Degenerate markup never raises: an unterminated marker runs to the end of the
block, and markers nested inside another marker are stripped while the outer
marker's mode wins.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from quantity_models import OverrideMode

PARSE_ATTRIBUTE = "data-qty-parse"
NO_PARSE_ATTRIBUTE = "data-qty-no-parse"

_SPAN_TAG = re.compile(r'<span\b(?P<attrs>[^>]*)>|</span\s*>', re.IGNORECASE)
_PARSE_ATTR = re.compile(rf'(?<![\w-]){PARSE_ATTRIBUTE}(?![\w-])', re.IGNORECASE)
_NO_PARSE_ATTR = re.compile(rf'(?<![\w-]){NO_PARSE_ATTRIBUTE}(?![\w-])', re.IGNORECASE)


@dataclass(frozen=True)
class OverrideRegion:
    """A span of marker-stripped text under a manual override."""
    start: int
    end: int
    mode: OverrideMode


@dataclass(frozen=True)
class MarkedText:
    """Text with markers removed, plus the regions they covered."""
    text: str
    regions: Tuple[OverrideRegion, ...] = ()

    def segments(self) -> List[OverrideRegion]:
        """Cover the whole text with consecutive regions, filling gaps with mode NONE."""
        segments = []
        pos = 0
        for region in self.regions:
            if region.start > pos:
                segments.append(OverrideRegion(pos, region.start, OverrideMode.NONE))
            segments.append(region)
            pos = region.end
        if pos < len(self.text) or not segments:
            segments.append(OverrideRegion(pos, len(self.text), OverrideMode.NONE))
        return segments


def marker_mode(attributes: str) -> Optional[OverrideMode]:
    """Override mode named by a span tag's attributes, if any."""
    if _NO_PARSE_ATTR.search(attributes):
        return OverrideMode.FORCE_SKIP
    if _PARSE_ATTR.search(attributes):
        return OverrideMode.FORCE_PARSE
    return None


def extract_override_regions(text: str) -> MarkedText:
    """
    Strip manual markers from a text block.

    Args:
        text: Raw text block, possibly containing marker spans

    Returns:
        The stripped text and the override regions in its coordinates
    """
    pieces: List[str] = []
    length = 0
    pos = 0
    regions: List[OverrideRegion] = []

    # One entry per open span inside a marker region: True when the span is a marker
    stack: List[bool] = []
    region_start = 0
    region_mode = OverrideMode.NONE

    for match in _SPAN_TAG.finditer(text):
        is_opening = not match.group(0).startswith('</')
        mode = marker_mode(match.group('attrs') or '') if is_opening else None

        if not stack:
            if mode is None:
                # Ordinary markup outside any marker is plain text
                continue
            pieces.append(text[pos:match.start()])
            length += match.start() - pos
            pos = match.end()
            stack.append(True)
            region_start = length
            region_mode = mode
            continue

        if is_opening:
            stack.append(mode is not None)
            strip = mode is not None
        else:
            strip = stack.pop()

        if strip:
            pieces.append(text[pos:match.start()])
            length += match.start() - pos
            pos = match.end()

        if not stack and length > region_start:
            regions.append(OverrideRegion(region_start, length, region_mode))

    pieces.append(text[pos:])
    length += len(text) - pos
    if stack and length > region_start:
        # Unterminated marker runs to the end of the block
        regions.append(OverrideRegion(region_start, length, region_mode))

    return MarkedText(text=''.join(pieces), regions=tuple(regions))
