#!/usr/bin/env python3
"""
Recipe Quantity Scaling Pipeline
Finds quantities in recipe text, scales them exactly and re-renders them.

Pipeline stages:
1. Manual marker extraction
2. Quantity scanning (numeral grammar + quantity rules)
3. Unit classification
4. Exact scaling
5. Rendering and reassembly

Every stage is a pure function of its inputs and the immutable settings, so a
pipeline can be reused for any number of blocks and scale factors.
"""

import argparse
import json
import re
import sys
import time
from typing import Any, Dict, List, Optional

from manual_markers import extract_override_regions
from quantity_models import RenderedQuantity, RenderedSpan, ScalingResult
from quantity_renderer import QuantityRenderer
from quantity_scaler import ScaleFactorLike, coerce_scale_factor, is_identity, scale
from quantity_scanner import QuantityScanner
from scaling_config import DEFAULT_SETTINGS, ScalingSettings, load_settings
from scaling_errors import QuantityScalingError
from scaling_monitoring import configure_logging, get_logger, record_block

logger = get_logger(__name__)

# "- ", "* ", "+ ", "1. " or "1) ", optionally followed by a task checkbox
LIST_ITEM_PREFIX = re.compile(r'^(\s*(?:[-*+]|\d+[.)])\s+(?:\[[ xX]\]\s+)?)')


def assemble(text: str, rendered: List[RenderedQuantity]) -> ScalingResult:
    """
    Splice rendered quantities back into the text they came from.

    Args:
        text: Marker-stripped source text
        rendered: Rendered quantities in source order

    Returns:
        Reassembled text and the output position of every quantity
    """
    pieces = []
    spans = []
    pos = 0
    length = 0
    for quantity in rendered:
        token = quantity.token
        pieces.append(text[pos:token.start])
        length += token.start - pos

        spans.append(RenderedSpan(
            span=(length, length + len(quantity.number_text)),
            source_span=token.span,
            changed=quantity.changed,
            value=token.value,
            scaled_value=quantity.scaled_value,
            format_kind=token.format_kind,
            unit_text=token.unit_text,
        ))
        pieces.append(quantity.text)
        length += len(quantity.text)
        pos = token.replace_end

    pieces.append(text[pos:])
    return ScalingResult(rendered_text=''.join(pieces), tokens=spans)


class QuantityScalingPipeline:
    """Scales the quantities in recipe text blocks."""

    def __init__(self, settings: Optional[ScalingSettings] = None):
        """
        Initialize the pipeline.

        Args:
            settings: Validated settings, defaults when omitted
        """
        self.settings = settings or DEFAULT_SETTINGS
        self.scanner = QuantityScanner(self.settings.unit_lexicon)
        self.classifier = self.scanner.classifier
        self.renderer = QuantityRenderer(self.settings)

    def process(self, text: str, scale_factor: ScaleFactorLike = 1,
                leading_quantity: bool = True) -> ScalingResult:
        """
        Scale every quantity in one text block.

        Args:
            text: Text block, possibly containing manual markers
            scale_factor: Exact multiplier applied to every quantity
            leading_quantity: Whether a numeral opening the block is its leading
                count (list items, quantity-bearing sections)

        Returns:
            Rendered text with markers stripped, plus quantity positions

        Raises:
            ScaleFactorError: If the scale factor is not a rational number
        """
        started = time.perf_counter()
        factor = coerce_scale_factor(scale_factor)

        marked = extract_override_regions(text)
        tokens = self.scanner.scan(marked, leading_quantity)
        tokens = self.classifier.classify_all(marked.text, tokens)
        rendered = [self.renderer.render(token, scale(token.value, factor)) for token in tokens]
        result = assemble(marked.text, rendered)

        record_block(result, time.perf_counter() - started)
        logger.debug(
            "block_scaled",
            factor=str(factor),
            identity=is_identity(factor),
            quantities=len(result.tokens),
            changed=sum(1 for t in result.tokens if t.changed),
            overrides=len(marked.regions),
        )
        return result


def scale_text(text: str, scale_factor: ScaleFactorLike = 1,
               settings: Optional[ScalingSettings] = None,
               leading_quantity: bool = True) -> ScalingResult:
    """Scale the quantities in one text block with a one-off pipeline."""
    return QuantityScalingPipeline(settings).process(text, scale_factor, leading_quantity)


def scale_recipe_lines(pipeline: QuantityScalingPipeline, lines: List[str],
                       scale_factor: ScaleFactorLike, all_lines: bool = False) -> List[Dict[str, Any]]:
    """
    Scale a recipe line by line.

    List items keep their bullet or checkbox prefix and have the remainder
    scanned as a quantity-bearing block; other lines only get a leading count
    when all_lines is set.

    Args:
        pipeline: Pipeline to use
        lines: Lines without line endings
        scale_factor: Exact multiplier
        all_lines: Apply the leading-count rule to every line

    Returns:
        One report per line with the rendered text and quantity spans
    """
    reports = []
    for line in lines:
        prefix_match = LIST_ITEM_PREFIX.match(line)
        prefix = prefix_match.group(1) if prefix_match else ''
        result = pipeline.process(line[len(prefix):], scale_factor,
                                  leading_quantity=bool(prefix) or all_lines)
        tokens = []
        for token in result.tokens:
            data = token.to_dict()
            data["span"] = [token.span[0] + len(prefix), token.span[1] + len(prefix)]
            tokens.append(data)
        reports.append({"rendered_text": prefix + result.rendered_text, "tokens": tokens})
    return reports


def main(argv: Optional[List[str]] = None) -> int:
    """Main function for scaling a recipe file from the command line."""
    parser = argparse.ArgumentParser(description='Scale the quantities in a recipe text file')
    parser.add_argument('file', nargs='?', default='-', help='Recipe text file (default: stdin)')
    parser.add_argument('--scale', '-s', default='1', help='Scale factor, e.g. 2, 1.5 or 3/2')
    parser.add_argument('--config', '-c', help='Settings file (JSON or YAML)')
    parser.add_argument('--ascii-fractions', action='store_true',
                        help='Render fractions as "1/2" instead of "½"')
    parser.add_argument('--all-lines', action='store_true',
                        help='Treat a number at the start of any line as a quantity')
    parser.add_argument('--json', action='store_true', help='Print a JSON report instead of text')
    parser.add_argument('--log-level', default=None, help='Log level (default: LOG_LEVEL or WARNING)')

    args = parser.parse_args(argv)
    configure_logging(args.log_level, force=True)

    try:
        settings = load_settings(args.config)
        if args.ascii_fractions:
            settings = settings.with_overrides(render_unicode_fractions=False)
        factor = coerce_scale_factor(args.scale)
    except QuantityScalingError as e:
        logger.error("invalid_configuration", error_code=e.error_code, error=e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    if args.file == '-':
        text = sys.stdin.read()
    else:
        with open(args.file, 'r', encoding='utf-8') as f:
            text = f.read()

    pipeline = QuantityScalingPipeline(settings)
    reports = scale_recipe_lines(pipeline, text.splitlines(), factor, all_lines=args.all_lines)

    if args.json:
        print(json.dumps({"scale_factor": str(factor), "lines": reports},
                         indent=2, ensure_ascii=False))
    else:
        for report in reports:
            print(report["rendered_text"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
