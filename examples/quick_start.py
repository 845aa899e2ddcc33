#!/usr/bin/env python3
"""
Quick start guide for the recipe quantity scaler.
Minimal example that doubles a short ingredient list.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from scaling_config import settings_from_dict
from scaling_pipeline import QuantityScalingPipeline

RECIPE = [
    "2 3/4 cups flour",
    "1½ tsp baking powder",
    "125 g butter",
    "2-3 cloves garlic",
    "<span data-qty-no-parse>350 F</span> oven",
]


def quick_start():
    """Scale a recipe with default and customized settings."""

    print("Recipe Quantity Scaler - Quick Start")
    print("=" * 40)

    # 1. Default settings: unicode fractions, metric units as decimals
    pipeline = QuantityScalingPipeline()
    print("\n1. Doubling with default settings:")
    for line in RECIPE:
        result = pipeline.process(line, 2)
        print(f"   {line:45} -> {result.rendered_text}")

    # 2. Settings as stored by the host plugin
    settings = settings_from_dict({"renderUnicodeFractions": False, "extraUnits": ["knob"]})
    pipeline = QuantityScalingPipeline(settings)
    print("\n2. Scaling by 3/2 with text fractions:")
    for line in RECIPE + ["1 knob of ginger"]:
        result = pipeline.process(line, "3/2")
        changed = ", ".join(f"{t.value} -> {t.scaled_value}" for t in result.tokens if t.changed)
        print(f"   {result.rendered_text:30} ({changed or 'unchanged'})")


if __name__ == "__main__":
    quick_start()
