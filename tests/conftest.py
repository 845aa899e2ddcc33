"""Shared pytest fixtures for the quantity scaling tests."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quantity_parser import NumberParser  # noqa: E402
from quantity_scanner import QuantityScanner  # noqa: E402
from scaling_config import DEFAULT_SETTINGS  # noqa: E402
from scaling_pipeline import QuantityScalingPipeline  # noqa: E402


@pytest.fixture
def settings():
    return DEFAULT_SETTINGS


@pytest.fixture
def ascii_settings():
    return DEFAULT_SETTINGS.with_overrides(render_unicode_fractions=False)


@pytest.fixture
def parser():
    return NumberParser()


@pytest.fixture
def scanner(settings):
    return QuantityScanner(settings.unit_lexicon)


@pytest.fixture
def pipeline(settings):
    return QuantityScalingPipeline(settings)


@pytest.fixture
def ascii_pipeline(ascii_settings):
    return QuantityScalingPipeline(ascii_settings)
