#!/usr/bin/env python3
"""
Configuration for the quantity scaling engine.

Settings are an immutable value passed explicitly into every pipeline call.
They can be built from defaults, from a dictionary (including the host
plugin's camelCase keys), or from a JSON/YAML file, and are validated once
when they are loaded.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from quantity_models import DisplayStyle
from scaling_errors import ConfigurationError
from scaling_monitoring import get_logger
from unit_lexicon import UNIT_PUNCTUATION, UnitLexicon, default_display_preferences

logger = get_logger(__name__)

# Keys used by the host plugin's stored settings
CAMEL_CASE_KEYS = {
    "renderUnicodeFractions": "render_unicode_fractions",
    "unitLexicon": "unit_lexicon",
    "extraUnits": "extra_units",
    "unitDisplayPreference": "unit_display_preference",
    "defaultDisplayStyle": "default_display_style",
    "decimalPlaces": "decimal_places",
    "roundingDenominator": "rounding_denominator",
}

MAX_DECIMAL_PLACES = 10


def _frozen_preferences(preferences: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType({
        unit.lower().strip(UNIT_PUNCTUATION): style for unit, style in preferences.items()
    })


@dataclass(frozen=True)
class ScalingSettings:
    """Immutable settings for one or many pipeline invocations."""
    render_unicode_fractions: bool = True
    unit_lexicon: UnitLexicon = field(default_factory=UnitLexicon.default)
    unit_display_preference: Mapping[str, str] = field(
        default_factory=lambda: _frozen_preferences(default_display_preferences())
    )
    default_display_style: str = DisplayStyle.FRACTION.value
    decimal_places: int = 2
    rounding_denominator: int = 16

    def display_preference(self, unit_text: Optional[str]) -> DisplayStyle:
        """
        Preferred display style for a non-integral quantity of an integer source.

        Args:
            unit_text: Unit associated with the quantity, if any

        Returns:
            Style from the preference table, by spelling then by canonical
            unit name, falling back to the default style
        """
        if unit_text:
            key = unit_text.lower().strip(UNIT_PUNCTUATION)
            if key in self.unit_display_preference:
                return DisplayStyle(self.unit_display_preference[key])
            canonical = self.unit_lexicon.canonical_name(unit_text)
            if canonical and canonical in self.unit_display_preference:
                return DisplayStyle(self.unit_display_preference[canonical])
        return DisplayStyle(self.default_display_style)

    def with_overrides(self, **changes: Any) -> "ScalingSettings":
        """Return validated settings with some fields replaced."""
        if "unit_display_preference" in changes:
            changes["unit_display_preference"] = _frozen_preferences(changes["unit_display_preference"])
        return validate_settings(replace(self, **changes))


DEFAULT_SETTINGS = ScalingSettings()


def validate_settings(settings: ScalingSettings) -> ScalingSettings:
    """
    Validate settings once, at load time.

    Args:
        settings: Settings to check

    Returns:
        The same settings

    Raises:
        ConfigurationError: If any value is unusable
    """
    if not isinstance(settings.render_unicode_fractions, bool):
        raise ConfigurationError(
            "render_unicode_fractions must be a boolean",
            details={"value": settings.render_unicode_fractions},
        )
    if not isinstance(settings.unit_lexicon, UnitLexicon) or len(settings.unit_lexicon) == 0:
        raise ConfigurationError("unit_lexicon must contain at least one unit")

    valid_styles = {style.value for style in DisplayStyle}
    if settings.default_display_style not in valid_styles:
        raise ConfigurationError(
            f"default_display_style must be one of {sorted(valid_styles)}",
            details={"value": settings.default_display_style},
        )
    for unit, style in settings.unit_display_preference.items():
        if style not in valid_styles:
            raise ConfigurationError(
                f"Display preference for '{unit}' must be one of {sorted(valid_styles)}",
                details={"unit": unit, "value": style},
            )

    places = settings.decimal_places
    if isinstance(places, bool) or not isinstance(places, int) or not 0 <= places <= MAX_DECIMAL_PLACES:
        raise ConfigurationError(
            f"decimal_places must be an integer between 0 and {MAX_DECIMAL_PLACES}",
            details={"value": places},
        )
    denominator = settings.rounding_denominator
    if isinstance(denominator, bool) or not isinstance(denominator, int) or denominator < 2:
        raise ConfigurationError(
            "rounding_denominator must be an integer of at least 2",
            details={"value": denominator},
        )
    return settings


def settings_from_dict(data: Optional[Mapping[str, Any]] = None,
                       base: ScalingSettings = DEFAULT_SETTINGS) -> ScalingSettings:
    """
    Build settings by merging a dictionary over a base.

    Args:
        data: Settings values, snake_case or the host plugin's camelCase keys
        base: Settings to start from

    Returns:
        Validated settings
    """
    values: Dict[str, Any] = {}
    for key, value in (data or {}).items():
        name = CAMEL_CASE_KEYS.get(key, key)
        if name in values:
            logger.warning("duplicate_setting", key=key)
        values[name] = value

    lexicon = base.unit_lexicon
    if "unit_lexicon" in values:
        lexicon = UnitLexicon(_string_list(values.pop("unit_lexicon"), "unit_lexicon"))
    if "extra_units" in values:
        lexicon = lexicon.extend(_string_list(values.pop("extra_units"), "extra_units"))

    preferences = dict(base.unit_display_preference)
    if "unit_display_preference" in values:
        overrides = values.pop("unit_display_preference")
        if not isinstance(overrides, Mapping):
            raise ConfigurationError("unit_display_preference must be a mapping")
        if not all(isinstance(unit, str) for unit in overrides):
            raise ConfigurationError("unit_display_preference keys must be unit spellings")
        preferences.update(overrides)

    known = {"render_unicode_fractions", "default_display_style",
             "decimal_places", "rounding_denominator"}
    changes = {name: values.pop(name) for name in list(values) if name in known}
    for name in values:
        logger.debug("ignoring_unknown_setting", key=name)

    settings = replace(
        base,
        unit_lexicon=lexicon,
        unit_display_preference=_frozen_preferences(preferences),
        **changes,
    )
    return validate_settings(settings)


def _string_list(value: Any, name: str):
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigurationError(f"{name} must be a list of unit spellings")
    if not all(isinstance(item, str) for item in value):
        raise ConfigurationError(f"{name} must only contain strings")
    return list(value)


def load_settings(config_path: Union[str, Path, None] = None) -> ScalingSettings:
    """
    Load settings from a JSON or YAML file.

    Args:
        config_path: Path to the settings file; defaults are returned when None

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the file is missing, malformed or invalid
    """
    if config_path is None:
        return DEFAULT_SETTINGS

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}", details={"path": str(path)})

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to parse settings from {path}: {e}",
                                 details={"path": str(path)}) from e

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Settings file {path} must contain a mapping",
                                 details={"path": str(path)})

    settings = settings_from_dict(data)
    logger.info("settings_loaded", path=str(path), units=len(settings.unit_lexicon))
    return settings
