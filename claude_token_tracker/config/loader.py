"""
Configuration management and loading.

Handles pricing overrides, display unit and log location settings.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Dict, Optional

import yaml

from claude_token_tracker.core.metrics import DisplayUnit
from claude_token_tracker.core.pricing import (
    DEFAULT_MODEL_PRICING,
    ModelFamily,
    ModelPricing,
    PricingTable,
)

PRICING_DIMENSIONS = ("input", "output", "cache_creation", "cache_read")


@dataclass(frozen=True)
class TrackerConfig:
    """Complete tracker configuration.

    Passed explicitly to whatever needs it; nothing reads settings from
    global state.
    """
    pricing: PricingTable = field(default_factory=PricingTable)
    display_unit: DisplayUnit = DisplayUnit.TOKENS
    projects_dir: Optional[str] = None


def load_tracker_config(path: str) -> TrackerConfig:
    """Load and validate tracker configuration from YAML file.

    Every pricing rate that is not configured keeps its default, so a
    file may override a single rate of a single family.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated TrackerConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Tracker config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    # An empty file means "all defaults"
    if raw_config is None:
        return TrackerConfig()

    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {'pricing', 'display_unit', 'projects_dir'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    pricing = _parse_pricing(raw_config.get('pricing') or {})
    display_unit = _parse_display_unit(raw_config.get('display_unit', DisplayUnit.TOKENS.value))

    projects_dir = raw_config.get('projects_dir')
    if projects_dir is not None and not isinstance(projects_dir, str):
        raise ValueError("'projects_dir' must be a string")

    return TrackerConfig(
        pricing=pricing,
        display_unit=display_unit,
        projects_dir=projects_dir
    )


def _parse_pricing(data: Dict) -> PricingTable:
    """Parse and validate per-family pricing overrides.

    Args:
        data: Mapping of family name to per-dimension rates

    Returns:
        PricingTable with defaults filled in for missing rates

    Raises:
        ValueError: If configuration is invalid
    """
    if not isinstance(data, dict):
        raise ValueError("'pricing' must be a dictionary")

    valid_families = [family.value for family in ModelFamily]
    prices: Dict[ModelFamily, ModelPricing] = dict(DEFAULT_MODEL_PRICING)

    for family_name, rates in data.items():
        if family_name not in valid_families:
            raise ValueError(f"Unknown pricing family '{family_name}', must be one of: {valid_families}")
        if not isinstance(rates, dict):
            raise ValueError(f"Pricing for '{family_name}' must be a dictionary")

        unknown_keys = set(rates.keys()) - set(PRICING_DIMENSIONS)
        if unknown_keys:
            raise ValueError(f"Unknown keys in pricing.{family_name}: {unknown_keys}")

        family = ModelFamily(family_name)
        defaults = DEFAULT_MODEL_PRICING[family]
        resolved = {}
        for dimension in PRICING_DIMENSIONS:
            if dimension not in rates:
                resolved[dimension] = getattr(defaults, dimension)
                continue
            value = rates[dimension]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"'pricing.{family_name}.{dimension}' must be a number >= 0")
            resolved[dimension] = Decimal(str(value))

        prices[family] = ModelPricing(**resolved)

    return PricingTable(prices)


def _parse_display_unit(value) -> DisplayUnit:
    if not isinstance(value, str):
        raise ValueError("'display_unit' must be a string")
    try:
        return DisplayUnit(value.lower())
    except ValueError:
        valid_units = [unit.value for unit in DisplayUnit]
        raise ValueError(f"'display_unit' must be one of: {valid_units}")
