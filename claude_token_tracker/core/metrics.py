"""
Derived usage metrics and display formatting.

Energy and "trees burned" are illustrative linear estimates, not
calibrated measurements.
"""

from enum import Enum

from .pricing import DEFAULT_PRICING_TABLE, PricingTable, calculate_cost
from .token_counter import TokenUsage

# ~0.001 kWh per 1000 tokens
KWH_PER_TOKEN = 0.000001

# ~0.00001 trees per 1000 tokens
TREES_PER_TOKEN = 0.00000001

KNOWN_MODEL_NAMES = {
    "claude-opus-4-6": "Opus 4.6",
    "claude-opus-4-5-20251101": "Opus 4.5",
    "claude-sonnet-4-5-20250929": "Sonnet 4.5",
}


class DisplayUnit(Enum):
    """Units a usage figure can be displayed in."""
    TOKENS = "tokens"
    COST_USD = "cost_usd"
    ENERGY_KWH = "energy_kwh"
    TREES_BURNED = "trees_burned"


_UNIT_LABELS = {
    DisplayUnit.TOKENS: "Token Count",
    DisplayUnit.COST_USD: "USD Cost",
    DisplayUnit.ENERGY_KWH: "Energy (kWh)",
    DisplayUnit.TREES_BURNED: "Trees Burned",
}


def calculate_energy(usage: TokenUsage) -> float:
    """Estimated energy in kWh for the total token count."""
    return usage.total_tokens * KWH_PER_TOKEN


def calculate_trees_burned(usage: TokenUsage) -> float:
    """Novelty metric: trees burned for the total token count."""
    return usage.total_tokens * TREES_PER_TOKEN


def get_model_display_name(model_id: str) -> str:
    """Short display name for a model id, e.g. "claude-opus-4-6" -> "Opus 4.6"."""
    if model_id in KNOWN_MODEL_NAMES:
        return KNOWN_MODEL_NAMES[model_id]
    if model_id.startswith("claude-"):
        model_id = model_id[len("claude-"):]
    return model_id.replace("-", " ")


def format_token_count(count: int) -> str:
    """Compact token count, e.g. 1234 -> "1.2k", 1234567 -> "1.2M"."""
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}k"
    return str(count)


def format_usage(
    usage: TokenUsage,
    unit: DisplayUnit,
    pricing_table: PricingTable = DEFAULT_PRICING_TABLE
) -> str:
    """Format a usage value in the selected display unit.

    Token counts only include input and output tokens; cost is priced at
    the premium tier since a bucket may mix models.
    """
    if unit == DisplayUnit.TOKENS:
        return f"{format_token_count(usage.input_tokens + usage.output_tokens)} tokens"
    if unit == DisplayUnit.COST_USD:
        return f"${calculate_cost(usage, pricing_table):.4f}"
    if unit == DisplayUnit.ENERGY_KWH:
        return f"{calculate_energy(usage):.4f} kWh"
    if unit == DisplayUnit.TREES_BURNED:
        return f"{calculate_trees_burned(usage):.6f} trees"
    raise ValueError(f"Unsupported display unit: {unit}")


def get_unit_label(unit: DisplayUnit) -> str:
    """Human label for a display unit."""
    return _UNIT_LABELS[unit]
