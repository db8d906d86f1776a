"""
Pricing calculations and rate management.

Handles cost computations for the Claude model families.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Union

from .token_counter import TokenUsage

TOKENS_PER_MILLION = Decimal("1000000")


class ModelFamily(Enum):
    """Pricing tiers, listed in match priority order."""
    OPUS = "opus"
    SONNET = "sonnet"
    HAIKU = "haiku"


# Family used when a model id matches nothing, or no model is known
DEFAULT_FAMILY = ModelFamily.OPUS


@dataclass(frozen=True)
class ModelPricing:
    """Per-million-token pricing for a model family."""
    input: Decimal  # Cost per 1M input tokens
    output: Decimal  # Cost per 1M output tokens
    cache_creation: Decimal  # Cost per 1M cache-write tokens
    cache_read: Decimal  # Cost per 1M cache-read tokens


DEFAULT_MODEL_PRICING: Dict[ModelFamily, ModelPricing] = {
    ModelFamily.OPUS: ModelPricing(
        input=Decimal("5.00"),
        output=Decimal("25.00"),
        cache_creation=Decimal("10.00"),
        cache_read=Decimal("0.50")
    ),
    ModelFamily.SONNET: ModelPricing(
        input=Decimal("3.00"),
        output=Decimal("15.00"),
        cache_creation=Decimal("6.00"),
        cache_read=Decimal("0.30")
    ),
    ModelFamily.HAIKU: ModelPricing(
        input=Decimal("1.00"),
        output=Decimal("5.00"),
        cache_creation=Decimal("2.00"),
        cache_read=Decimal("0.10")
    ),
}


@dataclass(frozen=True)
class PricingTable:
    """Pricing table keyed by model family."""
    prices: Dict[ModelFamily, ModelPricing] = field(
        default_factory=lambda: dict(DEFAULT_MODEL_PRICING)
    )

    def get_pricing(self, family: Union[ModelFamily, str]) -> ModelPricing:
        """Get pricing for a model family.

        Args:
            family: Model family, or its string value

        Returns:
            ModelPricing for the family. Unrecognized families get the
            premium tier.
        """
        if isinstance(family, str):
            try:
                family = ModelFamily(family.lower())
            except ValueError:
                family = DEFAULT_FAMILY
        if family in self.prices:
            return self.prices[family]
        return self.prices.get(DEFAULT_FAMILY, DEFAULT_MODEL_PRICING[DEFAULT_FAMILY])


DEFAULT_PRICING_TABLE = PricingTable()


def get_model_family(model_id: str) -> ModelFamily:
    """Resolve a model id to its pricing family.

    Substring match so new version suffixes keep resolving,
    e.g. "claude-sonnet-4-5-20250929" -> SONNET.
    """
    lower = model_id.lower()
    for family in ModelFamily:
        if family.value in lower:
            return family
    return DEFAULT_FAMILY


def _priced(usage: TokenUsage, pricing: ModelPricing) -> float:
    total_cost = (
        Decimal(usage.input_tokens) * pricing.input
        + Decimal(usage.output_tokens) * pricing.output
        + Decimal(usage.cache_creation_input_tokens) * pricing.cache_creation
        + Decimal(usage.cache_read_input_tokens) * pricing.cache_read
    )
    return float(total_cost / TOKENS_PER_MILLION)


def calculate_model_cost(
    usage: TokenUsage,
    model: str,
    pricing_table: PricingTable = DEFAULT_PRICING_TABLE
) -> float:
    """Calculate USD cost for usage using the model's family pricing.

    Args:
        usage: Token usage data
        model: Free-form model identifier
        pricing_table: Rates per family

    Returns:
        Cost in USD, unrounded
    """
    return _priced(usage, pricing_table.get_pricing(get_model_family(model)))


def calculate_cost(
    usage: TokenUsage,
    pricing_table: PricingTable = DEFAULT_PRICING_TABLE
) -> float:
    """Calculate USD cost when no model is known (premium tier pricing)."""
    return _priced(usage, pricing_table.get_pricing(DEFAULT_FAMILY))
