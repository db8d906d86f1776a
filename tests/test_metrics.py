"""
Unit tests for derived metrics and display formatting.
"""

import pytest

from claude_token_tracker.core.metrics import (
    DisplayUnit,
    calculate_energy,
    calculate_trees_burned,
    format_token_count,
    format_usage,
    get_model_display_name,
    get_unit_label,
)
from claude_token_tracker.core.token_counter import TokenUsage


class TestDerivedMetrics:
    """Test energy and trees burned estimates."""
    
    def test_energy_uses_all_tokens(self):
        """Energy counts every token dimension."""
        usage = TokenUsage(250_000, 250_000, 250_000, 250_000)
        assert calculate_energy(usage) == pytest.approx(1.0)
    
    def test_trees_burned(self):
        """100M tokens burn one tree."""
        assert calculate_trees_burned(TokenUsage(input_tokens=100_000_000)) == pytest.approx(1.0)
    
    def test_zero_usage(self):
        """No tokens, no energy."""
        assert calculate_energy(TokenUsage()) == 0
        assert calculate_trees_burned(TokenUsage()) == 0


class TestModelDisplayName:
    """Test friendly model names."""
    
    @pytest.mark.parametrize("model_id, name", [
        ("claude-opus-4-6", "Opus 4.6"),
        ("claude-opus-4-5-20251101", "Opus 4.5"),
        ("claude-sonnet-4-5-20250929", "Sonnet 4.5"),
    ])
    def test_known_models(self, model_id, name):
        """Known ids have hand-written names."""
        assert get_model_display_name(model_id) == name
    
    def test_generic_fallback(self):
        """Unknown ids lose the claude- prefix and their hyphens."""
        assert get_model_display_name("claude-haiku-4-5-20251001") == "haiku 4 5 20251001"
    
    def test_non_claude_id(self):
        """Ids without the prefix only have hyphens replaced."""
        assert get_model_display_name("unknown") == "unknown"
        assert get_model_display_name("my-model") == "my model"


class TestFormatting:
    """Test unit formatting."""
    
    @pytest.mark.parametrize("count, text", [
        (999, "999"),
        (1_000, "1.0k"),
        (1_234, "1.2k"),
        (1_234_567, "1.2M"),
    ])
    def test_format_token_count(self, count, text):
        """Counts are abbreviated by magnitude."""
        assert format_token_count(count) == text
    
    def test_tokens_unit_counts_input_and_output(self):
        """Cache tokens are left out of the token display."""
        usage = TokenUsage(1_000, 500, 1_000_000, 1_000_000)
        assert format_usage(usage, DisplayUnit.TOKENS) == "1.5k tokens"
    
    def test_cost_unit(self):
        """Cost shows four decimals at premium pricing."""
        assert format_usage(TokenUsage(input_tokens=1_000_000), DisplayUnit.COST_USD) == "$5.0000"
    
    def test_energy_unit(self):
        """Energy shows four decimals."""
        assert format_usage(TokenUsage(input_tokens=1_500_000), DisplayUnit.ENERGY_KWH) == "1.5000 kWh"
    
    def test_trees_unit(self):
        """Trees show six decimals."""
        assert format_usage(TokenUsage(input_tokens=1_000_000), DisplayUnit.TREES_BURNED) == "0.010000 trees"
    
    def test_unit_labels(self):
        """Every unit has a label."""
        assert [get_unit_label(u) for u in DisplayUnit] == [
            "Token Count", "USD Cost", "Energy (kWh)", "Trees Burned"
        ]
