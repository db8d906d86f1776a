"""
Unit tests for token usage counters.
"""

from claude_token_tracker.core.token_counter import TokenUsage


class TestTokenUsage:
    """Test TokenUsage dataclass."""
    
    def test_total_tokens_calculation(self):
        """Verify total_tokens covers all four counters."""
        usage = TokenUsage(
            input_tokens=100,
            output_tokens=50,
            cache_creation_input_tokens=20,
            cache_read_input_tokens=5
        )
        assert usage.total_tokens == 175
    
    def test_zero_tokens(self):
        """Verify the default is all zeros."""
        assert TokenUsage().total_tokens == 0
    
    def test_addition_is_pairwise(self):
        """Adding usages sums each counter separately."""
        total = TokenUsage(1, 2, 3, 4) + TokenUsage(10, 20, 30, 40)
        assert total == TokenUsage(11, 22, 33, 44)
    
    def test_addition_rejects_other_types(self):
        """Adding a non-usage is not supported."""
        result = TokenUsage().__add__(5)
        assert result is NotImplemented
