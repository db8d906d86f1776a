"""
One-line status summary of today's usage.

The indicator is an ordinary object owned by whoever displays it; several
can exist side by side, each with its own repository and config.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from claude_token_tracker.config.loader import TrackerConfig
from claude_token_tracker.core.metrics import DisplayUnit, format_token_count, format_usage
from claude_token_tracker.core.pricing import calculate_cost
from claude_token_tracker.storage.models import DailyUsage
from claude_token_tracker.storage.repository import UsageRepository

NO_USAGE_TEXT = "Claude: No usage today"
NO_USAGE_TOOLTIP = "Claude Token Tracker - no usage recorded today"


@dataclass(frozen=True)
class StatusText:
    """Rendered status line and its detail tooltip."""
    text: str
    tooltip: str


class StatusIndicator:
    """Today's usage for a workspace, or for all projects when none is set."""

    def __init__(
        self,
        repository: UsageRepository,
        config: TrackerConfig,
        workspace_path: Optional[str] = None
    ):
        self.repository = repository
        self.config = config
        self.workspace_path = workspace_path
        self.current: Optional[StatusText] = None

    def refresh(self, today: Optional[date] = None) -> StatusText:
        """Re-read the logs and rebuild the status text."""
        if self.workspace_path:
            bucket = self.repository.get_today_project_usage(self.workspace_path, today)
        else:
            bucket = self.repository.get_today_usage(today)
        self.current = render_status(bucket, self.config)
        return self.current


def render_status(today: Optional[DailyUsage], config: TrackerConfig) -> StatusText:
    if today is None:
        return StatusText(text=NO_USAGE_TEXT, tooltip=NO_USAGE_TOOLTIP)

    usage = today.usage
    if config.display_unit == DisplayUnit.TOKENS:
        text = (
            f"Claude: {format_token_count(usage.input_tokens)} in / "
            f"{format_token_count(usage.output_tokens)} out"
        )
    else:
        text = f"Claude: {format_usage(usage, config.display_unit, config.pricing)}"

    cost = calculate_cost(usage, config.pricing)
    tooltip = "\n".join([
        "Claude Token Tracker - Today",
        f"Input: {usage.input_tokens:,} tokens",
        f"Output: {usage.output_tokens:,} tokens",
        f"Cache create: {usage.cache_creation_input_tokens:,} tokens",
        f"Cache read: {usage.cache_read_input_tokens:,} tokens",
        f"Est. cost: ${cost:.4f}",
        f"Requests: {today.request_count}",
    ])
    return StatusText(text=text, tooltip=tooltip)
