"""
Data models for storage layer.

Defines parsed log records and aggregated usage buckets. All of them are
rebuilt from the log files on every query and never persisted.
"""

from dataclasses import dataclass, field
from typing import List

from claude_token_tracker.core.path_codec import format_project_name
from claude_token_tracker.core.token_counter import TokenUsage

UNKNOWN_MODEL = "unknown"


@dataclass(frozen=True)
class ParsedRecord:
    """One assistant request, resolved from the last log line for its request id."""
    request_id: str
    model: str
    timestamp: str
    usage: TokenUsage

    @property
    def date(self) -> str:
        """Calendar day as written in the timestamp, e.g. "2026-02-08"."""
        return self.timestamp[:10]


@dataclass(frozen=True)
class DailyUsage:
    """Usage summed over one date."""
    date: str
    usage: TokenUsage
    request_count: int


@dataclass(frozen=True)
class ModelDailyUsage:
    """Usage summed over one (date, model) pair."""
    date: str
    model: str
    usage: TokenUsage
    request_count: int


@dataclass(frozen=True)
class ModelUsage:
    """Usage for one model summed across every date."""
    model: str
    usage: TokenUsage
    request_count: int


@dataclass(frozen=True)
class UsageTotal:
    """Grand total over any sequence of buckets."""
    usage: TokenUsage = field(default_factory=TokenUsage)
    request_count: int = 0


@dataclass(frozen=True)
class ProjectUsage:
    """Usage breakdown for one project log directory."""
    project_dir: str
    daily_usage: List[DailyUsage]
    model_daily_usage: List[ModelDailyUsage]

    @property
    def display_name(self) -> str:
        """Readable project name (display only)."""
        return format_project_name(self.project_dir)


@dataclass
class ParseDiagnostics:
    """Counters for data the reader skipped.

    Optional; passing one in never changes what a query returns.
    """
    files_parsed: int = 0
    malformed_lines: int = 0
    skipped_records: int = 0
    unreadable_files: int = 0
    unreadable_dirs: int = 0

    @property
    def has_issues(self) -> bool:
        return bool(
            self.malformed_lines
            or self.skipped_records
            or self.unreadable_files
            or self.unreadable_dirs
        )
