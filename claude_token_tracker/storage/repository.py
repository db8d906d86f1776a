"""
Repository pattern for data access.

Query surface over the assistant's session logs. Nothing is cached: every
call re-reads the files and re-aggregates from scratch.
"""

import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from claude_token_tracker.core.aggregator import (
    aggregate_by_date,
    aggregate_by_date_and_model,
    find_date,
    get_today_date,
)
from claude_token_tracker.core.path_codec import encode_project_dir
from .discovery import find_session_files, get_projects_dir, iter_project_dirs
from .log_parser import parse_session_file
from .models import DailyUsage, ParseDiagnostics, ParsedRecord, ProjectUsage

logger = logging.getLogger(__name__)


class UsageRepository:
    """Repository for reading usage out of the session logs.

    Absence is a normal result: with no projects directory, or no matching
    data, queries return an empty list or None rather than raising.
    """

    def __init__(
        self,
        projects_dir: Optional[Union[str, Path]] = None,
        home: Optional[Path] = None,
        diagnostics: Optional[ParseDiagnostics] = None
    ):
        """Initialize the repository.

        Args:
            projects_dir: Explicit projects directory; when None it is
                discovered under the home directory on every query
            home: Home directory used for discovery
            diagnostics: Optional counters for skipped data
        """
        self.projects_dir = Path(projects_dir).expanduser() if projects_dir else None
        self.home = home
        self.diagnostics = diagnostics

    def resolve_projects_dir(self) -> Optional[Path]:
        """Projects directory to read from, or None if there is none."""
        if self.projects_dir is not None:
            return self.projects_dir if self.projects_dir.exists() else None
        return get_projects_dir(self.home)

    def get_all_usage(self) -> List[DailyUsage]:
        """Daily usage summed across every project, most recent first."""
        return aggregate_by_date(self._load_records())

    def get_project_usage(self, workspace_path: str) -> List[DailyUsage]:
        """Daily usage for a single workspace.

        Args:
            workspace_path: Absolute path of the workspace root folder
        """
        return aggregate_by_date(self._load_records(encode_project_dir(workspace_path)))

    def get_today_usage(self, today: Optional[date] = None) -> Optional[DailyUsage]:
        """Today's usage across all projects, or None if nothing today."""
        return find_date(self.get_all_usage(), get_today_date(today))

    def get_today_project_usage(
        self,
        workspace_path: str,
        today: Optional[date] = None
    ) -> Optional[DailyUsage]:
        """Today's usage for a workspace, or None if nothing today."""
        return find_date(self.get_project_usage(workspace_path), get_today_date(today))

    def get_usage_by_project(self) -> List[ProjectUsage]:
        """Per-project daily and daily-by-model breakdowns.

        Projects without any usage records are left out.
        """
        projects_dir = self.resolve_projects_dir()
        if projects_dir is None:
            return []

        results: List[ProjectUsage] = []
        for name, files in iter_project_dirs(projects_dir, diagnostics=self.diagnostics):
            records = self._parse_files(files)
            if not records:
                continue
            results.append(ProjectUsage(
                project_dir=name,
                daily_usage=aggregate_by_date(records),
                model_daily_usage=aggregate_by_date_and_model(records)
            ))
        return results

    def find_project(self, workspace_path: str) -> Optional[ProjectUsage]:
        """Breakdown for the workspace's project directory, if it has usage."""
        wanted = encode_project_dir(workspace_path).lower()
        for project in self.get_usage_by_project():
            if project.project_dir.lower() == wanted:
                return project
        return None

    def _load_records(self, project_dir_filter: Optional[str] = None) -> List[ParsedRecord]:
        projects_dir = self.resolve_projects_dir()
        if projects_dir is None:
            logger.debug("No projects directory found")
            return []
        files = find_session_files(projects_dir, project_dir_filter, self.diagnostics)
        return self._parse_files(files)

    def _parse_files(self, files: List[Path]) -> List[ParsedRecord]:
        records: List[ParsedRecord] = []
        for file_path in files:
            records.extend(parse_session_file(file_path, self.diagnostics))
        return records
