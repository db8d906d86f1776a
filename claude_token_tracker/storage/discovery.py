"""
Log directory discovery.

Locates the assistant's projects directory and the session files in it.
Each project directory is an independent unit: if one cannot be read, the
others are still returned.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .models import ParseDiagnostics

logger = logging.getLogger(__name__)

SESSION_FILE_SUFFIX = ".jsonl"

PRIMARY_PROJECTS_DIR = Path(".claude") / "projects"
FALLBACK_PROJECTS_DIR = Path(".config") / "claude" / "projects"


def get_projects_dir(home: Optional[Path] = None) -> Optional[Path]:
    """Find the projects directory.

    Checks ~/.claude/projects first, then ~/.config/claude/projects.

    Args:
        home: Home directory to search from (defaults to the user's home)

    Returns:
        The first candidate that exists, or None
    """
    home = Path(home) if home is not None else Path.home()
    for candidate in (home / PRIMARY_PROJECTS_DIR, home / FALLBACK_PROJECTS_DIR):
        if candidate.exists():
            return candidate
    return None


def iter_project_dirs(
    projects_dir: Path,
    project_dir_filter: Optional[str] = None,
    diagnostics: Optional[ParseDiagnostics] = None
) -> Iterator[Tuple[str, List[Path]]]:
    """Yield (directory name, session files) for each project directory.

    Args:
        projects_dir: Root projects directory
        project_dir_filter: Only include the directory with this encoded
            name, compared case-insensitively
        diagnostics: Optional counters for skipped data

    Yields:
        Directory name and its .jsonl files, in sorted name order
    """
    try:
        names = sorted(entry.name for entry in Path(projects_dir).iterdir())
    except OSError as e:
        logger.debug("Cannot list projects directory %s: %s", projects_dir, e)
        if diagnostics is not None:
            diagnostics.unreadable_dirs += 1
        return

    wanted = project_dir_filter.lower() if project_dir_filter else None

    for name in names:
        if wanted is not None and name.lower() != wanted:
            continue

        dir_path = Path(projects_dir) / name
        try:
            if not dir_path.is_dir():
                continue
            files = sorted(
                entry for entry in dir_path.iterdir()
                if entry.name.endswith(SESSION_FILE_SUFFIX)
            )
        except OSError as e:
            logger.debug("Skipping unreadable project directory %s: %s", dir_path, e)
            if diagnostics is not None:
                diagnostics.unreadable_dirs += 1
            continue

        yield name, files


def find_session_files(
    projects_dir: Path,
    project_dir_filter: Optional[str] = None,
    diagnostics: Optional[ParseDiagnostics] = None
) -> List[Path]:
    """Find all .jsonl session files under the projects directory.

    If project_dir_filter is given, only that project's files are included.
    """
    files: List[Path] = []
    for _, project_files in iter_project_dirs(projects_dir, project_dir_filter, diagnostics):
        files.extend(project_files)
    return files
