"""
Project directory naming.

The assistant stores each workspace's logs in a directory named after the
workspace path, with colons and path separators replaced by hyphens.
"""

import re
from typing import List

_SEPARATOR_RE = re.compile(r"[:\\/]")

# Parent folder names that usually sit right above a project checkout
COMMON_PARENTS = ("repos", "projects", "src", "documents", "desktop", "home", "users")


def encode_project_dir(workspace_path: str) -> str:
    """Convert a workspace path to the log directory name.
    
    e.g. 'C:\\Users\\dev\\Repos\\my-project' -> 'C--Users-dev-Repos-my-project'
    """
    return _SEPARATOR_RE.sub("-", workspace_path)


def format_project_name(encoded_dir: str) -> str:
    """Best-effort readable name for an encoded project directory.
    
    The encoding is lossy, so the result is for display only and must never
    be used to look anything up.
    
    e.g. 'C--Users-dev-Repos-my-project' -> 'my project'
    """
    parts: List[str] = encoded_dir.split("-")
    
    last_parent_index = -1
    for index, part in enumerate(parts):
        if part.lower() in COMMON_PARENTS:
            last_parent_index = index
    
    if 0 <= last_parent_index < len(parts) - 1:
        return " ".join(parts[last_parent_index + 1:])
    
    return encoded_dir
