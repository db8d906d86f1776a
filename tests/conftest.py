"""
Shared fixtures for writing session log files.
"""

import json
from pathlib import Path

import pytest


def assistant_entry(request_id="req_1", model="claude-opus-4-6",
                    timestamp="2026-02-08T10:00:00.000Z", input_tokens=100,
                    output_tokens=50, cache_creation=0, cache_read=0):
    """Build an assistant log entry in the session file format."""
    return {
        "type": "assistant",
        "requestId": request_id,
        "timestamp": timestamp,
        "message": {
            "model": model,
            "usage": {
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "cache_creation_input_tokens": cache_creation,
                "cache_read_input_tokens": cache_read,
            },
        },
    }


def write_session(path: Path, lines) -> Path:
    """Write entries (dicts are JSON encoded, strings written as-is)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    text = "\n".join(line if isinstance(line, str) else json.dumps(line) for line in lines)
    path.write_text(text + "\n", encoding="utf-8")
    return path


@pytest.fixture
def projects_dir(tmp_path):
    """An empty projects directory."""
    root = tmp_path / "projects"
    root.mkdir()
    return root
