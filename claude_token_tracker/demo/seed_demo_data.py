# claude_token_tracker/demo/seed_demo_data.py

import json
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

DEMO_PROJECT_DIR = "C--Users-dev-Repos-my-project"
DEMO_API_PROJECT_DIR = "-home-dev-src-api-server"


def _assistant_line(request_id: str, model: str, timestamp: str, input_tokens: int,
                    output_tokens: int, cache_creation: int = 0, cache_read: int = 0) -> str:
    return json.dumps({
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
    })


def write_demo_logs(projects_dir: Path, today: Optional[date] = None) -> Path:
    """Write a small projects directory with two projects worth of sessions.

    Includes a streamed request logged twice, a user turn and a truncated
    line, the way real session files look.
    """
    today = today or date.today()
    yesterday = today - timedelta(days=1)
    t0 = f"{today.isoformat()}T09:15:00.000Z"
    t1 = f"{yesterday.isoformat()}T17:40:00.000Z"

    project = Path(projects_dir) / DEMO_PROJECT_DIR
    project.mkdir(parents=True, exist_ok=True)
    (project / "session-1.jsonl").write_text("\n".join([
        json.dumps({"type": "user", "timestamp": t0, "message": {"content": "hi"}}),
        _assistant_line("req_1", "claude-opus-4-6", t0, 1200, 50),
        _assistant_line("req_1", "claude-opus-4-6", t0, 1200, 300, 2000, 8000),
        _assistant_line("req_2", "claude-sonnet-4-5-20250929", t0, 800, 200),
        '{"type": "assistant", "requestId": "req_3", "mess',
    ]) + "\n", encoding="utf-8")
    (project / "session-2.jsonl").write_text(
        _assistant_line("req_4", "claude-opus-4-6", t1, 4000, 1000, 0, 12000) + "\n",
        encoding="utf-8"
    )

    api_project = Path(projects_dir) / DEMO_API_PROJECT_DIR
    api_project.mkdir(parents=True, exist_ok=True)
    (api_project / "session-1.jsonl").write_text(
        _assistant_line("req_5", "claude-haiku-4-5", t1, 500, 100) + "\n",
        encoding="utf-8"
    )

    return Path(projects_dir)


if __name__ == "__main__":
    target = Path(sys.argv[1] if len(sys.argv) > 1 else "demo-projects")
    write_demo_logs(target)
    print(f"Demo session logs written to {target}")
