"""
Session log parsing.

Reads one append-only JSONL session file and extracts the usage of each
assistant request. The assistant may still be appending to the file while
we read it, so a broken line only costs that line.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from claude_token_tracker.core.token_counter import TokenUsage
from .models import UNKNOWN_MODEL, ParseDiagnostics, ParsedRecord

logger = logging.getLogger(__name__)

ASSISTANT_TYPE = "assistant"

USAGE_FIELDS = (
    "input_tokens",
    "output_tokens",
    "cache_creation_input_tokens",
    "cache_read_input_tokens",
)


def parse_session_file(
    file_path: Union[str, Path],
    diagnostics: Optional[ParseDiagnostics] = None
) -> List[ParsedRecord]:
    """Parse a JSONL session file into deduplicated assistant records.

    Streaming responses are logged several times under the same request id;
    the last line for a request id replaces any earlier one.

    Args:
        file_path: Path to a .jsonl session file
        diagnostics: Optional counters for skipped data

    Returns:
        Records in order of first appearance of their request id. An
        unreadable file gives an empty list. Lines are decoded one at a
        time, so invalid UTF-8 only costs the line it appears in.
    """
    try:
        content = Path(file_path).read_bytes()
    except OSError as e:
        logger.debug("Skipping unreadable session file %s: %s", file_path, e)
        if diagnostics is not None:
            diagnostics.unreadable_files += 1
        return []

    if diagnostics is not None:
        diagnostics.files_parsed += 1

    by_request_id: Dict[str, ParsedRecord] = {}

    for line_number, raw_line in enumerate(content.split(b"\n"), start=1):
        if not raw_line.strip():
            continue

        # ValueError covers both bad UTF-8 and bad JSON; very deep nesting
        # exhausts the decoder's recursion limit
        try:
            entry = json.loads(raw_line.decode("utf-8"))
        except (ValueError, RecursionError):
            logger.debug("Skipping malformed line %d in %s", line_number, file_path)
            if diagnostics is not None:
                diagnostics.malformed_lines += 1
            continue

        if not isinstance(entry, dict):
            logger.debug("Skipping non-object line %d in %s", line_number, file_path)
            if diagnostics is not None:
                diagnostics.malformed_lines += 1
            continue

        if entry.get("type") != ASSISTANT_TYPE:
            continue

        record = _parse_assistant_entry(entry)
        if record is None:
            logger.debug("Skipping assistant entry without request id or usage at line %d in %s",
                         line_number, file_path)
            if diagnostics is not None:
                diagnostics.skipped_records += 1
            continue

        # Assignment to an existing key keeps its original position
        by_request_id[record.request_id] = record

    return list(by_request_id.values())


def _parse_assistant_entry(entry: Dict[str, Any]) -> Optional[ParsedRecord]:
    """Build a record from an assistant entry, or None if it lacks id or usage."""
    request_id = entry.get("requestId")
    if not isinstance(request_id, str) or not request_id:
        return None

    message = entry.get("message")
    if not isinstance(message, dict):
        return None

    usage = message.get("usage")
    if not isinstance(usage, dict):
        return None

    model = message.get("model")
    if not isinstance(model, str) or not model:
        model = UNKNOWN_MODEL

    timestamp = entry.get("timestamp")
    if not isinstance(timestamp, str):
        timestamp = ""

    return ParsedRecord(
        request_id=request_id,
        model=model,
        timestamp=timestamp,
        usage=TokenUsage(**{name: _token_count(usage.get(name)) for name in USAGE_FIELDS}),
    )


def _token_count(value: Any) -> int:
    """Counter value, with anything missing or invalid read as 0."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value
