from __future__ import annotations

from typing import Any


def preview(text: Any, limit: int = 100) -> str:
    """Truncated, single-line rendering of `text` for trace lines."""
    s = text if isinstance(text, str) else repr(text)
    if limit <= 0:
        return ""
    if len(s) > limit:
        s = s[:limit] + "..."
    return s.replace("\r", "\\r").replace("\n", "\\n")
