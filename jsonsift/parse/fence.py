from __future__ import annotations

import re
from typing import Optional


# Non-greedy: the interior ends at the first closing fence.
_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def extract_fence(text: str) -> Optional[str]:
    """Return the interior of the first ``` / ```json block, or None."""
    if not isinstance(text, str):
        return None
    m = _FENCE_RE.search(text)
    if m is None:
        return None
    return m.group(1)
