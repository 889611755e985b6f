from __future__ import annotations

import json
from typing import Any

from jsonsift.errors import ParseError


def parse_direct(text: str) -> Any:
    if not isinstance(text, str):
        raise ParseError(f"expected str, got {type(text).__name__}")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(str(e)) from e
