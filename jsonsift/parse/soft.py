"""
Permissive first-pass parsing of model output.

`soft_parse` never raises: when no strategy decodes the text it hands the
original text back, so callers check the result type to tell the cases apart.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from jsonsift.config import merged_config, repairers_from_config
from jsonsift.errors import ParseError
from jsonsift.logging_utils import get_logger
from jsonsift.parse.direct import parse_direct
from jsonsift.parse.fence import extract_fence
from jsonsift.parse.repair import LIGHT
from jsonsift.text_utils import preview


def _outermost_braces(text: str) -> Optional[str]:
    # First "{" to last "}", ignoring strings and nesting.
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last < first:
        return None
    return text[first : last + 1]


def soft_parse(text: Any, *, cfg: Optional[Dict[str, Any]] = None, log: Optional[logging.Logger] = None) -> Any:
    log = log or get_logger("jsonsift.soft")
    if not isinstance(text, str):
        return text
    c = merged_config(cfg)
    n = c["preview_chars"]
    light = LIGHT if cfg is None else repairers_from_config(c)[0]

    try:
        return parse_direct(text)
    except ParseError:
        log.debug("soft_parse: direct parse failed: %s", preview(text, n))

    block = extract_fence(text)
    if block:
        try:
            return parse_direct(block)
        except ParseError:
            log.debug("soft_parse: fenced block failed, repairing: %s", preview(block, n))
        try:
            return parse_direct(light(block))
        except ParseError:
            log.debug("soft_parse: repaired fenced block failed")

    span = _outermost_braces(text)
    if span is not None:
        try:
            return parse_direct(span)
        except ParseError:
            log.debug("soft_parse: outermost brace span failed: %s", preview(span, n))
        if c["soft_parse"]["repair_brace_span"]:
            try:
                return parse_direct(light(span))
            except ParseError:
                log.debug("soft_parse: repaired brace span failed")

    log.debug("soft_parse: returning input unchanged")
    return text
