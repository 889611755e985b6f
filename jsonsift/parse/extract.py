from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from jsonsift.config import merged_config, repairers_from_config
from jsonsift.errors import NoCandidateError, NoJsonFoundError, ParseError
from jsonsift.logging_utils import get_logger
from jsonsift.parse.direct import parse_direct
from jsonsift.parse.fence import extract_fence
from jsonsift.parse.repair import STRUCTURED
from jsonsift.parse.scanner import scan_braces
from jsonsift.parse.soft import soft_parse
from jsonsift.text_utils import preview


def extract_and_parse_json(text: str, *, cfg: Optional[Dict[str, Any]] = None, log: Optional[logging.Logger] = None) -> Any:
    """Recover a JSON value from model output or raise NoJsonFoundError.

    Strategies, first success wins:
      1. soft_parse, accepted only for an object or array
      2. strict parse of the whole text
      3. first fenced block, structured repair, parse
      4. string-aware brace scan, structured repair per span
    """
    log = log or get_logger("jsonsift.extract")
    c = merged_config(cfg)
    n = c["preview_chars"]
    structured = STRUCTURED if cfg is None else repairers_from_config(c)[1]

    if not isinstance(text, str):
        log.warning("No valid JSON found: input is %s", type(text).__name__)
        raise NoJsonFoundError()

    log.debug("Attempt 1 - soft_parse, input: %s", preview(text, n))
    result = soft_parse(text, cfg=cfg, log=log)
    if isinstance(result, (dict, list)):
        log.debug("Attempt 1 succeeded")
        return result
    log.debug("Attempt 1 failed: soft_parse returned %s", type(result).__name__)

    try:
        value = parse_direct(text)
        log.debug("Attempt 2 succeeded")
        return value
    except ParseError as e:
        log.debug("Attempt 2 failed: %s", e)

    block = extract_fence(text)
    if block is None:
        log.debug("Attempt 3 - no code block found")
    else:
        cleaned = structured(block)
        log.debug("Attempt 3 - cleaned code block: %s", preview(cleaned, n))
        try:
            value = parse_direct(cleaned)
            log.debug("Attempt 3 succeeded")
            return value
        except ParseError as e:
            log.debug("Attempt 3 failed: %s", e)

    try:
        value = scan_braces(text, structured, log=log, preview_chars=n)
        log.debug("Attempt 4 succeeded")
        return value
    except NoCandidateError as e:
        log.debug("Attempt 4 failed: %s", e)

    log.warning("No valid JSON found in response: %s", preview(text, n))
    raise NoJsonFoundError()
