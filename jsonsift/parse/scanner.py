"""
String-aware brace matching.

A single forward pass tracks brace depth outside of double-quoted strings and
yields every balanced top-level `{...}` span as a half-open `(start, end)`
range. `scan_braces` repairs and parses each span in turn and stops at the
first one that decodes.

Escapes use one character of lookback: a backslash that is not itself escaped
marks the next character as escaped, inside or outside a string. The escaped
character is never treated as a string delimiter.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Tuple

from jsonsift.errors import NoCandidateError, ParseError
from jsonsift.logging_utils import get_logger
from jsonsift.parse.direct import parse_direct
from jsonsift.text_utils import preview


class ScanMode(enum.Enum):
    CODE = "code"
    CODE_ESCAPE = "code_escape"
    STRING = "string"
    STRING_ESCAPE = "string_escape"

    @property
    def in_string(self) -> bool:
        return self in (ScanMode.STRING, ScanMode.STRING_ESCAPE)

    @property
    def pending_escape(self) -> bool:
        return self in (ScanMode.CODE_ESCAPE, ScanMode.STRING_ESCAPE)


@dataclass
class ScanState:
    depth: int = 0
    mode: ScanMode = ScanMode.CODE
    start: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.start is not None


def _step_mode(mode: ScanMode, ch: str) -> Tuple[ScanMode, bool]:
    """Advance the lexical mode by one character.

    Returns the new mode and whether `ch` takes part in brace counting.
    """
    if mode is ScanMode.CODE_ESCAPE:
        # The escaped character still counts as code.
        return ScanMode.CODE, True
    if mode is ScanMode.STRING_ESCAPE:
        return ScanMode.STRING, False
    if ch == "\\":
        return (ScanMode.STRING_ESCAPE if mode is ScanMode.STRING else ScanMode.CODE_ESCAPE), False
    if ch == '"':
        return (ScanMode.CODE if mode is ScanMode.STRING else ScanMode.STRING), mode is ScanMode.STRING
    return mode, mode is ScanMode.CODE


def iter_brace_spans(text: str) -> Iterator[Tuple[int, int]]:
    """Yield `(start, end)` for each balanced top-level object span, lazily.

    The generator only resumes scanning when the consumer asks for the next
    span, so a caller that stops at the first good candidate never reads past it.
    """
    state = ScanState()
    for i, ch in enumerate(text):
        state.mode, counts = _step_mode(state.mode, ch)
        if not counts:
            continue
        if ch == "{":
            if state.depth == 0:
                state.start = i
            state.depth += 1
        elif ch == "}":
            if state.depth == 0:
                # Stray closer before any opener.
                continue
            state.depth -= 1
            if state.depth == 0 and state.start is not None:
                start, state.start = state.start, None
                yield start, i + 1


def scan_braces(
    text: str,
    repairer: Callable[[str], str],
    *,
    log: Optional[logging.Logger] = None,
    preview_chars: int = 100,
) -> Any:
    """Return the first brace span that parses after `repairer`.

    Raises NoCandidateError when no span decodes.
    """
    log = log or get_logger("jsonsift.scanner")
    tried = 0
    for start, end in iter_brace_spans(text):
        tried += 1
        log.debug("Brace scan - candidate [%d, %d)", start, end)
        candidate = repairer(text[start:end])
        try:
            value = parse_direct(candidate)
        except ParseError as e:
            log.debug("Brace scan - candidate failed: %s (%s)", e, preview(candidate, preview_chars))
            continue
        log.debug("Brace scan - candidate [%d, %d) succeeded", start, end)
        return value
    raise NoCandidateError(f"no parseable brace span ({tried} tried)")
