"""
Textual rewrite rules applied to a candidate before it is parsed again.

A `Repairer` is an ordered tuple of regex substitutions. Order matters: later
rules assume the normalization done by earlier ones. Two profiles are built
from the shared rule registry:

  - LIGHT: trailing commas, bare keys, single-quoted values
  - STRUCTURED: YAML/markdown artifacts left around model output, then
    trailing commas and whitespace inside strings

Neither profile guarantees valid JSON afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from jsonsift.errors import ConfigError


@dataclass(frozen=True)
class RepairRule:
    name: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, pattern: str, replacement: str, flags: int = 0) -> RepairRule:
    return RepairRule(name=name, pattern=re.compile(pattern, flags), replacement=replacement)


RULES: Dict[str, RepairRule] = {
    r.name: r
    for r in (
        _rule("trailing_commas", r",(\s*[}\]])", r"\1"),
        # ASCII: identifier keys only, not arbitrary unicode words.
        _rule("quote_keys", r"([{,])\s*(\w+)\s*:", r'\1"\2":', re.ASCII),
        _rule("single_quotes", r":\s*'([^']*)'", r':"\1"'),
        _rule("yaml_pipes", r"\|\n", "\n"),
        _rule("block_scalars", r":\s*[>|](\s*\n|\s*\Z)", ": "),
        _rule("blockquotes", r"^\s*>", "", re.MULTILINE),
        _rule("blank_lines", r"\n\s*\n", "\n"),
        _rule("string_padding", r':\s*"\s+', ': "'),
        # Closing quotes only: the quote must be followed by a separator or the end.
        _rule("quote_padding", r'\s+"(?=\s*[,}\]:\n]|\s*\Z)', '"'),
    )
}

LIGHT_RULES: Tuple[str, ...] = ("trailing_commas", "quote_keys", "single_quotes")

STRUCTURED_RULES: Tuple[str, ...] = (
    "yaml_pipes",
    "block_scalars",
    "blockquotes",
    "trailing_commas",
    "blank_lines",
    "string_padding",
    "quote_padding",
)


class Repairer:
    def __init__(self, rules: Iterable[RepairRule], *, name: str = "custom") -> None:
        self.name = name
        self.rules: Tuple[RepairRule, ...] = tuple(rules)

    @classmethod
    def from_names(cls, names: Iterable[str], *, name: str = "custom") -> "Repairer":
        names = list(names)
        unknown = [n for n in names if n not in RULES]
        if unknown:
            raise ConfigError(f"Unknown repair rule(s) for profile {name!r}: {', '.join(unknown)}")
        return cls((RULES[n] for n in names), name=name)

    @property
    def rule_names(self) -> Tuple[str, ...]:
        return tuple(r.name for r in self.rules)

    def __call__(self, text: str) -> str:
        for rule in self.rules:
            text = rule.apply(text)
        return text

    def __repr__(self) -> str:
        return f"Repairer({self.name!r}, rules={list(self.rule_names)!r})"


LIGHT = Repairer.from_names(LIGHT_RULES, name="light")
STRUCTURED = Repairer.from_names(STRUCTURED_RULES, name="structured")
