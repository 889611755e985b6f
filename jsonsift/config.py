from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from jsonsift.errors import ConfigError
from jsonsift.parse.repair import LIGHT_RULES, STRUCTURED_RULES, Repairer


DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": "INFO",
    "preview_chars": 100,
    "repair": {
        "light": list(LIGHT_RULES),
        "structured": list(STRUCTURED_RULES),
    },
    "soft_parse": {
        # Retry the outermost-brace span with the light profile.
        "repair_brace_span": True,
    },
    "batch": {
        "field": "response",
        "mode": "strict",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: str | Path | None) -> Dict[str, Any]:
    if path is None:
        return deepcopy(DEFAULT_CONFIG)
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    if raw is not None and not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping, got {type(raw).__name__} in {p}")
    cfg = _deep_merge(DEFAULT_CONFIG, raw or {})
    cfg["_config_path"] = str(p.resolve())
    validate_config(cfg)
    return cfg


def merged_config(cfg: Dict[str, Any] | None) -> Dict[str, Any]:
    """Fill in defaults for a partial config dict passed by library callers."""
    if cfg is None:
        return DEFAULT_CONFIG
    out = _deep_merge(DEFAULT_CONFIG, cfg)
    validate_config(out)
    return out


def validate_config(cfg: Dict[str, Any]) -> None:
    """Raise ConfigError unless every section has the shape the parsers read."""
    for section in ("repair", "soft_parse", "batch"):
        if not isinstance(cfg.get(section), dict):
            # An empty YAML key ("soft_parse:") loads as None.
            raise ConfigError(f"{section} must be a mapping, got {type(cfg.get(section)).__name__}")
    n = cfg.get("preview_chars")
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise ConfigError(f"preview_chars must be a non-negative integer, got {n!r}")
    if not isinstance(cfg["soft_parse"].get("repair_brace_span"), bool):
        raise ConfigError("soft_parse.repair_brace_span must be true or false")
    field = cfg["batch"].get("field")
    if not isinstance(field, str) or not field:
        raise ConfigError(f"batch.field must be a non-empty string, got {field!r}")
    if cfg["batch"].get("mode") not in ("strict", "soft"):
        raise ConfigError(f"batch.mode must be 'strict' or 'soft', got {cfg['batch'].get('mode')!r}")
    repairers_from_config(cfg)


def repairers_from_config(cfg: Dict[str, Any]) -> Tuple[Repairer, Repairer]:
    rep = cfg.get("repair") or {}
    light = rep.get("light", LIGHT_RULES)
    structured = rep.get("structured", STRUCTURED_RULES)
    for name, rules in (("light", light), ("structured", structured)):
        if not isinstance(rules, (list, tuple)):
            raise ConfigError(f"repair.{name} must be a list of rule names")
    return Repairer.from_names(light, name="light"), Repairer.from_names(structured, name="structured")
