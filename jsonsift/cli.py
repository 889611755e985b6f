from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterator

from jsonsift.config import load_config
from jsonsift.errors import ConfigError, NoJsonFoundError
from jsonsift.jsonl import read_jsonl, write_jsonl
from jsonsift.logging_utils import get_logger, setup_logging
from jsonsift.parse.extract import extract_and_parse_json
from jsonsift.parse.soft import soft_parse


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", type=str, default=None, help="YAML config file (defaults are used when omitted).")
    p.add_argument("--log-level", type=str, default=None)


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _batch_rows(cfg: Dict[str, Any], input_path: str, field: str, mode: str, counts: Dict[str, int]) -> Iterator[Dict[str, Any]]:
    for row in read_jsonl(input_path):
        counts["total"] += 1
        raw = row.get(field)
        out = dict(row)
        if mode == "soft":
            parsed = soft_parse(raw, cfg=cfg)
            # A str result equal to the input means nothing was decoded.
            out["ok"] = isinstance(raw, str) and not (isinstance(parsed, str) and parsed == raw)
            out["parsed"] = parsed
        else:
            try:
                out["parsed"] = extract_and_parse_json(raw, cfg=cfg)
                out["ok"] = True
            except NoJsonFoundError as e:
                out["parsed"] = None
                out["ok"] = False
                out["error"] = str(e)
        if out["ok"]:
            counts["ok"] += 1
        yield out


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    ap = argparse.ArgumentParser(prog="jsonsift")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_parse = sub.add_parser("parse", help="Extract the JSON value from one model response.")
    _add_common(p_parse)
    p_parse.add_argument("--input", type=str, default="-", help="File to read, '-' for stdin.")
    p_parse.add_argument("--soft", action="store_true", help="Never fail: print the input back as a JSON string if nothing parses.")
    p_parse.add_argument("--indent", type=int, default=None)

    p_batch = sub.add_parser("batch", help="Parse one field of every row in a JSONL file.")
    _add_common(p_batch)
    p_batch.add_argument("--input", type=str, required=True)
    p_batch.add_argument("--output", type=str, required=True)
    p_batch.add_argument("--field", type=str, default=None, help="Row field holding the raw text (config: batch.field).")
    p_batch.add_argument("--mode", type=str, default=None, choices=["strict", "soft"])

    args = ap.parse_args(argv)
    try:
        cfg: Dict[str, Any] = load_config(args.config)
    except (OSError, ConfigError) as e:
        print(f"jsonsift: {e}", file=sys.stderr)
        return 2
    setup_logging(args.log_level or cfg.get("log_level", "INFO"))

    if args.cmd == "parse":
        text = _read_input(args.input)
        if args.soft:
            value = soft_parse(text, cfg=cfg)
        else:
            try:
                value = extract_and_parse_json(text, cfg=cfg)
            except NoJsonFoundError as e:
                print(str(e), file=sys.stderr)
                return 1
        print(json.dumps(value, ensure_ascii=False, indent=args.indent))
        return 0
    if args.cmd == "batch":
        log = get_logger("jsonsift.batch")
        field = args.field or cfg["batch"]["field"]
        mode = args.mode or cfg["batch"]["mode"]
        counts = {"total": 0, "ok": 0}
        write_jsonl(args.output, _batch_rows(cfg, args.input, field, mode, counts))
        log.info("Parsed %d/%d rows (field=%s, mode=%s) -> %s", counts["ok"], counts["total"], field, mode, args.output)
        return 0

    ap.error(f"Unknown command: {args.cmd}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
