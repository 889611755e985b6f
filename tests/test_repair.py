import json

import pytest

from jsonsift.errors import ConfigError
from jsonsift.parse.repair import LIGHT, LIGHT_RULES, RULES, STRUCTURED, STRUCTURED_RULES, Repairer


def test_profiles_rule_order():
    assert LIGHT.rule_names == LIGHT_RULES
    assert STRUCTURED.rule_names == STRUCTURED_RULES
    assert STRUCTURED.rule_names.index("blockquotes") < STRUCTURED.rule_names.index("trailing_commas")


def test_light_trailing_commas_and_bare_keys():
    out = LIGHT("{a: 1, b: [1, 2,], }")
    assert json.loads(out) == {"a": 1, "b": [1, 2]}


def test_light_single_quoted_values():
    assert LIGHT("{name: 'Ada'}") == '{"name":"Ada"}'


def test_light_leaves_quoted_keys_alone():
    assert LIGHT('{"a": 1}') == '{"a": 1}'


def test_structured_block_scalar_marker():
    out = STRUCTURED('{"summary": >\n  "hello"\n}')
    assert json.loads(out) == {"summary": "hello"}


def test_structured_yaml_pipe():
    out = STRUCTURED('{\n  "title": "T",\n  "body": |\n    "multi"\n}')
    assert json.loads(out) == {"title": "T", "body": "multi"}


def test_structured_blockquotes():
    out = STRUCTURED('> {"a": 1,\n> "b": 2}')
    assert json.loads(out) == {"a": 1, "b": 2}


def test_structured_blank_lines_and_padding():
    out = STRUCTURED('{"a": "  padded  ",\n\n\n"b": [1,]}')
    assert json.loads(out) == {"a": "padded", "b": [1]}


def test_structured_keeps_compact_json():
    clean = '{"a":[1,2],"b":{"c":"d"},"e":null}'
    assert STRUCTURED(clean) == clean
    assert STRUCTURED(STRUCTURED(clean)) == clean


def test_structured_is_stable_after_one_pass():
    once = STRUCTURED('{"a": "b", "c": [1, 2,],\n\n"d": "  e  "}')
    assert STRUCTURED(once) == once
    assert json.loads(once) == {"a": "b", "c": [1, 2], "d": "e"}


def test_custom_repairer_from_names():
    r = Repairer.from_names(["trailing_commas"], name="commas")
    assert r("[1,]") == "[1]"
    assert r("{a: 1}") == "{a: 1}"
    assert "commas" in repr(r)


def test_unknown_rule_name():
    with pytest.raises(ConfigError):
        Repairer.from_names(["trailing_commas", "nope"])


def test_empty_repairer_is_identity():
    assert Repairer([])("{x,}") == "{x,}"


def test_rule_registry_names_match_keys():
    for name, rule in RULES.items():
        assert rule.name == name


def test_structured_keeps_spaced_json():
    clean = '{"a": "b", "c": 1}'
    assert STRUCTURED(clean) == clean


def test_structured_keeps_indented_json():
    clean = json.dumps({"a": "b", "c": [1, 2], "d": {"e": None, "f": ""}}, indent=2)
    assert STRUCTURED(clean) == clean
    assert STRUCTURED(STRUCTURED(clean)) == clean


def test_structured_trims_before_closing_quote_only():
    assert STRUCTURED('{"a": "x  ", "b": "y"}') == '{"a": "x", "b": "y"}'
