import pytest

from jsonsift.errors import NoCandidateError
from jsonsift.parse.repair import STRUCTURED
from jsonsift.parse.scanner import ScanMode, ScanState, iter_brace_spans, scan_braces


def _slices(text):
    return [text[s:e] for s, e in iter_brace_spans(text)]


def test_spans_nested_and_sequential():
    text = 'x {"a": {"b": 1}} y {"c": 2}'
    assert _slices(text) == ['{"a": {"b": 1}}', '{"c": 2}']


def test_span_ranges_are_half_open():
    text = 'ab{"k": 1}cd'
    assert list(iter_brace_spans(text)) == [(2, 10)]


def test_brace_inside_string_not_counted():
    text = 'prefix {"note": "use { carefully"} suffix'
    assert _slices(text) == ['{"note": "use { carefully"}']


def test_escaped_quote_keeps_string_open():
    text = '{"q": "say \\"}\\" now"} tail'
    assert _slices(text) == ['{"q": "say \\"}\\" now"}']


def test_escaped_backslash_before_closing_quote():
    text = '{"p": "C:\\\\"} tail'
    assert _slices(text) == ['{"p": "C:\\\\"}']


def test_stray_closing_brace_ignored():
    assert _slices('} {"a": 1}') == ['{"a": 1}']


def test_unbalanced_yields_nothing():
    assert _slices('{"a": 1') == []
    assert _slices("no braces") == []


def test_spans_are_lazy():
    gen = iter_brace_spans('{"a": 1} {"b": 2}')
    assert next(gen) == (0, 8)


def test_scan_state_defaults():
    state = ScanState()
    assert state.depth == 0
    assert not state.active
    assert not state.mode.in_string
    assert ScanMode.STRING_ESCAPE.in_string and ScanMode.STRING_ESCAPE.pending_escape
    assert ScanMode.CODE_ESCAPE.pending_escape and not ScanMode.CODE_ESCAPE.in_string


def test_scan_skips_malformed_candidate(two_spans_first_bad):
    assert scan_braces(two_spans_first_bad, STRUCTURED) == {"ok": True}


def test_scan_brace_inside_string():
    text = 'Answer: {"note": "use { carefully"} done'
    assert scan_braces(text, STRUCTURED) == {"note": "use { carefully"}


def test_scan_stops_at_first_success():
    seen = []

    def record(candidate):
        seen.append(candidate)
        return candidate

    text = 'a {x} b {"ok": 1} c {"later": 2}'
    assert scan_braces(text, record) == {"ok": 1}
    assert seen == ["{x}", '{"ok": 1}']


def test_scan_applies_repairer_per_candidate():
    text = 'Output:\n{"items": [1, 2,],}\n'
    assert scan_braces(text, STRUCTURED) == {"items": [1, 2]}


def test_scan_nothing_found():
    with pytest.raises(NoCandidateError):
        scan_braces("nothing to see", STRUCTURED)
    with pytest.raises(NoCandidateError):
        scan_braces("{still: bad}", STRUCTURED)
