"""
Pytest configuration and shared fixtures for jsonsift tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def fenced_trailing_comma():
    return "Here is the result:\n```json\n{\"a\": 1, }\n```"


@pytest.fixture
def two_spans_first_bad():
    return 'Result: {bad: } and then {"ok": true}'


@pytest.fixture
def write_text(tmp_path):
    def _write(name, content):
        p = tmp_path / name
        p.write_text(content, encoding="utf-8")
        return p

    return _write
