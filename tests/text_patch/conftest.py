"""Shared fixtures for text patch tests."""

import pytest

from text_patch.text_patch_rule import InsertAfterLineRule, InsertBeforeClosingRule


SAMPLE_TEXT = (
    "const a = 1;\n"
    "const b = 2;\n"
    "const options = {\n"
    "    first: true\n"
    "    }\n"
    "const c = 3;\n"
)


@pytest.fixture
def sample_text():
    """A small buffer with a line anchor and an object literal."""
    return SAMPLE_TEXT


@pytest.fixture
def after_b_rule():
    """Rule inserting a single line after 'const b'."""
    return InsertAfterLineRule('after b', 'const b = 2;', 'const inserted = true;\n')


@pytest.fixture
def options_rule():
    """Rule inserting a property before the options literal closes."""
    return InsertBeforeClosingRule('options', 'const options = {', '\n    second: false')


@pytest.fixture
def missing_rule():
    """Rule whose anchor never appears in the sample text."""
    return InsertAfterLineRule('missing', 'not in the buffer', 'never inserted\n')
