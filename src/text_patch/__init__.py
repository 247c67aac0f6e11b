"""
Anchor-based text insertion.

This package applies ordered lists of (anchor, insertion policy) rules to
plain text buffers without parsing them.
"""

from text_patch.text_patch_applier import TextPatchApplier
from text_patch.text_patch_exceptions import TextPatchAnchorError, TextPatchError
from text_patch.text_patch_rule import (
    InsertAfterLineRule,
    InsertBeforeClosingRule,
    TextPatchRule,
    insert_after_line,
    insert_before_closing,
)
from text_patch.text_patch_types import TextPatchResult, TextPatchRuleResult

__all__ = [
    # Exceptions
    'TextPatchError',
    'TextPatchAnchorError',
    # Types
    'TextPatchRuleResult',
    'TextPatchResult',
    # Rules
    'TextPatchRule',
    'InsertAfterLineRule',
    'InsertBeforeClosingRule',
    'insert_after_line',
    'insert_before_closing',
    # Core classes
    'TextPatchApplier',
]
