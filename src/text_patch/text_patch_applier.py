"""Apply an ordered list of insertion rules to a text buffer."""

import logging
from typing import List

from text_patch.text_patch_exceptions import TextPatchAnchorError
from text_patch.text_patch_rule import TextPatchRule
from text_patch.text_patch_types import TextPatchResult


class TextPatchApplier:
    """Applies rules in sequence, each one seeing the output of the previous."""

    def __init__(self, strict: bool = False):
        """
        Initialize the applier.

        Args:
            strict: If True, a rule whose anchor is missing raises instead of being skipped
        """
        self._strict = strict
        self._logger = logging.getLogger("TextPatchApplier")

    def apply(self, text: str, rules: List[TextPatchRule]) -> TextPatchResult:
        """
        Apply rules to a buffer.

        The input string is never modified; a new buffer is returned in the result.

        Args:
            text: Buffer to patch
            rules: Rules to apply, in order

        Returns:
            TextPatchResult with the patched buffer and per-rule outcome

        Raises:
            TextPatchAnchorError: In strict mode, if any rule's anchor is missing
        """
        result = TextPatchResult(text=text)

        for idx, rule in enumerate(rules):
            rule_result = rule.apply(result.text)
            if rule_result.applied:
                self._logger.debug("Applied rule '%s'", rule.name)
                result.text = rule_result.text
                result.applied_rules.append(rule.name)
                continue

            self._logger.warning("Anchor not found for rule '%s': %s", rule.name, rule.describe_anchor())
            if self._strict:
                error_details = {
                    'phase': 'matching',
                    'rule': rule.name,
                    'rule_index': idx + 1,
                    'total_rules': len(rules),
                    'anchor': rule.describe_anchor(),
                    'reason': 'Anchor text not found in buffer',
                    'suggestion': 'The target file may have changed. Check the anchor against its current content.'
                }
                raise TextPatchAnchorError(f"Could not locate anchor for rule '{rule.name}'", error_details)

            result.skipped_rules.append(rule.name)

        return result
