"""Shared dataclasses for text patch operations."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class TextPatchRuleResult:
    """Result of applying a single rule to a text buffer."""

    rule_name: str
    applied: bool  # False if the rule's anchor was not found
    text: str  # The buffer after the rule ran (unchanged if not applied)


@dataclass
class TextPatchResult:
    """Result of applying a list of rules to a text buffer."""

    text: str
    applied_rules: List[str] = field(default_factory=list)
    skipped_rules: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if every rule found its anchor."""
        return not self.skipped_rules

    @property
    def changed(self) -> bool:
        """True if at least one rule modified the buffer."""
        return bool(self.applied_rules)
