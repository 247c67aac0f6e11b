"""Anchor-based insertion rules."""

from abc import ABC, abstractmethod

from text_patch.text_patch_types import TextPatchRuleResult


def insert_after_line(text: str, anchor: str, block: str) -> str:
    """
    Insert a block of text immediately after the line containing an anchor.

    Only the first occurrence of the anchor is considered.  If the anchor is
    absent, or its line has no terminating newline, the text is returned
    unchanged.

    Args:
        text: Text to search
        anchor: Substring identifying the line to insert after
        block: Text to insert

    Returns:
        New text with the block spliced in after the anchor's line
    """
    return InsertAfterLineRule('insert_after_line', anchor, block).apply(text).text


def insert_before_closing(text: str, opening_anchor: str, closing_marker: str, block: str) -> str:
    """
    Insert a block of text immediately before the first closing marker that follows an opening anchor.

    Args:
        text: Text to search
        opening_anchor: Substring that opens the region (e.g. an object literal)
        closing_marker: Substring that closes the region
        block: Text to insert

    Returns:
        New text with the block spliced in, or the original text if either marker is missing
    """
    rule = InsertBeforeClosingRule('insert_before_closing', opening_anchor, block, closing_marker)
    return rule.apply(text).text


class TextPatchRule(ABC):
    """Abstract base class for a single (anchor, insertion policy) rule."""

    def __init__(self, name: str, block: str):
        """
        Initialize the rule.

        Args:
            name: Human readable rule name, used in reports and errors
            block: Text this rule inserts
        """
        self.name = name
        self.block = block

    @abstractmethod
    def find_insertion_point(self, text: str) -> int:
        """
        Locate where the block should be inserted.

        Args:
            text: Buffer to search

        Returns:
            Character offset to insert at, or -1 if the anchor is missing
        """

    def describe_anchor(self) -> str:
        """Describe what this rule searches for."""
        return self.name

    def apply(self, text: str) -> TextPatchRuleResult:
        """
        Apply this rule to a buffer.

        Args:
            text: Buffer to patch

        Returns:
            TextPatchRuleResult with the new buffer
        """
        pos = self.find_insertion_point(text)
        if pos == -1:
            return TextPatchRuleResult(rule_name=self.name, applied=False, text=text)

        return TextPatchRuleResult(
            rule_name=self.name,
            applied=True,
            text=text[:pos] + self.block + text[pos:]
        )


class InsertAfterLineRule(TextPatchRule):
    """Insert a block immediately after the first line containing an anchor."""

    def __init__(self, name: str, anchor: str, block: str):
        super().__init__(name, block)
        self.anchor = anchor

    def find_insertion_point(self, text: str) -> int:
        pos = text.find(self.anchor)
        if pos == -1:
            return -1

        end_of_line = text.find('\n', pos)
        if end_of_line == -1:
            return -1

        return end_of_line + 1

    def describe_anchor(self) -> str:
        return repr(self.anchor)


class InsertBeforeClosingRule(TextPatchRule):
    """Insert a block just before the first closing marker after an opening anchor."""

    def __init__(self, name: str, opening_anchor: str, block: str, closing_marker: str = '\n    }'):
        super().__init__(name, block)
        self.opening_anchor = opening_anchor
        self.closing_marker = closing_marker

    def find_insertion_point(self, text: str) -> int:
        open_pos = text.find(self.opening_anchor)
        if open_pos == -1:
            return -1

        return text.find(self.closing_marker, open_pos)

    def describe_anchor(self) -> str:
        return f"{self.opening_anchor!r} ... {self.closing_marker!r}"
