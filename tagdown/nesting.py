"""Nesting resolution for tags and Markdown headers."""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Iterable

from .models import DocumentStructure, Header, Tag, TagNesting

logger = logging.getLogger(__name__)


def _pop_matching(stack: list[tuple[str, int]], name: str) -> tuple[str, int] | None:
    """Remove and return the innermost stack entry named `name`.

    Entries above the match stay on the stack, so interleaved tags such as
    ``<a><b></a></b>`` still pair up by name.
    """
    for index in range(len(stack) - 1, -1, -1):
        if stack[index][0] == name:
            return stack.pop(index)
    return None


def _rule_between(sorted_rules: list[int], after: int, before: int) -> bool:
    """Check for a rule strictly between two lines in a sorted rule list."""
    index = bisect_right(sorted_rules, after)
    return index < len(sorted_rules) and sorted_rules[index] < before


def resolve_tag_depths(structure: DocumentStructure) -> TagNesting:
    """Assign a nesting depth to every opening and self-closing tag.

    Walks the tags in document order with a name-matched stack. A horizontal
    rule between the innermost open tag (or the top of the document) and the
    next tag closes every open section and resets the depth to zero.

    A closing tag lowers the depth by exactly one whenever it matches any open
    entry, however deep that entry sits. On interleaved markup this can differ
    from the true structural depth; existing documents rely on it, so it is
    kept as is. Closing tags without a matching opening tag change nothing.

    When a line carries several tags, the first opening or self-closing tag
    decides the line's depth and header.

    Args:
        structure: Output of `parse_document`.

    Returns:
        TagNesting: Depth and header tag per line, plus closing-tag lines.

    Examples:
        nesting = resolve_tag_depths(parse_document("<a>\\n<b/>\\n</a>"))
        nesting.depths  # {0: 0, 1: 1}
    """
    nesting = TagNesting()
    stack: list[tuple[str, int]] = []
    current_depth = 0
    rules = sorted(structure.horizontal_rules)

    for tag in structure.tags:
        top_line = stack[-1][1] if stack else 0
        if _rule_between(rules, top_line, tag.line):
            current_depth = 0
            stack.clear()

        if tag.is_opening:
            nesting.depths.setdefault(tag.line, current_depth)
            nesting.header_tags.setdefault(tag.line, tag)
            stack.append((tag.name, tag.line))
            current_depth += 1
        elif tag.is_closing:
            nesting.section_ends.add(tag.line)
            if _pop_matching(stack, tag.name) is None:
                logger.debug("Ignoring unmatched closing tag </%s> on line %d", tag.name, tag.line + 1)
                continue
            current_depth = max(0, current_depth - 1)
        else:
            nesting.depths.setdefault(tag.line, current_depth)
            nesting.header_tags.setdefault(tag.line, tag)

    return nesting


def match_tag_ranges(tags: Iterable[Tag]) -> list[tuple[int, int]]:
    """Pair opening and closing tags by name into inclusive line ranges.

    Horizontal rules are ignored here. Pairs that open and close on the same
    line are dropped since there is nothing to fold.

    Examples:
        match_tag_ranges(parse_document("<a>\\nx\\n</a>").tags)  # [(0, 2)]
    """
    ranges: list[tuple[int, int]] = []
    stack: list[tuple[str, int]] = []

    for tag in tags:
        if tag.is_opening:
            stack.append((tag.name, tag.line))
        elif tag.is_closing:
            matched = _pop_matching(stack, tag.name)
            if matched is not None and tag.line > matched[1]:
                ranges.append((matched[1], tag.line))

    return ranges


def resolve_header_ranges(headers: Iterable[Header], last_line: int) -> list[tuple[int, int]]:
    """Compute outline sections for Markdown headers.

    A header ends every open section of the same or a deeper level; sections
    still open after the last header run to `last_line`. Sections that would
    span a single line are dropped.

    Args:
        headers: Headers in any order.
        last_line: Zero-based index of the document's final line.

    Returns:
        list[tuple[int, int]]: Inclusive (start, end) line pairs.

    Examples:
        resolve_header_ranges([Header(2, 0, "A"), Header(2, 3, "B")], 5)
        # [(0, 2), (3, 5)]
    """
    ranges: list[tuple[int, int]] = []
    stack: list[tuple[int, int]] = []

    for header in sorted(headers, key=lambda item: item.line):
        while stack and stack[-1][0] >= header.level:
            _, start = stack.pop()
            end = header.line - 1
            if end > start:
                ranges.append((start, end))
        stack.append((header.level, header.line))

    while stack:
        _, start = stack.pop()
        if last_line > start:
            ranges.append((start, last_line))

    return ranges
