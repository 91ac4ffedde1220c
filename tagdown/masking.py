"""Reversible masking of inline code spans."""

from __future__ import annotations

import re

from .constants import CODE_PLACEHOLDER, CODE_PLACEHOLDER_PATTERN


def is_escaped(text: str, pos: int) -> bool:
    """Determine whether a character is escaped by preceding backslashes.

    Counts consecutive backslashes immediately before `pos`; an odd count marks
    the character as escaped.

    Args:
        text: Text containing the character.
        pos: Zero-based index of the character to inspect.

    Returns:
        bool: True when the character is escaped, otherwise False.

    Examples:
        is_escaped("\\\\`", 2)  # False, two backslashes
        is_escaped("\\`", 1)  # True, one backslash
    """
    backslash_count = 0
    i = pos - 1
    while i >= 0 and text[i] == "\\":
        backslash_count += 1
        i -= 1

    return backslash_count % 2 == 1


def _backtick_run(text: str, pos: int) -> int:
    end = pos
    while end < len(text) and text[end] == "`":
        end += 1
    return end - pos


def find_inline_code_spans(text: str) -> list[tuple[int, int]]:
    """Locate inline code spans delimited by equal-length backtick runs.

    A run of N backticks only closes on another run of exactly N, so a
    double-backtick span may contain single backticks. An opening run without
    a partner is literal text and scanning resumes right after it.

    Args:
        text: The text to scan for inline code spans.

    Returns:
        list[tuple[int, int]]: Start (inclusive) and end (exclusive) positions
            for each inline code span.

    Examples:
        find_inline_code_spans("`code`")  # [(0, 6)]
        find_inline_code_spans("``more`` text")  # [(0, 8)]
    """
    spans = []
    i = 0

    while i < len(text):
        if text[i] != "`" or is_escaped(text, i):
            i += 1
            continue

        start = i
        opening_length = _backtick_run(text, i)
        j = i + opening_length
        closed = False

        while j < len(text):
            if text[j] != "`":
                j += 1
                continue
            closing_length = _backtick_run(text, j)
            j += closing_length
            if closing_length == opening_length:
                spans.append((start, j))
                closed = True
                break

        i = j if closed else start + opening_length

    return spans


def mask_inline_code(line: str) -> tuple[str, list[str]]:
    """Replace inline code spans with opaque placeholders.

    Args:
        line: A single line of text.

    Returns:
        tuple[str, list[str]]: The masked line and the removed spans, indexed
            by placeholder number.

    Examples:
        mask_inline_code("use `<tag>` here")  # ("use \\x00CODE_0\\x00 here", ["`<tag>`"])
    """
    segments: list[str] = []
    parts = []
    offset = 0

    for start, end in find_inline_code_spans(line):
        parts.append(line[offset:start])
        parts.append(CODE_PLACEHOLDER.format(index=len(segments)))
        segments.append(line[start:end])
        offset = end

    if not segments:
        return line, segments

    parts.append(line[offset:])
    return "".join(parts), segments


def _segment_for(match: re.Match[str], segments: list[str]) -> str:
    index = int(match.group("index"))
    # Placeholder-like text already present in the line has no segment.
    return segments[index] if index < len(segments) else match.group(0)


def unmask_inline_code(line: str, segments: list[str]) -> str:
    """Restore spans removed by `mask_inline_code`.

    Examples:
        unmask_inline_code(*mask_inline_code("a `b` c"))  # "a `b` c"
    """
    if not segments:
        return line
    return CODE_PLACEHOLDER_PATTERN.sub(lambda match: _segment_for(match, segments), line)


def original_offset(masked_line: str, segments: list[str], pos: int) -> int:
    """Translate a position in a masked line back to the unmasked line.

    `pos` must not fall strictly inside a placeholder.
    """
    shift = 0
    for match in CODE_PLACEHOLDER_PATTERN.finditer(masked_line):
        if match.end() > pos:
            break
        shift += len(_segment_for(match, segments)) - (match.end() - match.start())
    return pos + shift
