"""Line classification and fenced code block tracking."""

from __future__ import annotations

from .constants import CODE_FENCE_PATTERN, HEADER_PATTERN, HORIZONTAL_RULE_PATTERN
from .models import Header, LineKind, ParserContext, ParserState


def _try_open_fence(ctx: ParserContext, line: str, line_number: int | None = None) -> bool:
    """Detect the start of a fenced code block.

    Any amount of leading whitespace is accepted so that fences nested inside
    indented tag bodies stay recognizable.

    Args:
        ctx: Parser context to update when a fence opens.
        line: Current line being scanned.
        line_number: Zero-based line number, remembered for folding.

    Returns:
        bool: True when the line begins a fence and the context is updated.

    Examples:
        _try_open_fence(ParserContext(), "```python")  # True
    """
    if ctx.state is not ParserState.NORMAL:
        return False

    fence_match = CODE_FENCE_PATTERN.match(line)
    if not fence_match:
        return False

    fence_sequence = fence_match.group("fence")
    ctx.state = ParserState.IN_FENCED_CODE
    ctx.fence_char = fence_sequence[0]
    ctx.fence_length = len(fence_sequence)
    ctx.fence_line = line_number
    return True


def _try_close_fence(ctx: ParserContext, line: str) -> bool:
    """Attempt to close the active fenced code block.

    A closing fence must use the opening fence character, be at least as long
    as the opening run, and carry nothing but whitespace after the run.

    Args:
        ctx: Parser context describing the active fence.
        line: Current line being scanned.

    Returns:
        bool: True when the line closes the fence; otherwise False.

    Examples:
        ctx = ParserContext(state=ParserState.IN_FENCED_CODE, fence_char="`", fence_length=3)
        _try_close_fence(ctx, "```")  # True
    """
    if ctx.state is not ParserState.IN_FENCED_CODE or ctx.fence_char is None:
        return False

    stripped_line = line.lstrip()
    if not stripped_line or stripped_line[0] != ctx.fence_char:
        return False

    fence_run_length = len(stripped_line) - len(stripped_line.lstrip(ctx.fence_char))
    if fence_run_length < ctx.fence_length:
        return False

    if stripped_line[fence_run_length:].strip():
        return False

    ctx.state = ParserState.NORMAL
    ctx.fence_char = None
    ctx.fence_length = 0
    ctx.fence_line = None
    return True


def is_horizontal_rule(line: str) -> bool:
    """Check for three or more identical ``-``, ``*`` or ``_`` characters.

    Examples:
        is_horizontal_rule("---")  # True
        is_horizontal_rule("- - -")  # True
        is_horizontal_rule("--")  # False
        is_horizontal_rule("-*-")  # False
    """
    return HORIZONTAL_RULE_PATTERN.match(line) is not None


def match_header(line: str, line_number: int) -> Header | None:
    """Build a `Header` when the line is an ATX header.

    Examples:
        match_header("## Setup  ", 4)  # Header(level=2, line=4, text="Setup")
    """
    header_match = HEADER_PATTERN.match(line)
    if not header_match:
        return None
    return Header(
        level=len(header_match.group("marks")),
        line=line_number,
        text=header_match.group("text"),
    )


def classify_line(ctx: ParserContext, line: str, line_number: int | None = None) -> LineKind:
    """Classify one line and advance the code block state.

    Must be called for every line in order; the context carries the fence
    state from one call to the next.

    Args:
        ctx: Parser context shared across the whole document.
        line: Line text without its line ending.
        line_number: Zero-based line number.

    Returns:
        LineKind: How the line should be treated.
    """
    if ctx.state is ParserState.IN_FENCED_CODE:
        if _try_close_fence(ctx, line):
            return LineKind.FENCE_CLOSE
        return LineKind.CODE

    if _try_open_fence(ctx, line, line_number):
        return LineKind.FENCE_OPEN

    if is_horizontal_rule(line):
        return LineKind.HORIZONTAL_RULE

    if HEADER_PATTERN.match(line):
        return LineKind.HEADER

    return LineKind.CONTENT
