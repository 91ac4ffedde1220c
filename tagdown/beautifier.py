"""Indentation of tagged documents by tag nesting."""

from __future__ import annotations

import logging

from .classifier import classify_line
from .config import TagdownConfig, normalize_config, validate_config
from .constants import (
    BEAUTIFIER_HEADER_PATTERN,
    PURE_CLOSING_TAG_PATTERN,
    PURE_OPENING_TAG_PATTERN,
    PURE_SELF_CLOSING_TAG_PATTERN,
)
from .models import LineKind, ParserContext
from .parser import split_lines

logger = logging.getLogger(__name__)


def beautify(content: str, config: TagdownConfig | None = None) -> str:
    """Re-indent a document so that tag bodies are indented by nesting depth.

    Works line by line with its own depth counter, independent of the
    structure extractor:

    - fence lines are indented at the current depth; lines inside a fenced
      block are kept byte for byte;
    - a line holding only a closing tag lowers the depth, then is indented;
    - a line holding only a self-closing tag is indented at the current depth;
    - a line holding only an opening tag is indented, then raises the depth;
    - headers are never indented and blank lines stay empty;
    - anything else is trimmed and indented at the current depth.

    Running it on its own output changes nothing.

    Args:
        content: Full document text.
        config: Formatting settings; `indent_unit` is repeated once per level.

    Returns:
        str: The re-indented document joined with ``\\n``.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        beautify("<a>\\ntext\\n</a>")  # "<a>\\n  text\\n</a>"
    """
    config = normalize_config(config or TagdownConfig())
    validate_config(config)
    unit = config.indent_unit

    result: list[str] = []
    depth = 0
    ctx = ParserContext()

    for line_number, line in enumerate(split_lines(content)):
        kind = classify_line(ctx, line, line_number)

        if kind is LineKind.CODE:
            result.append(line)
            continue

        if kind in (LineKind.FENCE_OPEN, LineKind.FENCE_CLOSE):
            result.append(unit * depth + line.strip())
            continue

        if PURE_CLOSING_TAG_PATTERN.match(line):
            depth = max(0, depth - 1)
            result.append(unit * depth + line.strip())
            continue

        if PURE_SELF_CLOSING_TAG_PATTERN.match(line):
            result.append(unit * depth + line.strip())
            continue

        if PURE_OPENING_TAG_PATTERN.match(line):
            result.append(unit * depth + line.strip())
            depth += 1
            continue

        if BEAUTIFIER_HEADER_PATTERN.match(line.strip()):
            result.append(line.strip())
            continue

        if not line.strip():
            result.append("")
            continue

        result.append(unit * depth + line.strip())

    if depth:
        logger.debug("Document ends with %d unclosed tag level(s)", depth)

    return "\n".join(result)


def is_beautified(content: str, config: TagdownConfig | None = None) -> bool:
    """Check whether `content` is already in beautified form."""
    return beautify(content, config) == content
