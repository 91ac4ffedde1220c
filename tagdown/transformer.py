"""Conversion of tagged Markdown into standard Markdown."""

from __future__ import annotations

import logging

from .classifier import classify_line
from .config import TagdownConfig, normalize_config, validate_config
from .models import LineKind, ParserContext, Tag
from .nesting import resolve_tag_depths
from .parser import parse_document, split_lines
from .scanner import strip_tags

logger = logging.getLogger(__name__)

_CODE_LINES = (LineKind.FENCE_OPEN, LineKind.FENCE_CLOSE, LineKind.CODE)


def escape_underscores(text: str) -> str:
    """Escape underscores so Markdown does not read them as emphasis."""
    return text.replace("_", "\\_")


def header_level(depth: int, config: TagdownConfig | None = None) -> int:
    """Map a nesting depth to a Markdown header level.

    Level 1 is left to the document's own title, so top-level tags start at
    `base_header_level` (2 by default) and deeper tags are clamped at
    `max_header_level`.

    Examples:
        header_level(0)  # 2
        header_level(7)  # 6
    """
    config = config or TagdownConfig()
    return min(depth + config.base_header_level, config.max_header_level)


def render_tag_header(tag: Tag, depth: int, config: TagdownConfig | None = None) -> str:
    """Render a tag as a Markdown header line.

    Attributes follow the name in parentheses, in source order.

    Examples:
        render_tag_header(Tag("task_list", 0, 0, TagKind.OPENING, {"priority": "high"}), 0)
        # '## task\\_list (priority="high")'
    """
    config = config or TagdownConfig()

    def _name(value: str) -> str:
        return escape_underscores(value) if config.escape_underscores else value

    header = f"{'#' * header_level(depth, config)} {_name(tag.name)}"
    if tag.attributes:
        rendered = ", ".join(f'{_name(key)}="{value}"' for key, value in tag.attributes.items())
        header += f" ({rendered})"
    return header


def convert_to_markdown(content: str, config: TagdownConfig | None = None) -> str:
    """Convert a tagged document into standard Markdown.

    - Fenced code blocks, fences included, are copied verbatim.
    - Lines carrying a closing tag become blank lines.
    - Lines carrying an opening or self-closing tag become a header whose
      level follows the tag's nesting depth, followed by a blank line and by
      whatever text trailed the tag on that line.
    - Other lines lose any tag-like markup outside inline code. A line that
      held only markup disappears; a genuinely blank line is kept.

    Args:
        content: Full document text with ``\\n`` or ``\\r\\n`` line endings.
        config: Conversion settings; defaults to a new `TagdownConfig`.

    Returns:
        str: Markdown text joined with ``\\n``.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        convert_to_markdown('<task priority="high">\\nDo the thing.\\n</task>')
        # '## task (priority="high")\\n\\nDo the thing.\\n'
    """
    config = normalize_config(config or TagdownConfig())
    validate_config(config)

    structure = parse_document(content)
    nesting = resolve_tag_depths(structure)

    result: list[str] = []
    ctx = ParserContext()

    for line_number, line in enumerate(split_lines(content)):
        kind = classify_line(ctx, line, line_number)

        if kind in _CODE_LINES or kind is LineKind.HORIZONTAL_RULE:
            result.append(line)
            continue

        if line_number in nesting.section_ends:
            result.append("")
            continue

        tag = nesting.header_tags.get(line_number)
        if tag is not None:
            result.append(render_tag_header(tag, nesting.depths[line_number], config))
            result.append("")
            trailing = strip_tags(line[tag.end_offset :]).strip()
            if trailing:
                result.append(trailing)
            continue

        stripped = strip_tags(line)
        if stripped.strip() or not line.strip():
            result.append(stripped)

    logger.debug(
        "Converted %d tag headers and %d section ends",
        len(nesting.header_tags),
        len(nesting.section_ends),
    )
    return "\n".join(result)
