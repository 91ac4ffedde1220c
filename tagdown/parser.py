"""Document structure extraction."""

from __future__ import annotations

import logging
from pathlib import Path

from .classifier import classify_line, match_header
from .config import ConfigError, TagdownConfig, validate_config
from .constants import LINE_BREAK_PATTERN
from .exceptions import LineTooLongError, NullCharacterError, ParseError
from .filesystem import safe_read
from .models import DocumentStructure, Header, LineKind, ParserContext, Tag, TagToken
from .scanner import scan_line

logger = logging.getLogger(__name__)


def split_lines(content: str) -> list[str]:
    r"""Split document text on ``\n`` or ``\r\n``.

    A trailing line break yields a final empty line, matching how editors
    count lines.

    Examples:
        split_lines("a\r\nb\n")  # ["a", "b", ""]
    """
    return LINE_BREAK_PATTERN.split(content)


def _leading_whitespace(line: str) -> int:
    return len(line) - len(line.lstrip())


def parse_document(content: str) -> DocumentStructure:
    """Extract tags, headers, horizontal rules and code blocks in one pass.

    Lines inside fenced code blocks are skipped entirely. Horizontal rules are
    recorded and not scanned further. Other lines are checked for a header and
    then scanned for tags, with inline code masked so that markup inside
    backticks is ignored.

    Malformed markup never raises: unmatched tags are recorded as they are
    and an unterminated fence simply runs to the end of the document.

    Args:
        content: Full document text.

    Returns:
        DocumentStructure: Immutable structural index of the document.

    Examples:
        structure = parse_document("<task>\\nDo it.\\n</task>")
        [tag.kind for tag in structure.tags]  # [TagKind.OPENING, TagKind.CLOSING]
    """
    lines = split_lines(content)
    tags: list[Tag] = []
    headers: list[Header] = []
    horizontal_rules: set[int] = set()
    code_blocks: list[tuple[int, int]] = []

    ctx = ParserContext()

    for line_number, line in enumerate(lines):
        opened_at = ctx.fence_line
        kind = classify_line(ctx, line, line_number)

        if kind is LineKind.FENCE_CLOSE:
            code_blocks.append((opened_at, line_number))
            continue

        if kind in (LineKind.FENCE_OPEN, LineKind.CODE):
            continue

        if kind is LineKind.HORIZONTAL_RULE:
            horizontal_rules.add(line_number)
            continue

        if kind is LineKind.HEADER:
            header = match_header(line, line_number)
            if header is not None:
                headers.append(header)

        indent = _leading_whitespace(line)
        for token in scan_line(line):
            if not isinstance(token, TagToken):
                continue
            tags.append(
                Tag(
                    name=token.name,
                    line=line_number,
                    indent=indent,
                    kind=token.kind,
                    attributes=token.attributes,
                    start_offset=token.start,
                    end_offset=token.end,
                )
            )

    if ctx.fence_line is not None:
        logger.debug("Fenced code block opened at line %d is never closed", ctx.fence_line + 1)

    logger.debug(
        "Parsed %d lines: %d tags, %d headers, %d horizontal rules",
        len(lines),
        len(tags),
        len(headers),
        len(horizontal_rules),
    )

    return DocumentStructure(
        tags=tuple(tags),
        headers=tuple(headers),
        horizontal_rules=frozenset(horizontal_rules),
        line_count=len(lines),
        code_blocks=tuple(code_blocks),
    )


class ParseFileError(Exception):
    """Raised when reading a document from disk fails."""


def check_document_lines(content: str, max_line_length: int) -> None:
    """Reject documents that cannot be parsed safely.

    Raises:
        LineTooLongError: If a line exceeds `max_line_length` characters,
            line endings excluded.
        NullCharacterError: If a line contains a NUL character.
    """
    for line_number, line in enumerate(split_lines(content), start=1):
        if len(line) > max_line_length:
            raise LineTooLongError(line_number, max_line_length, len(line))
        if "\x00" in line:
            raise NullCharacterError(line_number)


def read_document(
    filepath: Path,
    max_line_length: int | None = None,
    config: TagdownConfig | None = None,
) -> str:
    """Read a document from disk and enforce configured limits.

    Args:
        filepath: Path to the document.
        max_line_length: Optional override for the maximum allowed line length
            (excluding line endings).
        config: Configuration supplying defaults; a new `TagdownConfig` when
            omitted.

    Returns:
        str: The document text.

    Raises:
        ParseFileError: If configuration is invalid, the file cannot be read or
            decoded, or a line is too long or holds a NUL character.

    Examples:
        text = read_document(Path("CLAUDE.md"), 120)
    """
    config = config or TagdownConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )
    if effective_max_line_length <= 0:
        raise ParseFileError("`max_line_length` override must be a positive integer")

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except IOError as error:
        raise ParseFileError(str(error)) from error

    try:
        check_document_lines(content, effective_max_line_length)
    except LineTooLongError as error:
        error_message = (
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
        raise ParseFileError(error_message) from error
    except ParseError as error:
        raise ParseFileError(f"{filepath}: {error}") from error

    return content
