"""Tag scanning for single lines of tagged Markdown."""

from __future__ import annotations

from .constants import (
    ATTRIBUTE_PATTERN,
    CLOSING_TAG_PATTERN,
    OPENING_TAG_PATTERN,
    SELF_CLOSING_TAG_PATTERN,
    STRAY_TAG_PATTERN,
)
from .masking import mask_inline_code, original_offset, unmask_inline_code
from .models import TagKind, TagToken, Text, Token

# Order matters: a self-closing tag would otherwise also read as an opening tag.
_TAG_MATCHERS = (
    (TagKind.CLOSING, CLOSING_TAG_PATTERN),
    (TagKind.SELF_CLOSING, SELF_CLOSING_TAG_PATTERN),
    (TagKind.OPENING, OPENING_TAG_PATTERN),
)


def parse_attributes(region: str | None) -> dict[str, str]:
    """Parse ``name="value"``, ``name='value'`` and ``name=value`` pairs.

    Tokens that do not match (unterminated quotes, stray ``=``) are skipped.
    A repeated name keeps its first position but takes the last value.

    Args:
        region: Text between the tag name and the closing bracket.

    Returns:
        dict[str, str]: Attribute values in source order.

    Examples:
        parse_attributes(' a="1" b=two')  # {"a": "1", "b": "two"}
    """
    attributes: dict[str, str] = {}
    if not region:
        return attributes

    for match in ATTRIBUTE_PATTERN.finditer(region):
        value = next(
            (
                group
                for group in (match.group("double"), match.group("single"), match.group("bare"))
                if group is not None
            ),
            "",
        )
        attributes[match.group("name")] = value
    return attributes


def _match_tag(text: str, pos: int) -> TagToken | None:
    for kind, pattern in _TAG_MATCHERS:
        match = pattern.match(text, pos)
        if match is None:
            continue
        attributes = {} if kind is TagKind.CLOSING else parse_attributes(match.group("attrs"))
        return TagToken(
            kind=kind,
            name=match.group("name"),
            attributes=attributes,
            start=match.start(),
            end=match.end(),
        )
    return None


def scan_tokens(text: str) -> list[Token]:
    """Split text into plain `Text` runs and `TagToken` entries.

    Positions refer to `text` as given. Callers that need inline code left
    alone should use `scan_line` instead.

    Examples:
        scan_tokens("<a>hi</a>")
        # [TagToken(OPENING, "a", ...), Text("hi", 3, 5), TagToken(CLOSING, "a", ...)]
    """
    tokens: list[Token] = []
    text_start = 0
    pos = text.find("<")

    while pos != -1:
        token = _match_tag(text, pos)
        if token is None:
            pos = text.find("<", pos + 1)
            continue
        if pos > text_start:
            tokens.append(Text(text[text_start:pos], text_start, pos))
        tokens.append(token)
        text_start = token.end
        pos = text.find("<", text_start)

    if text_start < len(text):
        tokens.append(Text(text[text_start:], text_start, len(text)))
    return tokens


def scan_line(line: str) -> list[Token]:
    """Tokenize a line without looking inside inline code spans.

    Inline code is masked before scanning, so ``<tag>`` written inside
    backticks stays text. Returned text and attribute values are unmasked and
    offsets refer to the original line.

    Args:
        line: A single line outside fenced code.

    Returns:
        list[Token]: Tokens in positional order.
    """
    masked, segments = mask_inline_code(line)
    tokens = scan_tokens(masked)
    if not segments:
        return tokens

    restored: list[Token] = []
    for token in tokens:
        start = original_offset(masked, segments, token.start)
        end = original_offset(masked, segments, token.end)
        if isinstance(token, Text):
            restored.append(Text(line[start:end], start, end))
            continue
        attributes = {
            name: unmask_inline_code(value, segments) for name, value in token.attributes.items()
        }
        restored.append(
            TagToken(
                kind=token.kind,
                name=token.name,
                attributes=attributes,
                start=start,
                end=end,
            )
        )
    return restored


def strip_tags(line: str) -> str:
    """Remove tag-like markup from a line, leaving inline code untouched.

    Examples:
        strip_tags("see <b>this</b> and `<kbd>`")  # "see this and `<kbd>`"
    """
    masked, segments = mask_inline_code(line)
    stripped = STRAY_TAG_PATTERN.sub("", masked)
    return unmask_inline_code(stripped, segments)
