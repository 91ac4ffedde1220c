"""Data models for tagdown."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union


class ParserState(Enum):
    """Parser states used while scanning a document line by line.

    Attributes:
        NORMAL: Default state for regular text.
        IN_FENCED_CODE: Inside a fenced code block.
    """

    NORMAL = auto()
    IN_FENCED_CODE = auto()


class LineKind(Enum):
    """Classification of a single physical line.

    Attributes:
        FENCE_OPEN: Fence line that opens a code block.
        FENCE_CLOSE: Fence line that closes the active code block.
        CODE: Line inside a fenced code block.
        HORIZONTAL_RULE: Thematic break outside code.
        HEADER: Markdown ATX header outside code.
        CONTENT: Anything else, blank lines included.
    """

    FENCE_OPEN = auto()
    FENCE_CLOSE = auto()
    CODE = auto()
    HORIZONTAL_RULE = auto()
    HEADER = auto()
    CONTENT = auto()


class TagKind(Enum):
    """Shape of a tag occurrence."""

    OPENING = "opening"
    CLOSING = "closing"
    SELF_CLOSING = "self-closing"


class FoldKind(Enum):
    """Origin of a folding range."""

    TAG = "tag"
    HEADER = "header"
    CODE = "code"


@dataclass
class ParserContext:
    """Encapsulate code-block state while walking a document.

    Attributes:
        state: Current parser state.
        fence_char: Fence character that opened a fenced code block, if any.
        fence_length: Number of fence characters that opened the block.
        fence_line: Zero-based line of the opening fence, or None outside code.
    """

    state: ParserState = ParserState.NORMAL
    fence_char: str | None = None
    fence_length: int = 0
    fence_line: int | None = None


@dataclass(frozen=True)
class Text:
    """Plain text between tags on a scanned line.

    Offsets are zero-based character positions in the original line;
    `end` is exclusive.
    """

    value: str
    start: int
    end: int


@dataclass(frozen=True)
class TagToken:
    """A tag recognized on a scanned line.

    Attributes:
        kind: Opening, closing, or self-closing.
        name: Tag name as written.
        attributes: Attribute values in source order; later duplicates win.
            Compared for equality but left out of the hash.
        start: Offset of the ``<`` in the original line.
        end: Offset just past the ``>`` in the original line.
    """

    kind: TagKind
    name: str
    attributes: dict[str, str] = field(hash=False)
    start: int
    end: int


Token = Union[Text, TagToken]


@dataclass(frozen=True)
class Tag:
    """A tag occurrence recorded by the structure extractor.

    Attributes:
        name: Tag name as written.
        line: Zero-based line number.
        indent: Count of leading whitespace characters on the line.
        kind: Opening, closing, or self-closing.
        attributes: Attribute values in source order.
            Compared for equality but left out of the hash.
        start_offset: Offset of the ``<`` within the line.
        end_offset: Offset just past the ``>`` within the line.
    """

    name: str
    line: int
    indent: int
    kind: TagKind
    attributes: dict[str, str] = field(default_factory=dict, hash=False)
    start_offset: int = 0
    end_offset: int = 0

    @property
    def is_opening(self) -> bool:
        return self.kind is TagKind.OPENING

    @property
    def is_closing(self) -> bool:
        return self.kind is TagKind.CLOSING

    @property
    def is_self_closing(self) -> bool:
        return self.kind is TagKind.SELF_CLOSING


@dataclass(frozen=True)
class Header:
    """A Markdown header found outside code blocks."""

    level: int
    line: int
    text: str


@dataclass(frozen=True)
class DocumentStructure:
    """Structural index of one document snapshot.

    Attributes:
        tags: Tag occurrences in document order.
        headers: Headers in document order.
        horizontal_rules: Line numbers of horizontal rules.
        line_count: Number of physical lines in the document.
        code_blocks: Closed fenced code blocks as (open, close) line pairs.
    """

    tags: tuple[Tag, ...] = ()
    headers: tuple[Header, ...] = ()
    horizontal_rules: frozenset[int] = frozenset()
    line_count: int = 0
    code_blocks: tuple[tuple[int, int], ...] = ()


@dataclass(frozen=True)
class FoldingRange:
    """An inclusive line range an editor can collapse."""

    start: int
    end: int
    kind: FoldKind


@dataclass
class TagNesting:
    """Per-line results of the tag depth resolver.

    Attributes:
        depths: Line number to nesting depth for opening/self-closing tags.
        header_tags: Line number to the tag rendered as that line's header.
        section_ends: Lines carrying a closing tag.
    """

    depths: dict[int, int] = field(default_factory=dict)
    header_tags: dict[int, Tag] = field(default_factory=dict)
    section_ends: set[int] = field(default_factory=set)
