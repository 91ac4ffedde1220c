"""Folding ranges for editor integrations."""

from __future__ import annotations

from .models import DocumentStructure, FoldingRange, FoldKind
from .nesting import match_tag_ranges, resolve_header_ranges
from .parser import parse_document


def folding_ranges(structure: DocumentStructure) -> list[FoldingRange]:
    """Collect tag, header-outline and code-block folding ranges.

    Every range is inclusive and spans at least two lines. Unclosed tags and
    unterminated code blocks produce no range.

    Args:
        structure: Output of `parse_document`.

    Returns:
        list[FoldingRange]: Tag ranges, then header ranges, then code blocks.
    """
    ranges = [FoldingRange(start, end, FoldKind.TAG) for start, end in match_tag_ranges(structure.tags)]
    ranges.extend(
        FoldingRange(start, end, FoldKind.HEADER)
        for start, end in resolve_header_ranges(structure.headers, structure.line_count - 1)
    )
    ranges.extend(
        FoldingRange(start, end, FoldKind.CODE)
        for start, end in structure.code_blocks
        if end > start
    )
    return ranges


def compute_folding_ranges(content: str) -> list[FoldingRange]:
    """Parse `content` and return its folding ranges.

    Examples:
        compute_folding_ranges("<a>\\nbody\\n</a>")
        # [FoldingRange(start=0, end=2, kind=FoldKind.TAG)]
    """
    return folding_ranges(parse_document(content))
