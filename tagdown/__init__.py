"""
tagdown: structure-aware tools for Markdown written with custom tags.

Documents mix Markdown with lightweight angle-bracket tags such as
``<task priority="high">``. This package can be used both as a CLI tool and as
a library.

CLI Usage:
    tagdown convert CLAUDE.md
    tagdown beautify CLAUDE.md --in-place

Library Usage:
    from pathlib import Path
    from tagdown import convert_to_markdown, compute_folding_ranges

    content = Path("CLAUDE.md").read_text()
    markdown = convert_to_markdown(content)
    folds = compute_folding_ranges(content)
"""

from .beautifier import beautify
from .config import ConfigError, TagdownConfig
from .exceptions import LineTooLongError, NullCharacterError, ParseError
from .folding import compute_folding_ranges, folding_ranges
from .masking import mask_inline_code, unmask_inline_code
from .models import DocumentStructure, FoldingRange, FoldKind, Header, Tag, TagKind
from .nesting import match_tag_ranges, resolve_header_ranges, resolve_tag_depths
from .parser import parse_document
from .scanner import scan_line, strip_tags
from .transformer import convert_to_markdown

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse_document",
    "convert_to_markdown",
    "beautify",
    "compute_folding_ranges",
    "folding_ranges",
    # Nesting
    "resolve_tag_depths",
    "match_tag_ranges",
    "resolve_header_ranges",
    # Data models
    "DocumentStructure",
    "FoldingRange",
    "FoldKind",
    "Header",
    "Tag",
    "TagKind",
    "TagdownConfig",
    # Utilities
    "mask_inline_code",
    "unmask_inline_code",
    "scan_line",
    "strip_tags",
    # Exceptions
    "ConfigError",
    "LineTooLongError",
    "NullCharacterError",
    "ParseError",
    # Version
    "__version__",
]
