"""Constants used across the tagdown package."""

from __future__ import annotations

import re

from .config import TagdownConfig

DEFAULT_CONFIG = TagdownConfig()

# Structural markup
TAG_NAME = r"[A-Za-z_][A-Za-z0-9_-]*"
OPENING_TAG_PATTERN = re.compile(rf"<(?P<name>{TAG_NAME})(?P<attrs>\s+[^>]*)?\s*>")
CLOSING_TAG_PATTERN = re.compile(rf"</(?P<name>{TAG_NAME})>")
SELF_CLOSING_TAG_PATTERN = re.compile(rf"<(?P<name>{TAG_NAME})(?P<attrs>\s+[^>]*)?\s*/>")
ATTRIBUTE_PATTERN = re.compile(
    rf"(?P<name>{TAG_NAME})\s*=\s*(?:\"(?P<double>[^\"]*)\"|'(?P<single>[^']*)'|(?P<bare>[^\s>\"']+))"
)
# Anything tag-like left over on a content line gets stripped
STRAY_TAG_PATTERN = re.compile(rf"</?{TAG_NAME}(?:\s+[^>]*)?/?>")

# Markdown patterns
HEADER_PATTERN = re.compile(r"^(?P<marks>#{1,6})\s+(?P<text>.+?)\s*$")
HORIZONTAL_RULE_PATTERN = re.compile(r"^\s*(?P<char>[-*_])(?:\s*(?P=char)){2,}\s*$")
CODE_FENCE_PATTERN = re.compile(r"^(?P<indent>\s*)(?P<fence>`{3,}|~{3,})(?P<info>.*)$")

# Beautifier line shapes
PURE_OPENING_TAG_PATTERN = re.compile(rf"^\s*<{TAG_NAME}(?:\s+[^>]*)?>\s*$")
PURE_CLOSING_TAG_PATTERN = re.compile(rf"^\s*</{TAG_NAME}>\s*$")
PURE_SELF_CLOSING_TAG_PATTERN = re.compile(rf"^\s*<{TAG_NAME}(?:\s+[^>]*)?/>\s*$")
BEAUTIFIER_HEADER_PATTERN = re.compile(r"^#{1,6}\s+\S")

# Inline code placeholders
CODE_PLACEHOLDER = "\x00CODE_{index}\x00"
CODE_PLACEHOLDER_PATTERN = re.compile(r"\x00CODE_(?P<index>\d+)\x00")

# Line splitting
LINE_BREAK_PATTERN = re.compile(r"\r?\n")

# Defaults
DEFAULT_INDENT_UNIT = DEFAULT_CONFIG.indent_unit
DEFAULT_BASE_HEADER_LEVEL = DEFAULT_CONFIG.base_header_level
DEFAULT_MAX_HEADER_LEVEL = DEFAULT_CONFIG.max_header_level
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
DEFAULT_MAX_LINE_LENGTH = DEFAULT_CONFIG.max_line_length
DOCUMENT_EXTENSIONS = (".md", ".markdown", ".claudemd", ".txt")
