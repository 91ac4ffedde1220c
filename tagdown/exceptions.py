"""Errors for documents rejected before they are parsed.

Malformed markup never raises: unmatched tags and unterminated fences are
part of the structure. Only documents that break the reading limits end up
here.
"""

from __future__ import annotations


class ParseError(ValueError):
    """Base class for rejected documents."""


class LineTooLongError(ParseError):
    """Raised when a line is longer than the configured limit.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
        length: Actual length of the offending line, when known.
    """

    def __init__(self, line_number: int, max_line_length: int, length: int | None = None):
        self.line_number = line_number
        self.max_line_length = max_line_length
        self.length = length
        message = f"Line {line_number} exceeds maximum allowed length of {max_line_length} characters"
        if length is not None:
            message += f" ({length} found)"
        super().__init__(message)


class NullCharacterError(ParseError):
    """Raised when a document contains a NUL character.

    NUL delimits the placeholders that hide inline code from the tag scanner,
    so such documents cannot be scanned reliably.

    Args:
        line_number: One-based index of the first line holding a NUL.
    """

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"Line {line_number} contains a NUL character")
