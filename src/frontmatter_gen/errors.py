"""Exception types raised by the frontmatter pipeline."""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Broad grouping of errors for reporting."""

    PARSING = "parsing"
    VALIDATION = "validation"
    CONVERSION = "conversion"
    CONFIGURATION = "configuration"


class FrontmatterError(Exception):
    """Base class for frontmatter errors."""

    category = ErrorCategory.PARSING


class InvalidFormatError(FrontmatterError):
    """Raised when delimiters are malformed or a block fails its grammar."""

    def __init__(self, message: str = "Invalid front matter format") -> None:
        super().__init__(message)
        self.message = message


class NoFrontmatterError(InvalidFormatError):
    """Raised when the input has no recognisable frontmatter block."""

    def __init__(self, message: str = "No front matter found in the content") -> None:
        super().__init__(message)


class ParseError(InvalidFormatError):
    """Raised when a backing format library rejects a block.

    Attributes:
        message: Library-provided detail.
        line: 1-based line of the problem, when the library reports one.
        column: 1-based column of the problem, when the library reports one.
        format: Name of the format being parsed.
    """

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
        format: str | None = None,
    ) -> None:
        self.line = line
        self.column = column
        self.format = format
        prefix = f"Failed to parse {format.upper()}" if format else "Failed to parse front matter"
        location = ""
        if line is not None:
            location = f" at {line}:{column or 0}"
        super().__init__(f"{prefix}{location}: {message}")
        self.message = message


class InvalidBracedError(FrontmatterError):
    """Raised when a braced object ends before its braces balance."""

    def __init__(self) -> None:
        super().__init__("Invalid JSON front matter: unbalanced braces")


class DepthLimitExceededError(FrontmatterError):
    """Raised when nesting goes deeper than the configured limit."""

    category = ErrorCategory.CONFIGURATION

    def __init__(self, depth: int | None, max_depth: int) -> None:
        levels = f" ({depth} levels)" if depth is not None else ""
        super().__init__(
            f"Your front matter is nested too deeply{levels}. "
            f"The maximum allowed nesting depth is {max_depth}."
        )
        self.depth = depth
        self.max_depth = max_depth


class TooManyKeysError(FrontmatterError):
    """Raised when a frontmatter block has more top-level keys than allowed."""

    category = ErrorCategory.CONFIGURATION

    def __init__(self, count: int, max_keys: int) -> None:
        super().__init__(
            f"Your front matter contains too many fields ({count}). "
            f"The maximum allowed is {max_keys}."
        )
        self.count = count
        self.max_keys = max_keys


class ConversionError(FrontmatterError):
    """Raised when a block or value cannot be converted to the target format."""

    category = ErrorCategory.CONVERSION

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to convert front matter: {message}")
        self.message = message


class UnsupportedFormatError(FrontmatterError):
    """Raised when the caller asks for Format.UNSUPPORTED."""

    def __init__(self, line: int = 1) -> None:
        super().__init__(f"Unsupported front matter format detected at line {line}")
        self.line = line


class ExtractionError(FrontmatterError):
    """Raised for extractor failures not covered by a more specific error."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Extraction error: {message}")
        self.message = message


class InputValidationError(FrontmatterError):
    """Raised when a document contains a rejected pattern outside code fences."""

    category = ErrorCategory.VALIDATION

    def __init__(self, pattern: str, line: int) -> None:
        super().__init__(f"Input validation error: disallowed pattern {pattern!r} at line {line}")
        self.pattern = pattern
        self.line = line
