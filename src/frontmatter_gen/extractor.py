"""Locate frontmatter blocks inside documents.

Three block shapes are recognised, probed in this order:

- YAML: a ``---`` line, the block, and a closing ``---`` line.
- TOML: the same with ``+++``.
- JSON: a brace-balanced object at the start of the document.

The extractor only finds the block; parsing is left to the adapters.
"""

from __future__ import annotations

import logging

from frontmatter_gen.errors import (
    DepthLimitExceededError,
    InvalidBracedError,
    InvalidFormatError,
    NoFrontmatterError,
)
from frontmatter_gen.types import Format

logger = logging.getLogger(__name__)

YAML_DELIMITER = "---"
TOML_DELIMITER = "+++"

# Deepest brace nesting accepted by the JSON scanner
MAX_BRACE_DEPTH = 100

_NEWLINES = ("\n", "\r\n")


def _opening_length(content: str, delimiter: str) -> int | None:
    """Length of the opening delimiter line, or None if content lacks one."""
    for newline in _NEWLINES:
        if content.startswith(delimiter + newline):
            return len(delimiter) + len(newline)
    return None


def extract_delimited_frontmatter(content: str, delimiter: str) -> tuple[str, str] | None:
    """Extract a block fenced by ``delimiter`` lines.

    The block must open on the first line of the content. It closes at the
    first later line consisting of the delimiter alone, or the delimiter at
    end of input.

    Args:
        content: Full document text.
        delimiter: Fence line, ``---`` or ``+++``.

    Returns:
        Tuple of (raw block, residual body), or None if the content does not
        open with the delimiter.

    Raises:
        InvalidFormatError: If the block is opened but never closed.

    Example:
        >>> extract_delimited_frontmatter("---\\ntitle: Hi\\n---\\nBody", "---")
        ('title: Hi', 'Body')
    """
    start = _opening_length(content, delimiter)
    if start is None:
        return None

    marker = "\n" + delimiter
    # The newline ending the opening line may also start the closing line
    search_from = start - 1
    while True:
        index = content.find(marker, search_from)
        if index == -1:
            raise InvalidFormatError(f"Invalid front matter: missing closing {delimiter}")
        after = index + len(marker)
        if after == len(content):
            end = after
            break
        newline = next((n for n in _NEWLINES if content.startswith(n, after)), None)
        if newline is not None:
            end = after + len(newline)
            break
        search_from = index + 1

    block = content[start:index] if index >= start else ""
    block = block.rstrip().lstrip("\r\n")
    return block, content[end:].lstrip()


def extract_json_frontmatter(content: str) -> str:
    """Return the leading brace-balanced object of the content.

    Braces inside double-quoted strings are not counted, and a backslash
    inside a string escapes the next character.

    Args:
        content: Document text; leading whitespace is ignored.

    Returns:
        The object text including its outer braces.

    Raises:
        InvalidFormatError: If the content does not start with ``{``.
        DepthLimitExceededError: If braces nest deeper than MAX_BRACE_DEPTH.
        InvalidBracedError: If the input ends before the braces balance.
    """
    text = content.lstrip()
    if not text.startswith("{"):
        raise InvalidFormatError("Invalid JSON front matter: must start with '{'")

    depth = 0
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if escaped:
            escaped = False
            continue
        if in_string:
            if char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
            if depth > MAX_BRACE_DEPTH:
                raise DepthLimitExceededError(depth, MAX_BRACE_DEPTH)
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[: index + 1]

    raise InvalidBracedError()


def extract_raw_frontmatter(content: str) -> tuple[str, str]:
    """Split a document into its raw frontmatter block and residual body.

    Args:
        content: Full document text.

    Returns:
        Tuple of (raw block, residual body with leading whitespace removed).

    Raises:
        NoFrontmatterError: If no block shape matches.
        InvalidFormatError: If a delimited block is never closed.
        InvalidBracedError: If a JSON block never balances.
        DepthLimitExceededError: If a JSON block nests too deeply.
    """
    content = content.removeprefix("\ufeff")

    for delimiter in (YAML_DELIMITER, TOML_DELIMITER):
        found = extract_delimited_frontmatter(content, delimiter)
        if found is not None:
            logger.debug("Found %s-delimited front matter", delimiter)
            return found

    text = content.lstrip()
    if text.startswith("{"):
        block = extract_json_frontmatter(text)
        logger.debug("Found braced front matter (%d chars)", len(block))
        return block, text[len(block) :].lstrip()

    raise NoFrontmatterError()


def detect_format(raw_block: str) -> Format:
    """Guess the format of a raw block from its shape.

    A leading ``{`` means JSON, any ``=`` means TOML, anything else is YAML.
    The chosen adapter still rejects blocks that fail its grammar.
    """
    text = raw_block.lstrip()
    if text.startswith("{"):
        return Format.JSON
    if "=" in text:
        return Format.TOML
    return Format.YAML
