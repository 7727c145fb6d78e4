"""Validation of parsed frontmatter and of raw input documents."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from frontmatter_gen.errors import (
    DepthLimitExceededError,
    InputValidationError,
    TooManyKeysError,
)
from frontmatter_gen.types import Array, Frontmatter, Object, Tagged, Value

logger = logging.getLogger(__name__)

MAX_NESTING_DEPTH = 32
MAX_KEYS = 1000

FENCE = "```"

# ".." used as a relative path segment, e.g. "../secret" or "..\\secret"
PATH_TRAVERSAL = r"(?<![\w.])\.\.(?=[/\\])"
DEFAULT_REJECT_PATTERNS: tuple[str, ...] = (PATH_TRAVERSAL,)


def validate_frontmatter(
    frontmatter: Frontmatter,
    max_depth: int = MAX_NESTING_DEPTH,
    max_keys: int = MAX_KEYS,
) -> None:
    """Check a parsed mapping against key count and nesting limits.

    The mapping itself is depth 0, so each top-level value sits at depth 1
    and every child of an Array or Object sits one level below its parent.
    Tagged wrappers add no level.

    Args:
        frontmatter: Parsed mapping.
        max_depth: Deepest allowed nesting.
        max_keys: Largest allowed number of top-level keys.

    Raises:
        TooManyKeysError: If there are more than max_keys top-level keys.
        DepthLimitExceededError: If any value nests deeper than max_depth.
    """
    if len(frontmatter) > max_keys:
        raise TooManyKeysError(len(frontmatter), max_keys)

    stack: list[tuple[Value, int]] = [(value, 1) for value in frontmatter.values()]
    while stack:
        node, depth = stack.pop()
        if depth > max_depth:
            raise DepthLimitExceededError(depth, max_depth)
        while isinstance(node, Tagged):
            node = node.value
        if isinstance(node, Array):
            children: Iterable[Value] = node.items
        elif isinstance(node, Object):
            children = node.fields.values()
        else:
            continue
        stack.extend((child, depth + 1) for child in children)


def validate_input(content: str, patterns: Iterable[str] = DEFAULT_REJECT_PATTERNS) -> None:
    """Reject documents containing a pattern outside fenced code blocks.

    A fence opens at a line whose first non-blank characters are three
    backticks and closes at the next such line. An unclosed fence runs to
    the end of the document.

    Args:
        content: Full document text.
        patterns: Regular expressions to reject.

    Raises:
        InputValidationError: On the first match outside a fence.
    """
    compiled = [re.compile(pattern) for pattern in patterns]
    in_fence = False
    for number, line in enumerate(content.splitlines(), start=1):
        if line.lstrip().startswith(FENCE):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        for pattern in compiled:
            match = pattern.search(line)
            if match:
                raise InputValidationError(match.group(0), number)
    logger.debug("Input validation passed (%d patterns)", len(compiled))


def check_required_fields(frontmatter: Frontmatter, required: Iterable[str]) -> list[str]:
    """Check that every required key is present.

    Args:
        frontmatter: Parsed mapping.
        required: Key names; blank names are ignored.

    Returns:
        List of error messages (empty if all keys are present).
    """
    errors = []
    for field in required:
        name = field.strip()
        if name and name not in frontmatter:
            errors.append(f"Missing required field: {name}")
    return errors
