"""Application context for dependency injection.

This module separates object creation from object use, so CLI commands can
be exercised with test doubles in place of the real filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from frontmatter_gen.config import ParseOptions
from frontmatter_gen.engine import FrontmatterEngine
from frontmatter_gen.protocols import FileSystem


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from frontmatter_gen.filesystem import RealFileSystem

    return RealFileSystem()


@dataclass
class AppContext:
    """Container for the services used by CLI commands.

    The filesystem is typed by its Protocol, so any structurally matching
    object can be injected.
    """

    filesystem: FileSystem = field(default_factory=_default_filesystem)
    engine: FrontmatterEngine = field(default_factory=FrontmatterEngine)
    options: ParseOptions = field(default_factory=ParseOptions)


def create_context(options: ParseOptions | None = None) -> AppContext:
    """Factory for application dependencies.

    Use this in production code. For tests, construct AppContext directly
    with test doubles.

    Args:
        options: Parse options for the session; defaults apply when omitted.

    Returns:
        Configured AppContext.
    """
    from frontmatter_gen.filesystem import RealFileSystem

    return AppContext(
        filesystem=RealFileSystem(),
        engine=FrontmatterEngine(),
        options=options or ParseOptions(),
    )
