"""Filesystem abstraction and path-safety checks.

The RealFileSystem implementation wraps standard library operations and
refuses unsafe paths before touching the disk. Tests substitute a mock.
"""

from __future__ import annotations

import unicodedata
from pathlib import Path

RESERVED_NAMES = frozenset({"con", "prn", "aux", "nul", "com1", "lpt1"})


class PathSafetyError(ValueError):
    """Raised when a path fails the safety checks."""

    def __init__(self, path: Path | str, details: str) -> None:
        super().__init__(f"Invalid path '{path}': {details}")
        self.path = str(path)
        self.details = details


def validate_path_safety(path: Path | str) -> None:
    """Check that a user-supplied path is safe to read or write.

    Rejects backslashes, NUL and other control characters, any ``..``
    (path traversal), existing symlinks, and reserved device names.
    Absolute paths are allowed.

    Args:
        path: Path to check.

    Raises:
        PathSafetyError: If any check fails.
    """
    path = Path(path)
    text = str(path)

    if "\\" in text:
        raise PathSafetyError(text, "Backslashes are not allowed in paths")
    if any(unicodedata.category(char) == "Cc" for char in text):
        raise PathSafetyError(text, "Path contains invalid characters")
    if ".." in text:
        raise PathSafetyError(text, "Path traversal not allowed")
    if path.is_symlink():
        raise PathSafetyError(text, "Symlinks are not allowed")
    if path.name.lower() in RESERVED_NAMES:
        raise PathSafetyError(text, "Reserved file name not allowed")


class RealFileSystem:
    """Production filesystem implementation.

    Satisfies the FileSystem protocol structurally.
    """

    def read_text(self, path: Path) -> str:
        """Read UTF-8 text from a file after checking the path."""
        validate_path_safety(path)
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        """Write UTF-8 text to a file after checking the path."""
        validate_path_safety(path)
        path.write_text(content, encoding="utf-8")

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()
