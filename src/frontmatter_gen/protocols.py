"""Protocol definitions for the I/O seams.

The core pipeline is pure; only the CLI touches the disk, and it does so
through the FileSystem protocol so tests can substitute a double.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts filesystem access to enable testing without real I/O.
    """

    def read_text(self, path: Path) -> str:
        """Read text content from a file.

        Args:
            path: Path to the file.

        Returns:
            File content as string.

        Raises:
            FileNotFoundError: If file does not exist.
            PathSafetyError: If the path fails the safety checks.
        """
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file.

        Args:
            path: Path to the file.
            content: Content to write.

        Raises:
            PathSafetyError: If the path fails the safety checks.
        """
        ...

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...
