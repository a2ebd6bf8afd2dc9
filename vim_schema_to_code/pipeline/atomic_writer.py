"""
Atomic file writer for generated modules.

A reader of the output tree never sees a half-written module: content goes to
a temporary file in the target directory, which then replaces the target.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


class AtomicWriter:
    """Writes files through a temporary sibling and an atomic rename."""

    def __init__(self, atomic: bool = True):
        """Initialize the writer.

        Args:
            atomic: When False, write the target file in place
        """
        self.atomic = atomic

    def write(self, path: Path, content: str) -> None:
        """Write content to file.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        if not self.atomic:
            path.write_text(content, encoding="utf-8")
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
