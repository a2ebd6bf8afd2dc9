"""
Source post-processor.

Formats and validates the rendered buffer of a namespace before writing it.
Invalid output is still written, unformatted, so it can be inspected.
"""

from __future__ import annotations

import ast
import logging
from pathlib import Path

from .atomic_writer import AtomicWriter
from .config import FormatterConfig
from .errors import FormattingError, PostProcessingError
from .formatters import BlackFormatter, Formatter

logger = logging.getLogger(__name__)


class PostProcessor:
    """Formats generated source and writes it to its output file."""

    def __init__(
        self,
        config: FormatterConfig,
        writer: AtomicWriter | None = None,
        formatter: Formatter | None = None,
    ):
        self.config = config
        self.writer = writer or AtomicWriter()
        self.formatter = formatter or BlackFormatter()

    def format(self, source: str) -> str:
        """Return the canonical form of ``source``.

        Raises:
            FormattingError: If the source is not valid Python
        """
        if self.config.enabled:
            source = self.formatter.format(source, self.config)
        try:
            ast.parse(source)
        except SyntaxError as e:
            raise FormattingError(f"line {e.lineno}: {e.msg}") from e
        return source

    def process(self, namespace: str, source: str, path: Path) -> Path:
        """Format ``source`` and write it to ``path``.

        Raises:
            PostProcessingError: If formatting fails; the raw buffer is on disk
        """
        try:
            formatted = self.format(source)
        except FormattingError as e:
            self.writer.write(path, source)
            logger.error("There are errors in the generated source for %s: %s", path, e)
            raise PostProcessingError(namespace, path, e) from e

        self.writer.write(path, formatted)
        logger.info("Wrote %s", path)
        return path
