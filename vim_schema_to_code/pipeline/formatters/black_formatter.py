"""
Black formatter for Python code.
"""

from __future__ import annotations

import black

from ..config import FormatterConfig
from ..errors import FormattingError
from .base import Formatter


class BlackFormatter(Formatter):
    """Formatter using black for Python code."""

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Python code using black.

        Args:
            code: Python source code to format
            config: Formatter configuration

        Returns:
            Formatted code

        Raises:
            FormattingError: If black can't parse the code
        """
        target_versions = set()
        if config.target_version:
            try:
                target_versions.add(black.TargetVersion[config.target_version.upper()])
            except KeyError:
                raise FormattingError(f"Unsupported target version {config.target_version!r}") from None

        mode = black.Mode(
            target_versions=target_versions,
            line_length=config.line_length,
            string_normalization=config.string_normalization,
            magic_trailing_comma=config.magic_trailing_comma,
        )

        try:
            return black.format_str(code, mode=mode)
        except black.InvalidInput as e:
            raise FormattingError(str(e)) from e


def format_with_black(
    code: str,
    line_length: int = 100,
    target_version: str = "py312",
) -> str:
    """
    Convenience function to format Python code with black.

    Args:
        code: Python source code
        line_length: Maximum line length
        target_version: Python version target (e.g., "py312")

    Returns:
        Formatted code
    """
    formatter = BlackFormatter()
    config = FormatterConfig(
        enabled=True,
        line_length=line_length,
        target_version=target_version,
    )
    return formatter.format(code, config)
