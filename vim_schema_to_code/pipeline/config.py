"""
Configuration for the code generator.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError

DEFAULT_LICENSE_BANNER = """\
This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at http://mozilla.org/MPL/2.0/.

Code generated by vim_schema_to_code. DO NOT EDIT."""


@dataclass
class FormatterConfig:
    """Configuration for the post-processing formatter."""

    # When disabled, generated source is only checked with ast.parse
    enabled: bool = True

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"

    # Whether to use string normalization (convert single quotes to double)
    string_normalization: bool = True

    # Whether to respect magic trailing commas
    magic_trailing_comma: bool = True


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        atomic_write: Whether to write through a temporary file and rename it
    """

    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Top-level package the output tree is imported as
    package_name: str = "vim"

    # Comment block placed at the top of every generated module
    license_banner: str = DEFAULT_LICENSE_BANNER

    # Directory holding replacement templates (empty = packaged templates)
    template_dir: str = ""

    # Stop scheduling namespaces after the first failure
    fail_fast: bool = False

    # Formatter configuration
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary.

        Unknown top-level keys are ignored; unknown keys inside the
        ``formatter`` and ``output`` sections raise ``ConfigError``.
        """
        config = CodeGeneratorConfig()
        for k, v in d.items():
            try:
                if k == "formatter" and isinstance(v, dict):
                    config.formatter = FormatterConfig(**v)
                elif k == "output" and isinstance(v, dict):
                    config.output = OutputConfig(**v)
                elif hasattr(config, k):
                    setattr(config, k, v)
            except TypeError as e:
                raise ConfigError(f"Invalid '{k}' section: {e}") from e
        return config

    @staticmethod
    def from_file(path: str | Path) -> CodeGeneratorConfig:
        """Load a config from a JSON file."""
        try:
            with open(path) as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        return CodeGeneratorConfig.from_dict(data)

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "package_name": self.package_name,
            "license_banner": self.license_banner,
            "template_dir": self.template_dir,
            "fail_fast": self.fail_fast,
            "formatter": {
                "enabled": self.formatter.enabled,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
                "string_normalization": self.formatter.string_normalization,
                "magic_trailing_comma": self.formatter.magic_trailing_comma,
            },
            "output": {
                "atomic_write": self.output.atomic_write,
            },
        }
