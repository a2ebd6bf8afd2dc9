"""
Exceptions raised by the generation pipeline.
"""

from __future__ import annotations

from pathlib import Path


class CodegenError(Exception):
    """Base class for every error the generator reports."""


class ConfigError(CodegenError):
    """The configuration file could not be read or has unknown settings."""


class SchemaLoadError(CodegenError):
    """The schema file could not be read or does not have the expected shape."""


class NamespaceTableError(CodegenError):
    """The namespace dependency table is inconsistent."""


class TemplateError(CodegenError):
    """A namespace template is missing, malformed or failed to render."""


class FormattingError(CodegenError):
    """A formatter rejected the generated source."""


class PostProcessingError(CodegenError):
    """Generated source for a namespace failed validation or formatting.

    The unformatted buffer has already been written to ``path``.
    """

    def __init__(self, namespace: str, path: Path, cause: Exception):
        self.namespace = namespace
        self.path = path
        self.cause = cause
        super().__init__(f"There are errors in the generated source for {namespace} ({path}): {cause}")


class GenerationError(CodegenError):
    """One or more namespaces failed to generate."""

    def __init__(self, failures: dict[str, Exception]):
        self.failures = failures
        names = ", ".join(sorted(failures))
        super().__init__(f"Generation failed for namespace(s): {names}")
