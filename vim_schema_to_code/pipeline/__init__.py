"""
Pipeline - schema to Python source generator.

1. Loader: parse the schema document into frozen schema objects
2. Index: map every type name to its owning namespace
3. Emitter: render one module per namespace from Jinja2 templates
4. Post-processor: format with black, validate, write atomically
5. Generator: run one worker per namespace and collect the outcomes
"""

from __future__ import annotations

from .analyzer import NamespaceIndex, TypeRef, parse_type_ref
from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig
from .errors import (
    CodegenError,
    ConfigError,
    FormattingError,
    GenerationError,
    NamespaceTableError,
    PostProcessingError,
    SchemaLoadError,
    TemplateError,
)
from .generator import PipelineGenerator
from .namespaces import DEFAULT_NAMESPACES, NamespaceSpec

__all__ = [
    "DEFAULT_NAMESPACES",
    "CodeGeneratorConfig",
    "CodegenError",
    "ConfigError",
    "FormatterConfig",
    "FormattingError",
    "GenerationError",
    "NamespaceIndex",
    "NamespaceSpec",
    "NamespaceTableError",
    "OutputConfig",
    "PipelineGenerator",
    "PostProcessingError",
    "SchemaLoadError",
    "TemplateError",
    "TypeRef",
    "parse_type_ref",
]
