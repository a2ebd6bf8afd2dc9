"""Schema to Python code generator for the vSphere API

Generates typed Python definitions (data objects, managed objects,
enumerations and faults) from a flat JSON description of the API, one
package per namespace, formatted with black.
"""

__version__ = "0.3.0"

from .pipeline import (
    CodeGeneratorConfig,
    CodegenError,
    ConfigError,
    FormatterConfig,
    GenerationError,
    NamespaceIndex,
    OutputConfig,
    PipelineGenerator,
    PostProcessingError,
    SchemaLoadError,
)

__all__ = [
    "CodeGeneratorConfig",
    "CodegenError",
    "ConfigError",
    "FormatterConfig",
    "GenerationError",
    "NamespaceIndex",
    "OutputConfig",
    "PipelineGenerator",
    "PostProcessingError",
    "SchemaLoadError",
]
