"""
Schema model and loader.
"""

from .nodes import Field, Method, Parameter, SchemaObject
from .parser import load_schema_file, parse_schema

__all__ = [
    "Field",
    "Method",
    "Parameter",
    "SchemaObject",
    "load_schema_file",
    "parse_schema",
]
