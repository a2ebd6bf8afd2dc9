"""
Type resolution: parsed type references and the cross-namespace index.
"""

from __future__ import annotations

from .namespace_index import NamespaceIndex
from .type_refs import Cardinality, TypeKind, TypeRef, parse_type_ref

__all__ = [
    "Cardinality",
    "NamespaceIndex",
    "TypeKind",
    "TypeRef",
    "parse_type_ref",
]
