"""
In-memory schema model.

One ``SchemaObject`` per record of the schema document. Nodes are frozen:
they are shared, unlocked, by every generation worker.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..analyzer.type_refs import TypeRef


@dataclass(frozen=True)
class Field:
    """A property of a schema object."""

    name: str
    type: TypeRef | None = None
    documentation: str = ""


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeRef | None = None


@dataclass(frozen=True)
class Method:
    """An operation exposed by a managed object."""

    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeRef | None = None
    documentation: str = ""


@dataclass(frozen=True)
class SchemaObject:
    """A composite type or request/response shape declared by the schema."""

    name: str
    namespace: str
    extends: TypeRef | None = None
    fields: tuple[Field, ...] = ()
    methods: tuple[Method, ...] = ()
    documentation: str = ""
