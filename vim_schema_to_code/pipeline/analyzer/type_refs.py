"""
Type references.

A schema type-token (``xsd:string``, ``HostSystem[]``, ``*ManagedObjectReference``)
is parsed once, at load time, into a ``TypeRef``. Templates only ever see the
parsed form.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ...utils import ARRAY_SUFFIX, XSD_TO_PYTHON_TYPES, escape_reserved, has_zero_value, strip_namespace, zero_value

REFERENCE_MARKER = "*"
SEQUENCE_MARKER = "[]"


class TypeKind(Enum):
    """How a value of the type is held."""

    PRIMITIVE = "primitive"  # native scalar, held by value
    REFERENCE = "reference"  # generated composite, held by reference


class Cardinality(Enum):
    SCALAR = "scalar"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class TypeRef:
    """A parsed type-token."""

    name: str
    kind: TypeKind = TypeKind.REFERENCE
    cardinality: Cardinality = Cardinality.SCALAR

    # Mapped native type, primitives only
    native: str = ""

    # Owning namespace when the type lives in another output namespace
    qualifier: str = ""

    @property
    def is_sequence(self) -> bool:
        return self.cardinality is Cardinality.SEQUENCE

    @property
    def is_primitive(self) -> bool:
        return self.kind is TypeKind.PRIMITIVE

    def qualified(self, namespace: str) -> TypeRef:
        return replace(self, qualifier=namespace)

    def type_name(self) -> str:
        """The element type as written in generated code."""
        if self.is_primitive:
            return self.native
        name = escape_reserved(self.name)
        return f"{self.qualifier}.{name}" if self.qualifier else name

    def annotation(self) -> str:
        element = self.type_name()
        if self.is_sequence:
            return f"list[{element}]"
        if self.is_primitive and (self.native == "Any" or has_zero_value(self.native)):
            return element
        return f"Optional[{element}]"

    def default(self) -> str:
        if self.is_sequence:
            return "field(default_factory=list)"
        if self.is_primitive:
            return zero_value(self.native)
        return "None"

    def decorated(self) -> str:
        """The marker form: ``X``, ``*X``, ``[]X`` or ``[]*X``."""
        prefix = ""
        if self.is_sequence:
            prefix += SEQUENCE_MARKER
        if not self.is_primitive:
            prefix += REFERENCE_MARKER
        return prefix + self.name


def split_decoration(token: str) -> tuple[str, str]:
    """Split a leading ``*``, ``[]`` or ``[]*`` marker from a type string."""
    for marker in (SEQUENCE_MARKER + REFERENCE_MARKER, SEQUENCE_MARKER, REFERENCE_MARKER):
        if token.startswith(marker):
            return marker, token[len(marker) :]
    return "", token


def parse_type_ref(token: str | None) -> TypeRef | None:
    """Parse a raw type-token, ``None`` for an empty token."""
    if not token:
        return None

    marker, bare = split_decoration(token.strip())
    local = strip_namespace(bare)
    is_sequence = marker.startswith(SEQUENCE_MARKER)
    if local.endswith(ARRAY_SUFFIX):
        local = local[: -len(ARRAY_SUFFIX)]
        is_sequence = True

    cardinality = Cardinality.SEQUENCE if is_sequence else Cardinality.SCALAR
    native = XSD_TO_PYTHON_TYPES.get(local)
    if native is not None:
        return TypeRef(local, TypeKind.PRIMITIVE, cardinality, native=native)
    return TypeRef(local, TypeKind.REFERENCE, cardinality)
