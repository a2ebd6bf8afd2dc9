"""
Namespace index.

Maps every schema object name to the output namespace that declares it, so a
definition in one namespace can reference a type defined in another.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, overload

from .type_refs import TypeRef, split_decoration

if TYPE_CHECKING:
    from ..schema_ast.nodes import SchemaObject

logger = logging.getLogger(__name__)


class NamespaceIndex(Mapping[str, str]):
    """Read-only mapping of type name -> owning namespace.

    Build it with ``NamespaceIndex.build``; the underlying dict is only
    reachable through a ``MappingProxyType`` so the index can be shared by the
    generation workers without locking.
    """

    def __init__(self, owners: Mapping[str, str]):
        self._owners = MappingProxyType(dict(owners))

    @classmethod
    def build(cls, objects: Iterable[SchemaObject]) -> NamespaceIndex:
        owners: dict[str, str] = {}
        for obj in objects:
            previous = owners.get(obj.name)
            if previous is not None and previous != obj.namespace:
                logger.warning(
                    "Type %s is declared in both %s and %s, using %s",
                    obj.name,
                    previous,
                    obj.namespace,
                    obj.namespace,
                )
            owners[obj.name] = obj.namespace
        logger.debug("Indexed %d schema types", len(owners))
        return cls(owners)

    def __getitem__(self, name: str) -> str:
        return self._owners[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._owners)

    def __len__(self) -> int:
        return len(self._owners)

    def namespace_of(self, name: str) -> str | None:
        return self._owners.get(name)

    @overload
    def resolve(self, type_ref: str, current_namespace: str) -> str: ...

    @overload
    def resolve(self, type_ref: TypeRef, current_namespace: str) -> TypeRef: ...

    def resolve(self, type_ref, current_namespace):
        """Qualify a type reference when it's owned by another namespace.

        Accepts either a parsed ``TypeRef`` or a decorated type string
        (``HostSystem``, ``*HostSystem``, ``[]HostSystem``, ``[]*HostSystem``)
        and returns the same kind. The decoration is kept as is.
        """
        if isinstance(type_ref, TypeRef):
            if type_ref.is_primitive:
                return type_ref
            owner = self._owners.get(type_ref.name)
            if owner is None or owner == current_namespace:
                return type_ref
            return type_ref.qualified(owner)

        if not type_ref:
            return type_ref
        marker, bare = split_decoration(type_ref)
        owner = self._owners.get(bare)
        if owner is None or owner == current_namespace:
            return marker + bare
        return f"{marker}{owner}.{bare}"
