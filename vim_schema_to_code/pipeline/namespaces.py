"""
Output namespaces and the imports each one needs.

The vSphere API is split in four packages: managed objects (``mo``), data
objects (``do``), enumerations (``enum``) and faults (``fault``). ``do`` and
``enum`` are leaves; ``mo`` references data objects and enumerations, ``fault``
references data objects. The table must stay acyclic, it is checked when a
generator is created.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .errors import NamespaceTableError

FUTURE_IMPORT = "from __future__ import annotations"


@dataclass(frozen=True)
class NamespaceSpec:
    """One output namespace."""

    name: str
    description: str = ""

    # Fixed import lines placed after the future import
    imports: tuple[str, ...] = ()

    # Namespaces whose types this one may reference
    depends_on: tuple[str, ...] = ()

    @property
    def template_name(self) -> str:
        return f"{self.name}.py.jinja2"


_RECORD_IMPORTS = (
    "import datetime",
    "from dataclasses import dataclass, field",
    "from decimal import Decimal",
    "from typing import Any, Optional",
)

DEFAULT_NAMESPACES: tuple[NamespaceSpec, ...] = (
    NamespaceSpec("do", "Data objects.", _RECORD_IMPORTS),
    NamespaceSpec("enum", "Enumerations.", ("from enum import Enum",)),
    NamespaceSpec("mo", "Managed objects.", _RECORD_IMPORTS, depends_on=("do", "enum")),
    NamespaceSpec("fault", "Faults.", _RECORD_IMPORTS, depends_on=("do",)),
)


def check_namespace_table(specs: Sequence[NamespaceSpec]) -> None:
    """Raise ``NamespaceTableError`` on duplicates, unknown dependencies or cycles."""
    by_name: dict[str, NamespaceSpec] = {}
    for spec in specs:
        if spec.name in by_name:
            raise NamespaceTableError(f"Namespace {spec.name} is declared twice")
        by_name[spec.name] = spec

    for spec in specs:
        for dep in spec.depends_on:
            if dep not in by_name:
                raise NamespaceTableError(f"Namespace {spec.name} depends on unknown namespace {dep}")

    visiting: set[str] = set()
    done: set[str] = set()

    def visit(name: str, path: list[str]) -> None:
        if name in done:
            return
        if name in visiting:
            cycle = " -> ".join(path[path.index(name) :] + [name])
            raise NamespaceTableError(f"Namespace dependency cycle: {cycle}")
        visiting.add(name)
        for dep in by_name[name].depends_on:
            visit(dep, path + [name])
        visiting.discard(name)
        done.add(name)

    for spec in specs:
        visit(spec.name, [])


def import_lines(spec: NamespaceSpec, package: str) -> list[str]:
    """The import block of a namespace module."""
    lines = [FUTURE_IMPORT, *spec.imports]
    lines.extend(f"from {package}.{dep} import {dep}" for dep in spec.depends_on)
    return lines


def namespace_names(specs: Iterable[NamespaceSpec]) -> list[str]:
    return [spec.name for spec in specs]
