"""
Schema loader.

The schema document is a JSON list of object records::

    [
      {
        "Name": "VirtualMachine",
        "Namespace": "mo",
        "Extends": "ManagedEntity",
        "Fields": [{"Name": "name", "Type": "xsd:string"}],
        "Methods": [
          {
            "Name": "PowerOnVM_Task",
            "Parameters": [{"Name": "host", "Type": "HostSystem"}],
            "ReturnType": "Task"
          }
        ]
      }
    ]

Anything that can't be read or doesn't have this shape raises
``SchemaLoadError``; there is no partial load.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Collection
from pathlib import Path
from typing import Any

from ..analyzer.type_refs import parse_type_ref
from ..errors import SchemaLoadError
from .nodes import Field, Method, Parameter, SchemaObject

logger = logging.getLogger(__name__)


def load_schema_file(path: str | Path, namespaces: Collection[str]) -> tuple[SchemaObject, ...]:
    """Read and parse a schema file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SchemaLoadError(f"Cannot read schema file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in schema file {path}: {e}") from e

    objects = parse_schema(data, namespaces)
    logger.info("Loaded %d schema objects from %s", len(objects), path)
    return objects


def parse_schema(data: Any, namespaces: Collection[str]) -> tuple[SchemaObject, ...]:
    """Build schema objects from a decoded JSON document."""
    if not isinstance(data, list):
        raise SchemaLoadError(f"Schema must be a list of objects, got {type(data).__name__}")

    objects = []
    for position, record in enumerate(data):
        try:
            objects.append(_parse_object(record, namespaces))
        except SchemaLoadError as e:
            raise SchemaLoadError(f"Schema object #{position}: {e}") from e
    return tuple(objects)


def _parse_object(record: Any, namespaces: Collection[str]) -> SchemaObject:
    _expect_dict(record, "object")
    name = _required_str(record, "Name")
    namespace = _required_str(record, "Namespace")
    if namespace not in namespaces:
        known = ", ".join(sorted(namespaces))
        raise SchemaLoadError(f"{name}: unknown namespace {namespace!r} (expected one of {known})")

    try:
        return SchemaObject(
            name=name,
            namespace=namespace,
            extends=parse_type_ref(_optional_str(record, "Extends")),
            fields=tuple(_parse_field(f) for f in _list(record, "Fields")),
            methods=tuple(_parse_method(m) for m in _list(record, "Methods")),
            documentation=_documentation(record),
        )
    except SchemaLoadError as e:
        raise SchemaLoadError(f"{name}: {e}") from e


def _parse_field(record: Any) -> Field:
    _expect_dict(record, "field")
    return Field(
        name=_required_str(record, "Name"),
        type=parse_type_ref(_optional_str(record, "Type")),
        documentation=_documentation(record),
    )


def _parse_method(record: Any) -> Method:
    _expect_dict(record, "method")
    name = _required_str(record, "Name")

    parameters = []
    for param in _list(record, "Parameters"):
        _expect_dict(param, "parameter")
        parameters.append(Parameter(_required_str(param, "Name"), parse_type_ref(_optional_str(param, "Type"))))

    return_type = _optional_str(record, "ReturnType")
    if not return_type and isinstance(record.get("ReturnValue"), dict):
        return_type = _optional_str(record["ReturnValue"], "Type")

    return Method(
        name=name,
        parameters=tuple(parameters),
        return_type=parse_type_ref(return_type),
        documentation=_documentation(record),
    )


def _expect_dict(value: Any, what: str) -> None:
    if not isinstance(value, dict):
        raise SchemaLoadError(f"{what.capitalize()} must be a record, got {type(value).__name__}")


def _required_str(record: dict, key: str) -> str:
    value = record.get(key)
    if not isinstance(value, str) or not value:
        raise SchemaLoadError(f"Missing or invalid {key!r}")
    return value


def _optional_str(record: dict, key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaLoadError(f"{key!r} must be a string")
    return value


def _list(record: dict, key: str) -> list:
    value = record.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaLoadError(f"{key!r} must be a list")
    return value


def _documentation(record: dict) -> str:
    if "Documentation" in record:
        return _optional_str(record, "Documentation")
    return _optional_str(record, "Doc")
