"""
Template emitter.

Renders the source of one output namespace: a fixed header (license banner,
module docstring, import block) followed by one unit per schema object of
that namespace.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from functools import partial
from pathlib import Path

import jinja2

from ..utils import comment, escape_reserved, make_public, strip_namespace, to_native_type
from .analyzer.namespace_index import NamespaceIndex
from .analyzer.type_refs import TypeKind, TypeRef
from .config import CodeGeneratorConfig
from .errors import TemplateError
from .namespaces import NamespaceSpec, import_lines
from .schema_ast.nodes import SchemaObject

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates" / "python"
PREFIX_TEMPLATE = "prefix.py.jinja2"


class TemplateEmitter:
    """Renders namespace modules from Jinja2 templates."""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the emitter.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up the Jinja2 environment, user templates take precedence."""
        search_path = [str(TEMPLATE_DIR)]
        if self.config.template_dir:
            search_path.insert(0, str(self.config.template_dir))

        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(search_path),
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )
        self.jinja_env.filters["to_native_type"] = to_native_type
        self.jinja_env.filters["strip_namespace"] = strip_namespace
        self.jinja_env.filters["escape_reserved"] = escape_reserved
        self.jinja_env.filters["make_public"] = make_public
        self.jinja_env.filters["comment"] = comment
        self.jinja_env.filters["literal"] = repr

    def _get_template(self, name: str) -> jinja2.Template:
        try:
            return self.jinja_env.get_template(name)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(f"Invalid template {e.name or name} (line {e.lineno}): {e.message}") from e
        except jinja2.TemplateNotFound as e:
            raise TemplateError(f"Template {name} not found") from e

    def check_templates(self, namespaces: Iterable[NamespaceSpec]) -> None:
        """Load every template once so authoring errors surface before any output."""
        self._get_template(PREFIX_TEMPLATE)
        for spec in namespaces:
            self._get_template(spec.template_name)

    def emit(self, spec: NamespaceSpec, objects: Sequence[SchemaObject], index: NamespaceIndex) -> str:
        """
        Render the module of a namespace.

        Args:
            spec: The namespace to render
            objects: Every schema object, in schema order
            index: Namespace index used to qualify cross-namespace references

        Returns:
            Unformatted source of the module
        """
        members = order_by_inheritance([obj for obj in objects if obj.namespace == spec.name])
        logger.debug("Rendering %d objects for namespace %s", len(members), spec.name)

        helpers = self._helpers(spec, index)
        parts = [
            self._render(
                PREFIX_TEMPLATE,
                namespace=spec,
                package=self.config.package_name,
                banner=self.config.license_banner,
                imports=import_lines(spec, self.config.package_name),
            )
        ]

        template = self._get_template(spec.template_name)
        for obj in members:
            try:
                parts.append(template.render(obj=obj, namespace=spec, **helpers))
            except jinja2.TemplateError as e:
                raise TemplateError(f"Failed to render {obj.name} with {spec.template_name}: {e}") from e
        return "\n".join(parts)

    def _render(self, template_name: str, **context) -> str:
        template = self._get_template(template_name)
        try:
            return template.render(**context)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to render {template_name}: {e}") from e

    def _helpers(self, spec: NamespaceSpec, index: NamespaceIndex) -> dict:
        """Template globals bound to the namespace being generated."""
        resolve = partial(_resolve, index, spec)
        return {
            "resolve": resolve,
            "annotation": lambda type_ref: _annotation(resolve(type_ref)),
            "default": lambda type_ref: _default(resolve(type_ref)),
            "returns": lambda type_ref: "None" if type_ref is None else resolve(type_ref).annotation(),
            "base_class": partial(_base_class, index, spec),
            "extends_local": partial(_extends_local, index, spec),
        }


def _resolve(index: NamespaceIndex, spec: NamespaceSpec, type_ref: TypeRef | None) -> TypeRef | None:
    """Qualify a reference, or degrade it to ``Any`` when its namespace isn't imported."""
    if type_ref is None:
        return None
    resolved = index.resolve(type_ref, spec.name)
    if resolved.qualifier and resolved.qualifier not in spec.depends_on:
        logger.warning(
            "%s.%s is not importable from namespace %s, typing it as Any",
            resolved.qualifier,
            resolved.name,
            spec.name,
        )
        return TypeRef(resolved.name, TypeKind.PRIMITIVE, resolved.cardinality, native="Any")
    return resolved


def _annotation(type_ref: TypeRef | None) -> str:
    return "Any" if type_ref is None else type_ref.annotation()


def _default(type_ref: TypeRef | None) -> str:
    return "None" if type_ref is None else type_ref.default()


def _base_class(index: NamespaceIndex, spec: NamespaceSpec, obj: SchemaObject) -> str:
    """The base class expression of an object, empty when it has none.

    Raises:
        TemplateError: If the base lives in a namespace this one doesn't import
    """
    if obj.extends is None:
        return ""
    owner = index.namespace_of(obj.extends.name)
    if owner is None:
        # Python evaluates bases at import time, an undeclared one can't be kept
        logger.warning("%s extends undeclared type %s, dropping the base class", obj.name, obj.extends.name)
        return ""
    if owner != spec.name and owner not in spec.depends_on:
        raise TemplateError(
            f"{obj.name} in namespace {spec.name} extends {owner}.{obj.extends.name}, "
            f"but {spec.name} does not depend on {owner}"
        )
    return index.resolve(obj.extends, spec.name).type_name()


def _extends_local(index: NamespaceIndex, spec: NamespaceSpec, obj: SchemaObject) -> bool:
    return obj.extends is not None and index.namespace_of(obj.extends.name) == spec.name


def order_by_inheritance(objects: Sequence[SchemaObject]) -> list[SchemaObject]:
    """Keep schema order, except that a base class moves ahead of its subclasses."""
    by_name = {obj.name: obj for obj in objects}
    ordered: list[SchemaObject] = []
    seen: set[int] = set()

    def visit(obj: SchemaObject) -> None:
        if id(obj) in seen:
            return
        seen.add(id(obj))
        if obj.extends is not None and obj.extends.name in by_name:
            visit(by_name[obj.extends.name])
        ordered.append(obj)

    for obj in objects:
        visit(obj)
    return ordered
