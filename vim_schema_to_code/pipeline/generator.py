"""
Generation orchestrator.

Loads the schema, builds the namespace index, then generates every output
namespace on its own worker thread. The schema objects and the index are
frozen before the first worker starts and only read afterwards.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from .analyzer.namespace_index import NamespaceIndex
from .atomic_writer import AtomicWriter
from .config import CodeGeneratorConfig
from .emitter import TemplateEmitter
from .errors import GenerationError
from .namespaces import DEFAULT_NAMESPACES, NamespaceSpec, check_namespace_table, namespace_names
from .post_processor import PostProcessor
from .schema_ast.nodes import SchemaObject
from .schema_ast.parser import load_schema_file

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates the source tree of every output namespace."""

    def __init__(
        self,
        objects: Sequence[SchemaObject],
        config: CodeGeneratorConfig | None = None,
        namespaces: Sequence[NamespaceSpec] = DEFAULT_NAMESPACES,
    ):
        """
        Initialize the generator.

        Args:
            objects: Schema objects, in schema order
            config: Code generation configuration
            namespaces: Output namespaces and their dependencies

        Raises:
            NamespaceTableError: If the namespace table has a cycle
            TemplateError: If a namespace template can't be loaded
        """
        check_namespace_table(namespaces)
        self.config = config or CodeGeneratorConfig()
        self.namespaces = tuple(namespaces)
        self.objects = tuple(objects)
        self.index = NamespaceIndex.build(self.objects)
        self.emitter = TemplateEmitter(self.config)
        self.emitter.check_templates(self.namespaces)
        # Set by the first failing namespace when fail_fast is on
        self.stop_requested = threading.Event()
        self.post_processor = PostProcessor(
            self.config.formatter,
            AtomicWriter(atomic=self.config.output.atomic_write),
        )

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        config: CodeGeneratorConfig | None = None,
        namespaces: Sequence[NamespaceSpec] = DEFAULT_NAMESPACES,
    ) -> PipelineGenerator:
        """Load a schema file and create a generator for it."""
        objects = load_schema_file(path, namespace_names(namespaces))
        return cls(objects, config, namespaces)

    def namespace(self, name: str) -> NamespaceSpec:
        for spec in self.namespaces:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def render(self, name: str) -> str:
        """Render a namespace module without formatting or writing it."""
        return self.emitter.emit(self.namespace(name), self.objects, self.index)

    def output_path(self, output_root: Path, name: str) -> Path:
        return output_root / name / f"{name}.py"

    def generate(self, output_root: str | Path) -> dict[str, Path]:
        """
        Generate every namespace module under ``output_root``.

        Every namespace is attempted and failures are collected once all
        workers are done. With ``fail_fast``, the first failure sets
        ``stop_requested`` and namespaces that haven't written their module
        yet are skipped.

        Returns:
            Path of the module written for each namespace that was generated

        Raises:
            GenerationError: If any namespace failed
        """
        output_root = Path(output_root)
        output_root.mkdir(parents=True, exist_ok=True)
        for spec in self.namespaces:
            (output_root / spec.name).mkdir(exist_ok=True)

        self.stop_requested.clear()
        with ThreadPoolExecutor(max_workers=max(1, len(self.namespaces)), thread_name_prefix="codegen") as executor:
            futures: dict[Future, str] = {
                executor.submit(self._generate_namespace, spec, output_root): spec.name for spec in self.namespaces
            }

        results: dict[str, Path] = {}
        failures: dict[str, Exception] = {}
        for future, name in futures.items():
            error = future.exception()
            if error is None:
                path = future.result()
                if path is None:
                    logger.warning("Namespace %s was not generated", name)
                else:
                    results[name] = path
            elif isinstance(error, Exception):
                logger.error("Namespace %s failed: %s", name, error)
                failures[name] = error
            else:
                raise error

        if failures:
            raise GenerationError(failures)
        return results

    def _generate_namespace(self, spec: NamespaceSpec, output_root: Path) -> Path | None:
        path = self.output_path(output_root, spec.name)
        try:
            source = self.emitter.emit(spec, self.objects, self.index)
            if self.stop_requested.is_set():
                return None
            return self.post_processor.process(spec.name, source, path)
        except Exception:
            if self.config.fail_fast:
                self.stop_requested.set()
            raise
