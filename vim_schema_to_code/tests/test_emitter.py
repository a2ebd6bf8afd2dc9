import ast
import logging
from pathlib import Path

import pytest

from vim_schema_to_code.pipeline.analyzer import NamespaceIndex
from vim_schema_to_code.pipeline.config import CodeGeneratorConfig
from vim_schema_to_code.pipeline.emitter import TemplateEmitter, order_by_inheritance
from vim_schema_to_code.pipeline.errors import TemplateError
from vim_schema_to_code.pipeline.namespaces import DEFAULT_NAMESPACES
from vim_schema_to_code.pipeline.schema_ast import load_schema_file, parse_schema

NAMESPACES = {spec.name: spec for spec in DEFAULT_NAMESPACES}
TEST_DATA = Path(__file__).parent / "test_data"


def emit(records, namespace, config=None):
    objects = parse_schema(records, list(NAMESPACES))
    emitter = TemplateEmitter(config or CodeGeneratorConfig())
    return emitter.emit(NAMESPACES[namespace], objects, NamespaceIndex.build(objects))


VM_SCHEMA = [
    {
        "Name": "VirtualMachine",
        "Namespace": "mo",
        "Extends": "",
        "Fields": [{"Name": "name", "Type": "xsd:string"}, {"Name": "host", "Type": "HostSystem"}],
    },
    {"Name": "HostSystem", "Namespace": "do", "Fields": [{"Name": "name", "Type": "xsd:string"}]},
]


class TestCrossNamespaceReferences:
    def test_managed_object_references_data_object(self):
        source = emit(VM_SCHEMA, "mo")
        ast.parse(source)
        assert "class VirtualMachine:" in source
        assert '    Name: str = ""' in source
        assert "    Host: Optional[do.HostSystem] = None" in source
        assert "from vim.do import do" in source

    def test_data_object_is_unqualified(self):
        source = emit(VM_SCHEMA, "do")
        ast.parse(source)
        assert "class HostSystem:" in source
        assert "VirtualMachine" not in source
        assert "from vim." not in source

    def test_reference_into_unimported_namespace_is_any(self, caplog):
        records = [
            {
                "Name": "VirtualMachineRuntimeInfo",
                "Namespace": "do",
                "Fields": [
                    {"Name": "powerState", "Type": "VirtualMachinePowerState"},
                    {"Name": "history", "Type": "VirtualMachinePowerState[]"},
                ],
            },
            {"Name": "VirtualMachinePowerState", "Namespace": "enum", "Fields": [{"Name": "poweredOn"}]},
        ]
        with caplog.at_level(logging.WARNING):
            source = emit(records, "do")
        ast.parse(source)
        assert "    PowerState: Any = None" in source
        assert "    History: list[Any] = field(default_factory=list)" in source
        assert "enum." not in source
        assert "enum.VirtualMachinePowerState is not importable from namespace do" in caplog.text

    def test_reference_into_dependency_is_qualified(self):
        records = [
            {"Name": "VirtualMachine", "Namespace": "mo", "Fields": [{"Name": "powerState", "Type": "VirtualMachinePowerState"}]},
            {"Name": "VirtualMachinePowerState", "Namespace": "enum", "Fields": [{"Name": "poweredOn"}]},
        ]
        source = emit(records, "mo")
        assert "    PowerState: Optional[enum.VirtualMachinePowerState] = None" in source

    def test_base_class_from_unimported_namespace_is_fatal(self):
        records = [
            {"Name": "ManagedEntity", "Namespace": "mo"},
            {"Name": "HostSystem", "Namespace": "do", "Extends": "ManagedEntity"},
        ]
        with pytest.raises(TemplateError, match="does not depend on mo"):
            emit(records, "do")

    def test_base_class_from_dependency_is_qualified(self):
        records = [
            {"Name": "MethodFault", "Namespace": "do"},
            {"Name": "RuntimeFault", "Namespace": "fault", "Extends": "MethodFault"},
        ]
        source = emit(records, "fault")
        assert "class RuntimeFault(do.MethodFault, Exception):" in source


class TestHeader:
    @pytest.mark.parametrize("namespace", list(NAMESPACES))
    def test_empty_namespace_is_valid(self, namespace):
        source = emit([], namespace)
        tree = ast.parse(source)
        assert not [node for node in tree.body if isinstance(node, ast.ClassDef)]
        assert "Mozilla Public" in source
        assert f"vim.{namespace}" in source

    def test_future_import_comes_first(self):
        tree = ast.parse(emit([], "mo"))
        first_import = next(node for node in tree.body if isinstance(node, (ast.Import, ast.ImportFrom)))
        assert first_import.module == "__future__"

    def test_package_name_is_configurable(self):
        source = emit(VM_SCHEMA, "mo", CodeGeneratorConfig(package_name="pyvmomi_types"))
        assert "from pyvmomi_types.do import do" in source
        assert "from pyvmomi_types.enum import enum" in source

    def test_custom_banner(self):
        source = emit([], "do", CodeGeneratorConfig(license_banner="Copyright ACME.\nAll rights reserved."))
        assert source.startswith("\n# Copyright ACME.\n# All rights reserved.\n")


class TestReservedWords:
    def test_reserved_type_name_is_escaped(self):
        records = [
            {"Name": "map", "Namespace": "do", "Fields": [{"Name": "key", "Type": "xsd:string"}]},
            {"Name": "Folder", "Namespace": "mo", "Fields": [{"Name": "layout", "Type": "map"}]},
        ]
        do_source = emit(records, "do")
        mo_source = emit(records, "mo")
        ast.parse(do_source)
        ast.parse(mo_source)
        assert "class map_:" in do_source
        assert "Layout: Optional[do.map_] = None" in mo_source
        assert "do.map " not in mo_source
        assert "do.map]" not in mo_source

    def test_reserved_field_and_parameter_names(self):
        records = [
            {
                "Name": "Folder",
                "Namespace": "mo",
                "Fields": [{"Name": "none", "Type": "xsd:string"}],
                "Methods": [
                    {"Name": "CreateFolder", "Parameters": [{"Name": "map", "Type": "xsd:string"}, {"Name": "from", "Type": "xsd:int"}]}
                ],
            }
        ]
        source = emit(records, "mo")
        ast.parse(source)
        assert '    None_: str = ""' in source
        assert "def CreateFolder(self, *, map_: str, from_: int) -> None:" in source


class TestTemplates:
    def test_sample_schema_renders_valid_python(self):
        objects = load_schema_file(TEST_DATA / "vim_api.json", list(NAMESPACES))
        index = NamespaceIndex.build(objects)
        emitter = TemplateEmitter(CodeGeneratorConfig())
        for spec in DEFAULT_NAMESPACES:
            ast.parse(emitter.emit(spec, objects, index))

    def test_methods(self):
        records = [
            {
                "Name": "VirtualMachine",
                "Namespace": "mo",
                "Methods": [
                    {
                        "Name": "PowerOnVM_Task",
                        "Documentation": "Powers on this virtual machine.",
                        "Parameters": [{"Name": "_this", "Type": "ManagedObjectReference"}, {"Name": "Host", "Type": "HostSystem"}],
                        "ReturnType": "ManagedObjectReference",
                    },
                    {"Name": "ShutdownGuest"},
                ],
            },
            {"Name": "ManagedObjectReference", "Namespace": "do"},
            {"Name": "HostSystem", "Namespace": "do"},
        ]
        source = emit(records, "mo")
        ast.parse(source)
        assert (
            "    def PowerOnVM_Task(self, *, _this: Optional[do.ManagedObjectReference], host: Optional[do.HostSystem])"
            " -> Optional[do.ManagedObjectReference]:" in source
        )
        assert "    # Powers on this virtual machine." in source
        assert "    def ShutdownGuest(self) -> None:" in source

    def test_field_types_and_defaults(self):
        records = [
            {
                "Name": "VirtualMachineConfigInfo",
                "Namespace": "do",
                "Fields": [
                    {"Name": "numCPU", "Type": "xsd:int"},
                    {"Name": "modified", "Type": "xsd:dateTime"},
                    {"Name": "extraConfigKeys", "Type": "xsd:string[]"},
                    {"Name": "device", "Type": "VirtualDevice[]"},
                    {"Name": "untyped", "Type": ""},
                ],
            }
        ]
        source = emit(records, "do")
        assert "    NumCPU: int = 0" in source
        assert "    Modified: Optional[datetime.datetime] = None" in source
        assert "    ExtraConfigKeys: list[str] = field(default_factory=list)" in source
        assert "    Device: list[VirtualDevice] = field(default_factory=list)" in source
        assert "    Untyped: Any = None" in source

    def test_documentation_comments(self):
        records = [
            {
                "Name": "HostSystem",
                "Namespace": "do",
                "Documentation": "A physical host.",
                "Fields": [{"Name": "name", "Type": "xsd:string", "Documentation": "Display name.\nNot unique."}],
            }
        ]
        source = emit(records, "do")
        assert "# A physical host.\n@dataclass(kw_only=True)\nclass HostSystem:" in source
        assert "    # Display name.\n    # Not unique.\n    Name: str" in source

    def test_enum(self):
        records = [{"Name": "VirtualMachinePowerState", "Namespace": "enum", "Fields": [{"Name": "poweredOff"}, {"Name": "poweredOn"}]}]
        source = emit(records, "enum")
        ast.parse(source)
        assert "class VirtualMachinePowerState(str, Enum):" in source
        assert "    PoweredOff = 'poweredOff'" in source
        assert "    PoweredOn = 'poweredOn'" in source

    def test_empty_enum_and_record(self):
        records = [{"Name": "EmptyEnum", "Namespace": "enum"}, {"Name": "EmptyRecord", "Namespace": "do"}]
        assert "class EmptyEnum(str, Enum):\n    pass" in emit(records, "enum")
        assert "class EmptyRecord:\n    pass" in emit(records, "do")

    def test_fault_bases(self):
        records = [
            {"Name": "InvalidArgument", "Namespace": "fault", "Extends": "RuntimeFault"},
            {"Name": "RuntimeFault", "Namespace": "fault", "Extends": "MethodFault"},
            {"Name": "SystemError", "Namespace": "fault"},
            {"Name": "MethodFault", "Namespace": "do"},
        ]
        source = emit(records, "fault")
        ast.parse(source)
        assert "class RuntimeFault(do.MethodFault, Exception):" in source
        assert "class InvalidArgument(RuntimeFault, Exception):" in source
        assert "class SystemError(Exception):" in source
        assert source.index("class RuntimeFault") < source.index("class InvalidArgument")

    def test_root_faults_restore_exception_behaviour(self):
        records = [
            {"Name": "RuntimeFault", "Namespace": "fault", "Extends": "MethodFault"},
            {"Name": "NotFound", "Namespace": "fault", "Extends": "RuntimeFault"},
            {"Name": "MethodFault", "Namespace": "do"},
        ]
        source = emit(records, "fault")
        tree = ast.parse(source)
        classes = {node.name: node for node in tree.body if isinstance(node, ast.ClassDef)}

        def members(name):
            return [
                getattr(node, "name", None) or node.targets[0].id
                for node in classes[name].body
                if isinstance(node, (ast.FunctionDef, ast.Assign))
            ]

        assert members("RuntimeFault") == ["__eq__", "__hash__", "__post_init__"]
        assert members("NotFound") == []

    def test_undeclared_base_is_dropped(self, caplog):
        records = [{"Name": "HostSystem", "Namespace": "do", "Extends": "ManagedEntity"}]
        with caplog.at_level(logging.WARNING):
            source = emit(records, "do")
        assert "class HostSystem:" in source
        assert "extends undeclared type ManagedEntity" in caplog.text

    def test_template_dir_overrides_packaged_templates(self, tmp_path):
        (tmp_path / "do.py.jinja2").write_text("\n# {{ obj.name | make_public(false) }}\n")
        source = emit(VM_SCHEMA, "do", CodeGeneratorConfig(template_dir=str(tmp_path)))
        assert "# hostSystem" in source

    def test_invalid_template_raises_template_error(self, tmp_path):
        (tmp_path / "enum.py.jinja2").write_text("{% for f in obj.fields %}")
        emitter = TemplateEmitter(CodeGeneratorConfig(template_dir=str(tmp_path)))
        with pytest.raises(TemplateError, match="enum.py.jinja2"):
            emitter.check_templates(DEFAULT_NAMESPACES)

    def test_undefined_variable_raises_template_error(self, tmp_path):
        (tmp_path / "do.py.jinja2").write_text("{{ obj.nope }}")
        with pytest.raises(TemplateError, match="Failed to render HostSystem"):
            emit(VM_SCHEMA, "do", CodeGeneratorConfig(template_dir=str(tmp_path)))


def test_order_by_inheritance_keeps_schema_order_otherwise():
    objects = parse_schema(
        [
            {"Name": "A", "Namespace": "do"},
            {"Name": "C", "Namespace": "do", "Extends": "B"},
            {"Name": "B", "Namespace": "do", "Extends": "D"},
            {"Name": "D", "Namespace": "do"},
            {"Name": "E", "Namespace": "do", "Extends": "Unknown"},
        ],
        ["do"],
    )
    assert [obj.name for obj in order_by_inheritance(objects)] == ["A", "D", "B", "C", "E"]
