"""
Identifier and type utilities shared by the generator and its templates.
"""

import keyword

# XSD local type name -> native Python annotation
XSD_TO_PYTHON_TYPES = {
    "string": "str",
    "token": "str",
    "anyURI": "str",
    "float": "float",
    "double": "float",
    "decimal": "Decimal",
    "byte": "int",
    "short": "int",
    "int": "int",
    "integer": "int",
    "long": "int",
    "unsignedByte": "int",
    "unsignedShort": "int",
    "unsignedInt": "int",
    "unsignedLong": "int",
    "boolean": "bool",
    "dateTime": "datetime.datetime",
    "date": "datetime.date",
    "time": "datetime.time",
    "base64Binary": "bytes",
    "hexBinary": "bytes",
    "anyType": "Any",
}

# Default expression for a primitive scalar field, None where there is no zero value
ZERO_VALUES = {
    "str": '""',
    "int": "0",
    "float": "0.0",
    "bool": "False",
    "bytes": 'b""',
    "Decimal": "Decimal(0)",
}

ARRAY_SUFFIX = "[]"
RESERVED_SUFFIX = "_"

# Names that can't be used as identifiers in generated modules: keywords, plus
# the builtins and helpers the generated code refers to from class bodies, and
# "self" which is taken by method stubs.
RESERVED_WORDS = frozenset(
    [
        *keyword.kwlist,
        *keyword.softkwlist,
        "Any",
        "Decimal",
        "Enum",
        "Exception",
        "Optional",
        "bool",
        "bytes",
        "dataclass",
        "datetime",
        "dict",
        "field",
        "float",
        "int",
        "list",
        "map",
        "object",
        "self",
        "str",
        "type",
    ]
)


def strip_namespace(type_token: str) -> str:
    """Drop an XML namespace prefix: ``xsd:int`` -> ``int``."""
    _, _, local = type_token.rpartition(":")
    return local


def to_native_type(type_token: str) -> str:
    """Map a schema type-token to the Python annotation used for it.

    Examples:
        "xsd:int" -> "int"
        "string[]" -> "list[str]"
        "HostSystem[]" -> "list[HostSystem]"
        "HostSystem" -> "Optional[HostSystem]"
        "" -> ""
    """
    if not type_token:
        return ""

    local = strip_namespace(type_token)
    native = XSD_TO_PYTHON_TYPES.get(local)
    if native is not None:
        return native

    if local.endswith(ARRAY_SUFFIX):
        base = local[: -len(ARRAY_SUFFIX)]
        if base in XSD_TO_PYTHON_TYPES:
            return f"list[{XSD_TO_PYTHON_TYPES[base]}]"
        return f"list[{escape_reserved(base)}]"

    return f"Optional[{escape_reserved(local)}]"


def has_zero_value(native_type: str) -> bool:
    return native_type in ZERO_VALUES


def zero_value(native_type: str) -> str:
    """Default expression for a field holding a primitive scalar."""
    return ZERO_VALUES.get(native_type, "None")


def escape_reserved(identifier: str) -> str:
    """Append ``_`` to identifiers that collide with a reserved word."""
    if identifier in RESERVED_WORDS:
        return identifier + RESERVED_SUFFIX
    return identifier


def make_public(identifier: str, public: bool = True) -> str:
    """Upper-case (public) or lower-case (private) the first character only."""
    if not identifier:
        return identifier
    first = identifier[0].upper() if public else identifier[0].lower()
    return first + identifier[1:]


def comment(text: str | None) -> str:
    """Render free text as a ``#`` comment block.

    Returns an empty string when there is nothing to say, otherwise the block
    starts with a line break so it can be placed right before a declaration.
    """
    if not text or not text.strip():
        return ""
    return "".join(("\n# " + line.lstrip()).rstrip() for line in text.splitlines())
