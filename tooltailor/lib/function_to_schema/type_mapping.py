import inspect
import re
from typing import Any, Optional

from pydantic import TypeAdapter
from pydantic.errors import PydanticUserError

from tooltailor.exceptions import UnsupportedTypeError
from tooltailor.logger import ConversionLog
from tooltailor.tool_types import JsonSchemaType


JSON_SCHEMA_TYPES = (
    "string",
    "integer",
    "number",
    "boolean",
    "array",
    "object",
    "null",
)

TYPE_MAPPING = {
    "String": "string",
    "Symbol": "string",
    "str": "string",
    "string": "string",
    "Integer": "integer",
    "int": "integer",
    "integer": "integer",
    "Float": "number",
    "Numeric": "number",
    "Decimal": "number",
    "float": "number",
    "number": "number",
    "Boolean": "boolean",
    "TrueClass": "boolean",
    "FalseClass": "boolean",
    "true": "boolean",
    "false": "boolean",
    "bool": "boolean",
    "boolean": "boolean",
    "Array": "array",
    "list": "array",
    "List": "array",
    "tuple": "array",
    "Tuple": "array",
    "Set": "array",
    "set": "array",
    "array": "array",
    "Hash": "object",
    "Object": "object",
    "dict": "object",
    "Dict": "object",
    "object": "object",
    "NilClass": "null",
    "Null": "null",
    "nil": "null",
    "None": "null",
    "NoneType": "null",
    "null": "null",
}

# Array<String>, list[str], Hash{String => Integer}
GENERIC_SUFFIX = re.compile(r"^([^<\[{(]+)[<\[{(].*$")


def normalize_type_name(type_name: str) -> str:
    name = type_name.strip()
    match = GENERIC_SUFFIX.match(name)
    if match:
        name = match.group(1).strip()
    return name


def map_type(
    type_name: Optional[str],
    strict: bool = False,
    log: Optional[ConversionLog] = None,
) -> JsonSchemaType:
    """
    Map a documented type name to a JSON Schema primitive type.

    Both the Ruby-flavoured names used in YARD style tags (``String``,
    ``Hash``, ``NilClass``) and Python builtin names (``str``, ``dict``,
    ``None``) are understood. Unknown names degrade to ``string`` with a
    warning, or raise ``UnsupportedTypeError`` when ``strict`` is set.
    """
    if type_name is None:
        return "string"

    normalized = normalize_type_name(type_name)
    if normalized in TYPE_MAPPING:
        return TYPE_MAPPING[normalized]

    if strict:
        raise UnsupportedTypeError(type_name)

    if log is not None:
        log.warning(f"Unsupported type '{type_name}', falling back to 'string'")
    return "string"


def _primitive_from_json_schema(schema: dict) -> Optional[JsonSchemaType]:
    schema_type = schema.get("type")
    if isinstance(schema_type, str) and schema_type in JSON_SCHEMA_TYPES:
        return schema_type

    # Optional[X] renders as anyOf [X, null]
    variants = schema.get("anyOf")
    if variants:
        types = [_primitive_from_json_schema(variant) for variant in variants]
        non_null = [t for t in types if t != "null"]
        if len(non_null) == 1 and non_null[0] is not None:
            return non_null[0]

    return None


def map_annotation(annotation: Any) -> Optional[JsonSchemaType]:
    """Reduce a type hint to one JSON Schema primitive, or None if it has no single one."""
    if annotation is inspect.Parameter.empty:
        return None

    try:
        schema = TypeAdapter(annotation).json_schema()
    except (PydanticUserError, TypeError, ValueError):
        return None

    return _primitive_from_json_schema(schema)
