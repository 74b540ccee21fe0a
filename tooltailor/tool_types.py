from typing import Any, Dict, List, Literal, TypedDict, Union

JsonSchemaType = Literal[
    "string", "integer", "number", "boolean", "array", "object", "null"
]

EnumValue = Union[str, int, float, bool]

OutputFormat = Literal["json", "dict"]


class ItemsSchema(TypedDict):
    type: JsonSchemaType


class PropertySchema(TypedDict, total=False):
    type: JsonSchemaType
    description: str
    enum: List[EnumValue]
    items: ItemsSchema
    minItems: int
    maxItems: int


class ParametersSchema(TypedDict):
    type: str
    properties: Dict[str, PropertySchema]
    required: List[str]


class FunctionSchema(TypedDict):
    name: str
    description: str
    parameters: ParametersSchema


class ToolSchema(TypedDict):
    type: str
    function: FunctionSchema


SchemaOutput = Union[str, Dict[str, Any]]
