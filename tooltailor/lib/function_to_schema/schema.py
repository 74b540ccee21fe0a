import json
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)

from tooltailor.exceptions import InvalidTagFormatError
from tooltailor.logger import ConversionLog
from tooltailor.tool_types import JsonSchemaType, PropertySchema, ToolSchema

from .docstring.comment import DocComment
from .docstring.tags import ParsedTag, is_known_tag, parse_tag
from .type_mapping import map_annotation, map_type


class ParameterRecord(BaseModel):
    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    name: str = Field(frozen=True)
    required: bool
    type: JsonSchemaType = "string"
    description: str = ""
    enum: Optional[List[Union[StrictBool, StrictInt, StrictFloat, StrictStr]]] = None
    items_type: Optional[JsonSchemaType] = Field(default=None, alias="itemsType")
    min_items: Optional[NonNegativeInt] = Field(default=None, alias="minItems")
    max_items: Optional[PositiveInt] = Field(default=None, alias="maxItems")

    def to_property(self) -> PropertySchema:
        prop: PropertySchema = {"type": self.type, "description": self.description}
        if self.enum:
            prop["enum"] = list(self.enum)
        if self.items_type is not None:
            prop["items"] = {"type": self.items_type}
        if self.min_items is not None:
            prop["minItems"] = self.min_items
        if self.max_items is not None:
            prop["maxItems"] = self.max_items
        return prop


# param before values before array constraints: array tags force the type last
TAG_ORDER = ("param", "values", "items_type", "min_items", "max_items")


class SchemaAssembler:
    """
    Folds annotations and documentation tags onto a parameter skeleton.

    Tags are applied kind by kind in ``TAG_ORDER``; within a kind the last
    tag for a parameter wins. Malformed tags and tags naming unknown
    parameters are skipped with a warning unless ``strict_tags`` is set, in
    which case malformed tags raise ``InvalidTagFormatError``.
    """

    def __init__(
        self,
        log: ConversionLog,
        strict_tags: bool = False,
        strict_types: bool = False,
    ):
        self.log = log
        self.strict_tags = strict_tags
        self.strict_types = strict_types

    def apply_annotations(
        self, records: List[ParameterRecord], hints: Dict[str, Any]
    ) -> None:
        for record in records:
            if record.name not in hints:
                continue
            schema_type = map_annotation(hints[record.name])
            if schema_type is None:
                self.log.debug(
                    f"Annotation {hints[record.name]!r} of '{record.name}' has no single JSON Schema type"
                )
                continue
            record.type = schema_type

    def parse_tags(self, doc: DocComment, function_name: str) -> List[ParsedTag]:
        parsed: List[ParsedTag] = []
        for tag_name in TAG_ORDER:
            for tag in doc.tags(tag_name):
                try:
                    parsed.append(parse_tag(tag, strict=self.strict_tags))
                except InvalidTagFormatError as e:
                    if self.strict_tags:
                        raise
                    self.log.warning(f"{e} in documentation of '{function_name}', skipping")

        for tag in doc.tags():
            if not is_known_tag(tag.tag_name):
                self.log.debug(f"Ignoring @{tag.tag_name} tag on '{function_name}'")

        return parsed

    def apply_tag(self, record: ParameterRecord, tag: ParsedTag) -> None:
        if tag.kind == "param":
            types, description = tag.value
            record.description = description
            if types:
                record.type = map_type(types[0], strict=self.strict_types, log=self.log)
        elif tag.kind == "values":
            record.enum = tag.value
        elif tag.kind == "items_type":
            record.type = "array"
            record.items_type = map_type(tag.value, strict=self.strict_types, log=self.log)
        elif tag.kind == "min_items":
            record.type = "array"
            record.min_items = tag.value
        elif tag.kind == "max_items":
            record.type = "array"
            record.max_items = tag.value

    def apply_tags(
        self,
        records: List[ParameterRecord],
        tags: List[ParsedTag],
        function_name: str,
    ) -> None:
        by_name = {record.name: record for record in records}
        for tag in tags:
            record = by_name.get(tag.parameter_name)
            if record is None:
                self.log.warning(
                    f"@{tag.kind} tag on '{function_name}' names unknown parameter '{tag.parameter_name}'"
                )
                continue
            self.log.debug(
                f"Applying @{tag.kind} to '{function_name}.{tag.parameter_name}': {tag.value!r}"
            )
            self.apply_tag(record, tag)

        for record in records:
            if (
                record.min_items is not None
                and record.max_items is not None
                and record.min_items > record.max_items
            ):
                self.log.warning(
                    f"Parameter '{record.name}' of '{function_name}' has minItems "
                    f"{record.min_items} greater than maxItems {record.max_items}"
                )

    def assemble(
        self,
        name: str,
        records: List[ParameterRecord],
        doc: DocComment,
        hints: Optional[Dict[str, Any]] = None,
    ) -> ToolSchema:
        if hints:
            self.apply_annotations(records, hints)
        self.apply_tags(records, self.parse_tags(doc, name), name)
        return build_tool_schema(name, doc.description, records)


def build_tool_schema(
    name: str, description: str, records: List[ParameterRecord]
) -> ToolSchema:
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": {
                "type": "object",
                "properties": {record.name: record.to_property() for record in records},
                "required": [record.name for record in records if record.required],
            },
        },
    }


def serialize_schema(schema: ToolSchema) -> str:
    return json.dumps(schema, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
