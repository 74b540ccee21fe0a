import logging

import pytest
from pydantic import ValidationError

from tooltailor.exceptions import InvalidTagFormatError, UnsupportedTypeError
from tooltailor.lib.function_to_schema.docstring import DocComment, DocTag
from tooltailor.lib.function_to_schema.schema import (
    ParameterRecord,
    SchemaAssembler,
    build_tool_schema,
    serialize_schema,
)
from tooltailor.logger import ConversionLog


def make_assembler(**kwargs):
    return SchemaAssembler(ConversionLog("debug", logging.getLogger("tests.schema")), **kwargs)


def records(*names):
    return [ParameterRecord(name=name, required=True) for name in names]


def test_parameter_record_defaults_and_aliases():
    record = ParameterRecord(name="tags", required=False, itemsType="string", minItems=0)

    assert record.type == "string"
    assert record.description == ""
    assert record.items_type == "string"
    assert record.min_items == 0
    assert record.max_items is None


def test_parameter_record_name_is_immutable():
    record = ParameterRecord(name="location", required=True)

    with pytest.raises(ValidationError):
        record.name = "place"


def test_parameter_record_validates_constraints():
    record = ParameterRecord(name="tags", required=True)

    with pytest.raises(ValidationError):
        record.max_items = 0
    with pytest.raises(ValidationError):
        record.min_items = -1
    with pytest.raises(ValidationError):
        record.type = "text"


def test_property_omits_absent_fields():
    assert ParameterRecord(name="text", required=True).to_property() == {
        "type": "string",
        "description": "",
    }


def test_property_key_order():
    record = ParameterRecord(
        name="tags",
        required=True,
        type="array",
        description="Tags",
        enum=["a", "b"],
        items_type="string",
        min_items=1,
        max_items=3,
    )

    assert list(record.to_property()) == [
        "type",
        "description",
        "enum",
        "items",
        "minItems",
        "maxItems",
    ]
    assert record.to_property()["items"] == {"type": "string"}


def test_param_tags_set_description_and_type():
    params = records("location", "count")
    doc = DocComment(
        tags_list=[
            DocTag("param", "location [String] The city"),
            DocTag("param", "count [Integer] How many"),
        ]
    )

    schema = make_assembler().assemble("lookup", params, doc)

    props = schema["function"]["parameters"]["properties"]
    assert props["location"] == {"type": "string", "description": "The city"}
    assert props["count"] == {"type": "integer", "description": "How many"}


def test_values_keep_string_type_and_order():
    doc = DocComment(tags_list=[DocTag("values", 'unit ["B", "A", "C"]')])

    schema = make_assembler().assemble("convert", records("unit"), doc)

    unit = schema["function"]["parameters"]["properties"]["unit"]
    assert unit["type"] == "string"
    assert unit["enum"] == ["B", "A", "C"]


def test_array_tags_force_array_over_declared_type():
    doc = DocComment(
        tags_list=[
            DocTag("param", "tags [String] Labels to attach"),
            DocTag("items_type", "tags Integer"),
        ]
    )

    schema = make_assembler().assemble("label", records("tags"), doc)

    tags = schema["function"]["parameters"]["properties"]["tags"]
    assert tags == {
        "type": "array",
        "description": "Labels to attach",
        "items": {"type": "integer"},
    }


def test_item_count_tags_force_array():
    doc = DocComment(
        tags_list=[DocTag("max_items", "ids 5"), DocTag("min_items", "ids 1")]
    )

    schema = make_assembler().assemble("fetch", records("ids", "other"), doc)

    props = schema["function"]["parameters"]["properties"]
    assert props["ids"] == {
        "type": "array",
        "description": "",
        "minItems": 1,
        "maxItems": 5,
    }
    assert props["other"] == {"type": "string", "description": ""}


def test_last_tag_of_a_kind_wins():
    doc = DocComment(
        tags_list=[
            DocTag("values", 'unit ["a"]'),
            DocTag("values", 'unit ["b", "c"]'),
        ]
    )

    schema = make_assembler().assemble("f", records("unit"), doc)

    assert schema["function"]["parameters"]["properties"]["unit"]["enum"] == ["b", "c"]


def test_unknown_parameter_is_ignored_with_warning(caplog):
    doc = DocComment(tags_list=[DocTag("param", "locaton [String] Typo")])

    with caplog.at_level(logging.WARNING, logger="tests.schema"):
        schema = make_assembler().assemble("f", records("location"), doc)

    assert schema["function"]["parameters"]["properties"]["location"]["description"] == ""
    assert "locaton" in caplog.text


def test_malformed_tag_is_skipped_with_warning(caplog):
    doc = DocComment(
        tags_list=[
            DocTag("values", "unit Celsius"),
            DocTag("param", "unit [String] The unit"),
        ]
    )

    with caplog.at_level(logging.WARNING, logger="tests.schema"):
        schema = make_assembler().assemble("f", records("unit"), doc)

    assert schema["function"]["parameters"]["properties"]["unit"] == {
        "type": "string",
        "description": "The unit",
    }
    assert "@values" in caplog.text


def test_malformed_tag_raises_when_strict():
    doc = DocComment(tags_list=[DocTag("max_items", "ids none")])

    with pytest.raises(InvalidTagFormatError):
        make_assembler(strict_tags=True).assemble("f", records("ids"), doc)


def test_unknown_type_when_strict():
    doc = DocComment(tags_list=[DocTag("param", "widget [Widget] A widget")])

    with pytest.raises(UnsupportedTypeError):
        make_assembler(strict_types=True).assemble("f", records("widget"), doc)

    schema = make_assembler().assemble("f", records("widget"), doc)
    assert schema["function"]["parameters"]["properties"]["widget"]["type"] == "string"


def test_annotations_seed_type_and_docs_override():
    params = records("count", "ratio", "name")
    doc = DocComment(tags_list=[DocTag("param", "count [String] Now a string")])

    schema = make_assembler().assemble(
        "f", params, doc, hints={"count": int, "ratio": float, "name": object}
    )

    props = schema["function"]["parameters"]["properties"]
    assert props["count"]["type"] == "string"
    assert props["ratio"]["type"] == "number"
    assert props["name"]["type"] == "string"


def test_required_follows_declaration_order():
    params = [
        ParameterRecord(name="b", required=True),
        ParameterRecord(name="a", required=False),
        ParameterRecord(name="c", required=True),
    ]

    schema = build_tool_schema("f", "", params)

    assert list(schema["function"]["parameters"]["properties"]) == ["b", "a", "c"]
    assert schema["function"]["parameters"]["required"] == ["b", "c"]


def test_serialization_is_compact_and_keeps_unicode():
    schema = build_tool_schema("f", "Température", [])

    assert serialize_schema(schema) == (
        '{"type":"function","function":{"name":"f","description":"Température",'
        '"parameters":{"type":"object","properties":{},"required":[]}}}'
    )


def test_serialization_refuses_non_finite_numbers():
    schema = build_tool_schema("f", "", [])
    schema["function"]["parameters"]["properties"]["level"] = {
        "type": "number",
        "description": "",
        "enum": [float("nan")],
    }

    with pytest.raises(ValueError):
        serialize_schema(schema)


def test_non_finite_enum_never_reaches_the_record():
    doc = DocComment(tags_list=[DocTag("values", "level [1e999, 2]")])

    schema = make_assembler().assemble("f", records("level"), doc)

    assert "enum" not in schema["function"]["parameters"]["properties"]["level"]
