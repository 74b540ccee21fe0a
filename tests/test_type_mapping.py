import logging
from typing import Any, Dict, List, Literal, Optional, Union

import pytest

from tooltailor.exceptions import UnsupportedTypeError
from tooltailor.lib.function_to_schema.type_mapping import map_annotation, map_type
from tooltailor.logger import ConversionLog


@pytest.mark.parametrize(
    "type_name, expected",
    [
        ("String", "string"),
        ("Integer", "integer"),
        ("Float", "number"),
        ("Numeric", "number"),
        ("TrueClass", "boolean"),
        ("FalseClass", "boolean"),
        ("Boolean", "boolean"),
        ("Array", "array"),
        ("Hash", "object"),
        ("Object", "object"),
        ("NilClass", "null"),
        ("Null", "null"),
        ("str", "string"),
        ("int", "integer"),
        ("float", "number"),
        ("bool", "boolean"),
        ("list", "array"),
        ("dict", "object"),
        ("None", "null"),
    ],
)
def test_known_type_names(type_name, expected):
    assert map_type(type_name) == expected


def test_generic_suffix_is_ignored():
    assert map_type("Array<String>") == "array"
    assert map_type("list[str]") == "array"
    assert map_type("Dict[str, int]") == "object"


def test_missing_type_name_is_string():
    assert map_type(None) == "string"


def test_unknown_type_degrades_to_string_with_warning(caplog):
    log = ConversionLog("warn", logging.getLogger("tests.type_mapping"))

    with caplog.at_level(logging.WARNING, logger="tests.type_mapping"):
        assert map_type("Widget", log=log) == "string"

    assert "Widget" in caplog.text


def test_unknown_type_raises_when_strict():
    with pytest.raises(UnsupportedTypeError) as exc_info:
        map_type("Widget", strict=True)

    assert exc_info.value.type_name == "Widget"
    assert "Widget" in str(exc_info.value)


def test_type_names_are_case_sensitive():
    with pytest.raises(UnsupportedTypeError):
        map_type("STRING", strict=True)


@pytest.mark.parametrize(
    "annotation, expected",
    [
        (str, "string"),
        (int, "integer"),
        (float, "number"),
        (bool, "boolean"),
        (List[str], "array"),
        (list, "array"),
        (Dict[str, int], "object"),
        (type(None), "null"),
        (Optional[int], "integer"),
        (Literal["a", "b"], "string"),
    ],
)
def test_annotations(annotation, expected):
    assert map_annotation(annotation) == expected


def test_annotations_without_single_type():
    assert map_annotation(Any) is None
    assert map_annotation(Union[int, str]) is None


def test_unsupported_annotation():
    class Widget:
        pass

    assert map_annotation(Widget) is None
