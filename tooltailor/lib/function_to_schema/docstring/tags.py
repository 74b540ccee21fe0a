"""
Micro-grammars for documentation tags.

Every grammar has the shape ``<parameter-name> <payload>`` and lives behind
its own ``parse_<tag>_tag`` function. ``parse_tag`` dispatches on the tag
name through ``TAG_PARSERS``, so adding a tag means adding a function and a
mapping entry.
"""

import json
import math
import re
from typing import Any, Callable, Dict, List, NamedTuple

from tooltailor.exceptions import InvalidTagFormatError

from .comment import DocTag


class ParsedTag(NamedTuple):
    kind: str
    parameter_name: str
    value: Any


ITEMS_TYPES = ("String", "Integer", "Float", "Boolean", "Object", "Array", "Null")

PARAM_TAG_FORMAT = re.compile(
    r"^(?:\[(?P<leading_types>[^\]]*)\]\s+)?"
    r"(?P<name>[A-Za-z_]\w*):?"
    r"(?:\s+\[(?P<types>[^\]]*)\])?"
    r"(?:\s+(?P<text>.*))?$",
    re.DOTALL,
)
VALUES_TAG_FORMAT = re.compile(r"^(\S+)\s+\[(.+)\]$", re.DOTALL)
ITEMS_TYPE_TAG_FORMAT = re.compile(r"^(\S+)\s+(?:\[(\w+)\]|(\w+))$")
ITEM_COUNT_TAG_FORMAT = re.compile(r"^(\S+)\s+([0-9]+)$")
BAREWORD = re.compile(r"^[A-Za-z0-9_.\-]+(?: [A-Za-z0-9_.\-]+)*$")


def _parameter_name(raw: str) -> str:
    return raw[:-1] if raw.endswith(":") else raw


def _split_types(types_text: str) -> List[str]:
    return [t.strip() for t in types_text.split(",") if t.strip()]


def parse_param_tag(tag: DocTag, strict: bool = False) -> ParsedTag:
    if tag.name is not None:
        return ParsedTag("param", tag.name, (list(tag.types or []), tag.text))

    text = tag.text.strip()
    match = PARAM_TAG_FORMAT.match(text)
    if not match:
        raise InvalidTagFormatError(
            tag.tag_name,
            tag.text,
            "expected '<name> [Type, ...] <description>'",
        )

    types_text = match.group("types") or match.group("leading_types") or ""
    description = (match.group("text") or "").strip()
    return ParsedTag(
        "param", match.group("name"), (_split_types(types_text), description)
    )


def _parse_bareword_list(values_text: str) -> List[str]:
    values = [value.strip() for value in values_text.split(",")]
    if not all(BAREWORD.match(value) for value in values):
        raise ValueError("not a list of unquoted barewords")
    return values


def _check_scalar_values(tag: DocTag, values: Any) -> List[Any]:
    if not isinstance(values, list) or not values:
        raise InvalidTagFormatError(
            tag.tag_name, tag.text, "values must be a non-empty array"
        )
    for value in values:
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidTagFormatError(
                tag.tag_name, tag.text, f"values must be finite numbers, got {value}"
            )
        if value is None or isinstance(value, (list, dict)):
            raise InvalidTagFormatError(
                tag.tag_name,
                tag.text,
                f"values must be strings, numbers or booleans, got {json.dumps(value)}",
            )
    return values


def parse_values_tag(tag: DocTag, strict: bool = False) -> ParsedTag:
    text = tag.text.strip()
    match = VALUES_TAG_FORMAT.match(text)
    if not match:
        raise InvalidTagFormatError(
            tag.tag_name,
            tag.text,
            "expected '<name> [value1, value2, ...]'. Values should be a JSON array",
        )

    name, values_text = match.groups()

    def reject_constant(constant: str):
        raise InvalidTagFormatError(
            tag.tag_name, tag.text, f"{constant} is not a JSON value"
        )

    try:
        values = json.loads(f"[{values_text}]", parse_constant=reject_constant)
    except json.JSONDecodeError as e:
        if strict:
            raise InvalidTagFormatError(
                tag.tag_name, tag.text, f"invalid values format: {e}"
            )
        try:
            values = _parse_bareword_list(values_text)
        except ValueError:
            raise InvalidTagFormatError(
                tag.tag_name, tag.text, f"invalid values format: {e}"
            )

    return ParsedTag("values", _parameter_name(name), _check_scalar_values(tag, values))


def parse_items_type_tag(tag: DocTag, strict: bool = False) -> ParsedTag:
    text = tag.text.strip()
    match = ITEMS_TYPE_TAG_FORMAT.match(text)
    items_type = match and (match.group(2) or match.group(3))
    if items_type not in ITEMS_TYPES:
        raise InvalidTagFormatError(
            tag.tag_name,
            tag.text,
            f"expected '<name> <Type>' with Type one of {', '.join(ITEMS_TYPES)}",
        )

    name = match.group(1)
    return ParsedTag("items_type", _parameter_name(name), items_type)


def _parse_item_count(kind: str, tag: DocTag, minimum: int) -> ParsedTag:
    text = tag.text.strip()
    match = ITEM_COUNT_TAG_FORMAT.match(text)
    if not match:
        raise InvalidTagFormatError(
            tag.tag_name, tag.text, "expected '<name> <integer>'"
        )

    name, count_text = match.groups()
    count = int(count_text)
    if count < minimum:
        raise InvalidTagFormatError(
            tag.tag_name, tag.text, f"value must be at least {minimum}, got {count}"
        )
    return ParsedTag(kind, _parameter_name(name), count)


def parse_min_items_tag(tag: DocTag, strict: bool = False) -> ParsedTag:
    return _parse_item_count("min_items", tag, minimum=0)


def parse_max_items_tag(tag: DocTag, strict: bool = False) -> ParsedTag:
    return _parse_item_count("max_items", tag, minimum=1)


TAG_PARSERS: Dict[str, Callable[..., ParsedTag]] = {
    "param": parse_param_tag,
    "values": parse_values_tag,
    "items_type": parse_items_type_tag,
    "min_items": parse_min_items_tag,
    "max_items": parse_max_items_tag,
}


def is_known_tag(tag_name: str) -> bool:
    return tag_name in TAG_PARSERS


def parse_tag(tag: DocTag, strict: bool = False) -> ParsedTag:
    try:
        parser = TAG_PARSERS[tag.tag_name]
    except KeyError:
        raise InvalidTagFormatError(tag.tag_name, tag.text, "unknown tag")
    return parser(tag, strict=strict)
