import dataclasses
import inspect
import re
from typing import Any, List, Optional, Tuple

from docstring_parser import ParseError

from tooltailor.exceptions import DocumentationLookupError
from tooltailor.logger import ConversionLog

from .advanced import parse_with_docstring_parser
from .comment import DocComment, DocTag
from .index import DocIndex, doc_index
from .simple import parse_with_regex
from ..cleaning import clean_description


TAG_LINE = re.compile(r"^@(\w+)(?:\s+(.*))?$")


def split_tags(text: str) -> Tuple[str, List[DocTag]]:
    """
    Separate ``@tag`` lines from the surrounding prose.

    A tag starts at an unindented ``@name`` line and swallows the indented
    lines that follow it. A blank or unindented line ends the tag.
    """
    prose_lines: List[str] = []
    tags: List[DocTag] = []
    current: Optional[List[str]] = None
    current_name = None

    def flush():
        if current_name is not None:
            tags.append(DocTag(current_name, " ".join(current).strip()))

    for line in text.split("\n"):
        match = TAG_LINE.match(line)
        if match:
            flush()
            current_name = match.group(1)
            current = [match.group(2) or ""]
            continue

        if current_name is not None and line.strip() and line[:1].isspace():
            current.append(line.strip())
            continue

        flush()
        current_name = None
        current = None
        prose_lines.append(line)

    flush()

    return "\n".join(prose_lines).strip(), tags


def parse_doc_comment(
    raw: Optional[str], log: Optional[ConversionLog] = None
) -> DocComment:
    if not raw or not raw.strip():
        return DocComment()

    text = inspect.cleandoc(raw)
    prose, tags = split_tags(text)

    try:
        prose_doc = parse_with_docstring_parser(prose)
    except ParseError as e:
        if log is not None:
            log.warning(f"Falling back to plain docstring parsing: {e}")
        prose_doc = parse_with_regex(prose)

    return DocComment(
        description=clean_description(prose_doc.description),
        tags_list=prose_doc.tags_list + tags,
    )


def _runtime_docstring(obj: Any) -> Optional[str]:
    doc = getattr(obj, "__doc__", None)
    if not isinstance(doc, str) or not doc.strip():
        return None
    # dataclasses fill in "Name(field: type, ...)" when the class has no docstring
    if dataclasses.is_dataclass(obj) and doc.startswith(f"{obj.__name__}("):
        return None
    return doc


def read_documentation(
    obj: Any,
    index: Optional[DocIndex] = None,
    log: Optional[ConversionLog] = None,
) -> DocComment:
    raw = _runtime_docstring(obj)

    if raw is None:
        try:
            entry = (index if index is not None else doc_index).lookup(obj)
        except DocumentationLookupError as e:
            if log is not None:
                log.warning(f"{e}; continuing without documentation")
            entry = None
        raw = entry.text if entry is not None else None

    if raw is None and log is not None:
        log.debug(f"No documentation found for '{getattr(obj, '__qualname__', obj)}'")

    return parse_doc_comment(raw, log)
