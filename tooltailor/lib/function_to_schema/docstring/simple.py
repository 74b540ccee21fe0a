import re
from typing import List, Optional

from ..cleaning import SECTION_HEADER, clean_description
from .comment import DocComment, DocTag


ARGUMENTS_HEADER = re.compile(
    r"^\s*(Args?|Arguments?|Keyword Args|Parameters?|Params?)\s*:\s*$", re.IGNORECASE
)
# name (type): description
ARGUMENT_LINE = re.compile(r"^\s*\**(\w+)\s*(?:\(([^)]*)\))?\s*:\s*(.*)$")


def _arguments_start(lines: List[str]) -> Optional[int]:
    return next(
        (position for position, line in enumerate(lines) if ARGUMENTS_HEADER.match(line)),
        None,
    )


def parse_with_regex(prose: str) -> DocComment:
    """Read a Google-style ``Args:`` section without docstring_parser."""
    lines = prose.strip().splitlines()
    start = _arguments_start(lines)
    if start is None:
        return DocComment(description=clean_description(prose))

    tags: List[DocTag] = []
    name: Optional[str] = None
    types: List[str] = []
    text: List[str] = []

    for line in lines[start + 1 :]:
        if SECTION_HEADER.match(line) and line.rstrip().endswith(":"):
            break

        match = ARGUMENT_LINE.match(line)
        if match:
            if name is not None:
                tags.append(DocTag("param", " ".join(text).strip(), name=name, types=types))
            name, type_name, first = match.groups()
            types = [type_name.strip()] if type_name else []
            text = [first] if first else []
        elif name is not None and line.strip():
            text.append(line.strip())

    if name is not None:
        tags.append(DocTag("param", " ".join(text).strip(), name=name, types=types))

    return DocComment(description=clean_description("\n".join(lines[:start])), tags_list=tags)
