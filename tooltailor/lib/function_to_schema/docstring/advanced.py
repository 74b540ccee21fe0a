import re
from typing import List

from docstring_parser import parse as parse_docstring

from .comment import DocComment, DocTag


def _join_description(parsed) -> str:
    description = parsed.short_description or ""
    if parsed.long_description:
        if description:
            separator = "\n\n" if parsed.blank_after_short_description else "\n"
            description += separator + parsed.long_description
        else:
            description = parsed.long_description
    return description


def parse_with_docstring_parser(prose: str) -> DocComment:
    """
    Read a Google, ReST, Numpydoc or Epydoc docstring body.

    Documented parameters become ``param`` tags with their name and declared
    type already resolved. Raises ``docstring_parser.ParseError`` when the
    text cannot be read in any style.
    """
    if not prose.strip():
        return DocComment()

    parsed = parse_docstring(prose)

    tags: List[DocTag] = []
    for param in parsed.params:
        text = re.sub(r"\s+", " ", (param.description or "").strip())
        types = [param.type_name] if param.type_name else []
        tags.append(DocTag("param", text, name=param.arg_name, types=types))

    return DocComment(description=_join_description(parsed), tags_list=tags)
