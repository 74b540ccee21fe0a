import re


SECTION_HEADER = re.compile(
    r"^\s*(Args?|Arguments?|Keyword Args|Parameters?|Params?|Returns?|Yields?|"
    r"Raises?|Examples?|Notes?|See Also|Attributes)\s*:?\s*$",
    re.IGNORECASE,
)
UNDERLINE = re.compile(r"^\s*-{3,}\s*$")
FIELD_LIST = re.compile(r"^\s*:(param|type|returns?|rtype|raises?)\b.*$", re.IGNORECASE)


def clean_description(description: str) -> str:
    """
    Reduce documentation prose to the tool description.

    Everything from the first section header (Google ``Args:`` style or a
    NumPy underlined heading) onwards is dropped, as are reST field-list
    lines. Trailing whitespace is removed from each line and runs of blank
    lines collapse to a single paragraph break.
    """
    if not description:
        return ""

    kept = []
    lines = description.splitlines()
    for position, line in enumerate(lines):
        underlined = position + 1 < len(lines) and UNDERLINE.match(lines[position + 1])
        if SECTION_HEADER.match(line) and (line.rstrip().endswith(":") or underlined):
            break
        if FIELD_LIST.match(line):
            continue
        kept.append(line.rstrip())

    cleaned = "\n".join(kept)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    return cleaned.strip()
