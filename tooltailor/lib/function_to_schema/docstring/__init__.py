"""
Documentation comment sub-module.

Documentation is looked up from the runtime docstring or, failing that, from
the source file through the shared ``DocIndex``. ``@tag`` lines are split
off and parsed by the tag grammars; the remaining prose is read with
``docstring_parser`` and falls back to a regex reader.
"""

from .comment import DocComment, DocTag
from .index import DocIndex, SourceDoc, build_file_index, doc_index
from .parser import parse_doc_comment, read_documentation, split_tags
from .tags import TAG_PARSERS, ParsedTag, is_known_tag, parse_tag
