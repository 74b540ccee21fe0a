from .converter import (
    ConversionOptions,
    ConversionOutcome,
    Converter,
    SchemaTool,
    batch_convert,
    convert,
    get_default_converter,
    to_schema,
)

from .inspection import (
    ParameterKind,
    build_parameter_records,
    describe_signature,
    resolve_target,
)
from .schema import ParameterRecord, SchemaAssembler, build_tool_schema, serialize_schema
from .type_mapping import map_annotation, map_type
from .docstring import DocComment, DocIndex, DocTag, doc_index, parse_doc_comment, parse_tag
from .cleaning import clean_description
