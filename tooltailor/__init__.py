from .exceptions import (
    DocumentationLookupError,
    InvalidArgumentShapeError,
    InvalidTagFormatError,
    ToolTailorError,
    UnsupportedTypeError,
)
from .lib.function_to_schema import (
    ConversionOptions,
    ConversionOutcome,
    Converter,
    ParameterRecord,
    SchemaTool,
    batch_convert,
    convert,
    map_type,
    to_schema,
)

VERSION = "0.1.0"
