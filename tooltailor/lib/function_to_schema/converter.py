import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Literal, Optional

from tooltailor import config
from tooltailor.exceptions import ToolTailorError
from tooltailor.logger import ConversionLog, LogLevel, logger_convert
from tooltailor.tool_types import OutputFormat, SchemaOutput, ToolSchema

from .docstring.comment import DocComment
from .docstring.index import DocIndex, doc_index
from .docstring.parser import read_documentation
from .inspection import (
    build_parameter_records,
    describe_signature,
    resolve_target,
    resolve_type_hints,
)
from .schema import SchemaAssembler, serialize_schema


OUTPUT_FORMATS = ("json", "dict")
ERROR_POLICIES = ("raise", "collect")

ErrorPolicy = Literal["raise", "collect"]


@dataclass
class ConversionOptions:
    log_level: LogLevel = field(default_factory=lambda: config.LOG_LEVEL)
    strict_tags: bool = field(default_factory=lambda: config.STRICT_TAGS)
    strict_types: bool = field(default_factory=lambda: config.STRICT_TYPES)
    use_annotations: bool = field(default_factory=lambda: config.USE_ANNOTATIONS)
    allow_positional_or_keyword: bool = field(
        default_factory=lambda: config.ALLOW_POSITIONAL_OR_KEYWORD
    )
    output_format: OutputFormat = field(default_factory=lambda: config.OUTPUT_FORMAT)

    def __post_init__(self):
        if self.log_level not in ("silent", "warn", "debug"):
            raise ValueError(
                f"log_level must be one of silent, warn, debug, got '{self.log_level}'"
            )
        _check_format(self.output_format)


@dataclass
class ConversionOutcome:
    target: Any
    schema: Optional[SchemaOutput] = None
    error: Optional[ToolTailorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _check_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format '{output_format}', expected one of {', '.join(OUTPUT_FORMATS)}"
        )


class Converter:
    """
    Turns named-parameter callables into function-calling tool schemas.

    Each conversion reads the target's signature, looks up its
    documentation, folds the documentation tags onto the parameters and
    returns either the JSON text (``format="json"``) or the equivalent dict
    (``format="dict"``).
    """

    def __init__(
        self,
        options: Optional[ConversionOptions] = None,
        logger: Optional[logging.Logger] = None,
        index: Optional[DocIndex] = None,
    ):
        self.options = options or ConversionOptions()
        self.log = ConversionLog(self.options.log_level, logger or logger_convert)
        self.index = index if index is not None else doc_index

    def _documentation(self, sources: List[Any]) -> DocComment:
        doc = DocComment()
        for source in sources:
            doc = doc.merge(read_documentation(source, index=self.index, log=self.log))
        return doc

    def build(self, target: Any) -> ToolSchema:
        resolved = resolve_target(target)

        if resolved.function is None:
            signature = []
        else:
            signature = describe_signature(
                resolved.function,
                skip_receiver=resolved.skip_receiver,
                allow_positional_or_keyword=self.options.allow_positional_or_keyword,
            )
        records = build_parameter_records(signature)

        hints = {}
        if self.options.use_annotations:
            hints = resolve_type_hints(resolved.function, log=self.log)

        doc = self._documentation(resolved.doc_sources)

        assembler = SchemaAssembler(
            self.log,
            strict_tags=self.options.strict_tags,
            strict_types=self.options.strict_types,
        )
        return assembler.assemble(resolved.name, records, doc, hints)

    def convert(self, target: Any, format: Optional[OutputFormat] = None) -> SchemaOutput:
        output_format = format or self.options.output_format
        _check_format(output_format)

        schema = self.build(target)
        if output_format == "dict":
            return schema
        return serialize_schema(schema)

    def batch_convert(
        self,
        targets: Iterable[Any],
        format: Optional[OutputFormat] = None,
        on_error: ErrorPolicy = "raise",
    ) -> List[Any]:
        """
        Convert several targets, keeping their order.

        With ``on_error="raise"`` the first failure propagates and the
        remaining targets are not converted; the result is a list of
        schemas. With ``on_error="collect"`` every target is attempted and
        the result is a list of ``ConversionOutcome`` carrying either the
        schema or the ``ToolTailorError`` it raised.
        """
        if on_error not in ERROR_POLICIES:
            raise ValueError(
                f"Unknown error policy '{on_error}', expected one of {', '.join(ERROR_POLICIES)}"
            )
        _check_format(format or self.options.output_format)

        if on_error == "raise":
            return [self.convert(target, format=format) for target in targets]

        outcomes = []
        for position, target in enumerate(targets):
            try:
                outcomes.append(
                    ConversionOutcome(target, schema=self.convert(target, format=format))
                )
            except ToolTailorError as e:
                self.log.warning(f"Conversion of batch item {position} failed: {e}")
                outcomes.append(ConversionOutcome(target, error=e))
        return outcomes


_default_converter: Optional[Converter] = None


def get_default_converter() -> Converter:
    global _default_converter
    if _default_converter is None:
        _default_converter = Converter()
    return _default_converter


def convert(target: Any, format: Optional[OutputFormat] = None) -> SchemaOutput:
    return get_default_converter().convert(target, format=format)


def batch_convert(
    targets: Iterable[Any],
    format: Optional[OutputFormat] = None,
    on_error: ErrorPolicy = "raise",
) -> List[Any]:
    return get_default_converter().batch_convert(targets, format=format, on_error=on_error)


def to_schema(target: Any, format: Optional[OutputFormat] = None) -> SchemaOutput:
    return convert(target, format=format)


class SchemaTool:
    """
    Callable wrapper that can describe itself.

    Calls pass straight through to the wrapped function; ``to_schema``
    delegates to the converter. Works as a decorator on plain functions and
    on methods, where attribute access binds the wrapped function.
    """

    def __init__(self, function: Callable, converter: Optional[Converter] = None):
        self.function = function
        self.converter = converter
        functools.update_wrapper(self, function)

    def __call__(self, *args, **kwargs):
        return self.function(*args, **kwargs)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return SchemaTool(self.function.__get__(instance, owner), self.converter)

    def to_schema(self, format: Optional[OutputFormat] = None) -> SchemaOutput:
        converter = self.converter or get_default_converter()
        return converter.convert(self.function, format=format)

    def __repr__(self):
        return f"SchemaTool({self.function!r})"
