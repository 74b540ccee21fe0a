import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, get_type_hints

from tooltailor.exceptions import InvalidArgumentShapeError
from tooltailor.logger import ConversionLog

from .schema import ParameterRecord


class ParameterKind(str, Enum):
    REQUIRED_NAMED = "required_named"
    OPTIONAL_NAMED = "optional_named"
    POSITIONAL_ONLY = "positional_only"
    POSITIONAL_OR_KEYWORD = "positional_or_keyword"
    VAR_POSITIONAL = "var_positional"
    VAR_KEYWORD = "var_keyword"

    @property
    def is_named(self) -> bool:
        return self in (ParameterKind.REQUIRED_NAMED, ParameterKind.OPTIONAL_NAMED)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


SignatureDescription = List[Tuple[ParameterKind, str]]

RECEIVER_NAMES = ("self", "cls")


@dataclass
class ConversionTarget:
    """What a convertible object resolves to: a name, a signature source and its documentation sources."""

    name: str
    function: Optional[Callable]
    doc_sources: List[Any]
    skip_receiver: bool = False


def _is_function_on_class(func: Callable) -> bool:
    # "Cls.method" but not "outer.<locals>.inner"
    parts = func.__qualname__.split(".")
    return len(parts) > 1 and parts[-2] != "<locals>"


def resolve_target(obj: Any) -> ConversionTarget:
    if inspect.isclass(obj):
        init = obj.__init__
        if init is object.__init__ or not inspect.isfunction(init):
            return ConversionTarget(name=obj.__name__, function=None, doc_sources=[obj])
        return ConversionTarget(
            name=obj.__name__,
            function=init,
            doc_sources=[obj, init],
            skip_receiver=True,
        )

    if inspect.ismethod(obj):
        return ConversionTarget(
            name=obj.__name__, function=obj, doc_sources=[obj.__func__]
        )

    if inspect.isfunction(obj):
        return ConversionTarget(
            name=obj.__name__,
            function=obj,
            doc_sources=[obj],
            skip_receiver=_is_function_on_class(obj),
        )

    # callable wrapper objects such as SchemaTool
    wrapped = getattr(obj, "__wrapped__", None)
    if wrapped is not None and callable(obj):
        return resolve_target(wrapped)

    raise InvalidArgumentShapeError(f"Unsupported object type: {type(obj).__name__}")


def _parameter_kind(
    param: inspect.Parameter, allow_positional_or_keyword: bool
) -> ParameterKind:
    has_default = param.default is not inspect.Parameter.empty

    if param.kind is inspect.Parameter.KEYWORD_ONLY or (
        allow_positional_or_keyword
        and param.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD
    ):
        return (
            ParameterKind.OPTIONAL_NAMED if has_default else ParameterKind.REQUIRED_NAMED
        )

    return {
        inspect.Parameter.POSITIONAL_ONLY: ParameterKind.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD: ParameterKind.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.VAR_POSITIONAL: ParameterKind.VAR_POSITIONAL,
        inspect.Parameter.VAR_KEYWORD: ParameterKind.VAR_KEYWORD,
    }[param.kind]


def describe_signature(
    func: Callable,
    skip_receiver: bool = False,
    allow_positional_or_keyword: bool = False,
) -> SignatureDescription:
    """
    Read a callable's formal parameters as ordered ``(kind, name)`` pairs.

    With ``skip_receiver`` a leading ``self``/``cls`` parameter is dropped,
    which covers ``__init__`` in class conversion and plain functions reached
    through their class.
    """
    try:
        signature = inspect.signature(func)
    except (ValueError, TypeError) as e:
        func_name = getattr(func, "__name__", str(func))
        raise InvalidArgumentShapeError(
            f"Cannot inspect function signature for {func_name}: {e}"
        )

    params = list(signature.parameters.values())
    if (
        skip_receiver
        and params
        and params[0].name in RECEIVER_NAMES
        and params[0].kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ):
        params = params[1:]

    return [
        (_parameter_kind(param, allow_positional_or_keyword), param.name)
        for param in params
    ]


def build_parameter_records(
    description: Sequence[Tuple[ParameterKind, str]],
) -> List[ParameterRecord]:
    description = [(ParameterKind(kind), name) for kind, name in description]

    for kind, name in description:
        if not kind.is_named:
            raise InvalidArgumentShapeError(
                f"Only named arguments are supported, but parameter '{name}' is {kind.label}",
                parameter_name=name,
                kind=kind.value,
            )

    return [
        ParameterRecord(
            name=name,
            required=kind is ParameterKind.REQUIRED_NAMED,
        )
        for kind, name in description
    ]


def resolve_type_hints(
    func: Optional[Callable], log: Optional[ConversionLog] = None
) -> Dict[str, Any]:
    if func is None:
        return {}
    try:
        return get_type_hints(func)
    except (NameError, TypeError) as e:
        if log is not None:
            log.warning(
                f"Cannot resolve type hints for '{func.__qualname__}', ignoring annotations: {e}"
            )
        return {}
