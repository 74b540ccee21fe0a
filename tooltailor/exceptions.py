from typing import Optional


class ToolTailorError(Exception):
    pass


class InvalidArgumentShapeError(ToolTailorError, ValueError):
    def __init__(
        self,
        message: str,
        parameter_name: Optional[str] = None,
        kind: Optional[str] = None,
    ):
        self.parameter_name = parameter_name
        self.kind = kind
        super().__init__(message)


class InvalidTagFormatError(ToolTailorError, ValueError):
    def __init__(self, tag_name: str, text: str, reason: str):
        self.tag_name = tag_name
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid @{tag_name} tag format '{text}': {reason}")


class UnsupportedTypeError(ToolTailorError, TypeError):
    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unsupported type: {type_name}")


class DocumentationLookupError(ToolTailorError):
    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Documentation lookup failed for '{source}': {message}")
