"""
Process-wide index of documentation found in source files.

Each source file is parsed with ``ast`` at most once and the docstring and
leading ``#`` comment block of every function and class are recorded under
the object's qualified name. Population is guarded by a lock, so concurrent
lookups for the same file never produce duplicate or partial entries.
"""

import ast
import inspect
import threading
import tokenize
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from tooltailor.exceptions import DocumentationLookupError


@dataclass(frozen=True)
class SourceDoc:
    qualname: str
    lineno: int
    docstring: Optional[str]
    comments: Optional[str]

    @property
    def text(self) -> Optional[str]:
        return self.docstring or self.comments


FileIndex = Dict[str, List[SourceDoc]]


def _comment_block(lines: List[str], first_line: int) -> Optional[str]:
    """Collect the contiguous ``#`` lines directly above ``first_line`` (1-based)."""
    block: List[str] = []
    i = first_line - 2
    while i >= 0:
        stripped = lines[i].strip()
        if not stripped.startswith("#"):
            break
        # "#!" and "# -*- coding" lines only appear at the top of a module
        if stripped.startswith("#!") or "-*-" in stripped:
            break
        block.append(stripped[1:])
        i -= 1

    if not block:
        return None

    block.reverse()
    return inspect.cleandoc("\n".join(block)) or None


def _first_line(node: ast.AST) -> int:
    decorators = getattr(node, "decorator_list", [])
    return min([node.lineno] + [d.lineno for d in decorators])


def build_file_index(source: str, filename: str = "<unknown>") -> FileIndex:
    tree = ast.parse(source, filename=filename)
    lines = source.splitlines()
    index: FileIndex = {}

    def visit(body, prefix: str):
        for node in body:
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
                qualname = f"{prefix}{node.name}"
                first_line = _first_line(node)
                index.setdefault(qualname, []).append(
                    SourceDoc(
                        qualname=qualname,
                        lineno=first_line,
                        docstring=ast.get_docstring(node),
                        comments=_comment_block(lines, first_line),
                    )
                )
                if isinstance(node, ast.ClassDef):
                    visit(node.body, f"{qualname}.")
                else:
                    visit(node.body, f"{qualname}.<locals>.")
            else:
                # defs nested in if/try/with/for blocks keep the enclosing prefix
                for field in ("body", "orelse", "finalbody", "handlers"):
                    nested = getattr(node, field, None)
                    if isinstance(nested, list):
                        visit(nested, prefix)

    visit(tree.body, "")
    return index


def _object_first_line(obj: Any) -> Optional[int]:
    code = getattr(obj, "__code__", None)
    if code is not None:
        return code.co_firstlineno
    return getattr(obj, "__firstlineno__", None)


class DocIndex:
    def __init__(self):
        self._files: Dict[str, FileIndex] = {}
        self._lock = threading.Lock()

    def load(self, path: str) -> FileIndex:
        cached = self._files.get(path)
        if cached is not None:
            return cached

        try:
            with tokenize.open(path) as source_file:
                source = source_file.read()
            file_index = build_file_index(source, filename=path)
        except (OSError, SyntaxError, UnicodeDecodeError, ValueError) as e:
            raise DocumentationLookupError(path, str(e))

        with self._lock:
            return self._files.setdefault(path, file_index)

    def lookup(self, obj: Any) -> Optional[SourceDoc]:
        """Find the recorded documentation for a function or class, or None."""
        try:
            path = inspect.getsourcefile(obj)
        except TypeError as e:
            raise DocumentationLookupError(repr(obj), str(e))
        # defined in a REPL, exec() or generated code such as dataclass __init__
        if path is None or path.startswith("<"):
            return None

        entries = self.load(path).get(getattr(obj, "__qualname__", ""), [])
        if not entries:
            return None

        first_line = _object_first_line(obj)
        for entry in entries:
            if entry.lineno == first_line:
                return entry

        # later definitions shadow earlier ones at runtime
        return entries[-1]

    def invalidate(self, path: Optional[str] = None) -> None:
        with self._lock:
            if path is None:
                self._files.clear()
            else:
                self._files.pop(path, None)

    def __contains__(self, path: str) -> bool:
        return path in self._files


doc_index = DocIndex()
