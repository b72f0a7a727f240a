"""
Namesake Name Harvester

Walks Python source with the ``ast`` module and groups the identifiers a
programmer chose (functions, classes, parameters, variables, exception
and import aliases) by the lexical scope that binds them.  Each scope
becomes one :class:`~namesake.core.matcher.ScopeCollection` ready for the
matcher.
"""

import ast
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set

from namesake.core.config import NamesakeConfig
from namesake.core.matcher import Name, ScopeCollection
from namesake.exceptions import HarvestError

logger = logging.getLogger(__name__)

# Name kinds
KIND_FUNCTION = "function"
KIND_CLASS = "class"
KIND_ARGUMENT = "argument"
KIND_VARIABLE = "variable"
KIND_IMPORT = "import"

# Scope kinds
SCOPE_MODULE = "module"
SCOPE_CLASS = "class"
SCOPE_FUNCTION = "function"
SCOPE_LAMBDA = "lambda"


# =============================================================================
# Provenance
# =============================================================================

@dataclass(frozen=True)
class ScopeInfo:
    """Where a scope lives in the source tree."""
    file_path: str
    kind: str
    name: str
    qualname: str
    line: int

    def label(self) -> str:
        return f"{self.kind} {self.qualname}"


@dataclass(frozen=True)
class NameOrigin:
    """Where a harvested name was bound."""
    file_path: str
    line: int
    column: int
    kind: str
    scope: str
    """Qualified name of the binding scope."""

    def location(self) -> str:
        return f"{self.file_path}:{self.line}"


@dataclass
class _Frame:
    info: ScopeInfo
    names: List[Name] = field(default_factory=list)
    seen: Set[str] = field(default_factory=set)
    declared_elsewhere: Set[str] = field(default_factory=set)
    """Names made global or nonlocal in this scope."""


# =============================================================================
# AST walk
# =============================================================================

class NameHarvester(ast.NodeVisitor):
    """
    Collect names per scope from one Python module.

    Usage::

        scopes = NameHarvester().harvest_source(code, "app.py")

    A ``def`` or ``class`` name is bound in the enclosing scope, while
    its parameters belong to the new scope.  Rebinding a name inside the
    same scope does not record it again.  Collections are returned
    inner-most first, in the order each scope is completed.
    """

    def __init__(self, propagate_nested: bool = False):
        self.propagate_nested = propagate_nested
        self._file_path = "<string>"
        self._stack: List[_Frame] = []
        self._collections: List[ScopeCollection] = []

    # ── Public API ───────────────────────────────────────────────

    def harvest_source(self, source_code: str, file_path: str = "<string>") -> List[ScopeCollection]:
        """
        Return the scope collections of *source_code*; ``[]`` on a syntax error.

        Raises:
            HarvestError: If the source is too deeply nested to parse or walk.
        """
        try:
            tree = ast.parse(source_code, filename=file_path)
        except SyntaxError as e:
            logger.error(f"Syntax error in {file_path}: {e}")
            return []
        except (RecursionError, MemoryError, ValueError) as e:
            raise HarvestError(f"Cannot parse {file_path}: {e!r}") from e

        self._file_path = file_path
        self._stack = []
        self._collections = []

        module_name = Path(file_path).stem if file_path != "<string>" else "<module>"
        try:
            self._push(SCOPE_MODULE, module_name, 1)
            for stmt in tree.body:
                self.visit(stmt)
            self._pop()
        except (RecursionError, MemoryError) as e:
            raise HarvestError(f"Cannot walk {file_path}: {e!r}") from e
        return self._collections

    def harvest_file(self, file_path: Path) -> List[ScopeCollection]:
        """Read and harvest one file.  Raises :class:`HarvestError` if unreadable."""
        try:
            source_code = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise HarvestError(f"Cannot read {file_path}: {e}") from e
        return self.harvest_source(source_code, str(file_path))

    # ── Scope bookkeeping ────────────────────────────────────────

    def _push(self, kind: str, name: str, line: int) -> None:
        if self._stack:
            qualname = f"{self._stack[-1].info.qualname}.{name}"
        else:
            qualname = name
        info = ScopeInfo(self._file_path, kind, name, qualname, line)
        self._stack.append(_Frame(info))

    def _pop(self) -> None:
        frame = self._stack.pop()
        self._collections.append(ScopeCollection(frame.info, tuple(frame.names)))
        if self.propagate_nested and self._stack:
            self._stack[-1].names.extend(frame.names)

    def _bind(self, text: str, node: ast.AST, kind: str) -> None:
        frame = self._stack[-1]
        if not text or text in frame.seen or text in frame.declared_elsewhere:
            return
        frame.seen.add(text)
        frame.names.append(Name(text, NameOrigin(
            file_path=self._file_path,
            line=getattr(node, "lineno", frame.info.line),
            column=getattr(node, "col_offset", 0),
            kind=kind,
            scope=frame.info.qualname,
        )))

    def _bind_arguments(self, args: ast.arguments) -> None:
        positional = getattr(args, "posonlyargs", []) + args.args
        for arg in positional + args.kwonlyargs:
            self._bind(arg.arg, arg, KIND_ARGUMENT)
        if args.vararg:
            self._bind(args.vararg.arg, args.vararg, KIND_ARGUMENT)
        if args.kwarg:
            self._bind(args.kwarg.arg, args.kwarg, KIND_ARGUMENT)

    def _visit_outer_parts(self, node) -> None:
        """Visit the parts of a def/lambda evaluated in the enclosing scope."""
        for decorator in getattr(node, "decorator_list", []):
            self.visit(decorator)
        for default in node.args.defaults + [d for d in node.args.kw_defaults if d]:
            self.visit(default)

    # ── Visitors ─────────────────────────────────────────────────

    def _visit_function(self, node) -> None:
        self._visit_outer_parts(node)
        self._bind(node.name, node, KIND_FUNCTION)
        self._push(SCOPE_FUNCTION, node.name, node.lineno)
        self._bind_arguments(node.args)
        for stmt in node.body:
            self.visit(stmt)
        self._pop()

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function

    def visit_Lambda(self, node: ast.Lambda) -> None:
        self._visit_outer_parts(node)
        self._push(SCOPE_LAMBDA, "<lambda>", node.lineno)
        self._bind_arguments(node.args)
        self.visit(node.body)
        self._pop()

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        for expr in node.decorator_list + node.bases + [kw.value for kw in node.keywords]:
            self.visit(expr)
        self._bind(node.name, node, KIND_CLASS)
        self._push(SCOPE_CLASS, node.name, node.lineno)
        for stmt in node.body:
            self.visit(stmt)
        self._pop()

    def visit_Name(self, node: ast.Name) -> None:
        if isinstance(node.ctx, ast.Store):
            self._bind(node.id, node, KIND_VARIABLE)

    def visit_ExceptHandler(self, node: ast.ExceptHandler) -> None:
        if node.name:
            self._bind(node.name, node, KIND_VARIABLE)
        self.generic_visit(node)

    def visit_Import(self, node: ast.Import) -> None:
        for alias in node.names:
            if alias.asname:
                self._bind(alias.asname, node, KIND_IMPORT)

    visit_ImportFrom = visit_Import

    def visit_Global(self, node: ast.Global) -> None:
        self._stack[-1].declared_elsewhere.update(node.names)

    visit_Nonlocal = visit_Global

    def visit_MatchAs(self, node: ast.MatchAs) -> None:
        self.generic_visit(node)
        if node.name:
            self._bind(node.name, node, KIND_VARIABLE)

    def visit_MatchStar(self, node: ast.MatchStar) -> None:
        if node.name:
            self._bind(node.name, node, KIND_VARIABLE)

    def visit_MatchMapping(self, node: ast.MatchMapping) -> None:
        self.generic_visit(node)
        if node.rest:
            self._bind(node.rest, node, KIND_VARIABLE)


# =============================================================================
# File discovery
# =============================================================================

def scan_directory(root_path: Path, config: Optional[NamesakeConfig] = None) -> List[Path]:
    """
    Recursively scan for Python source files.

    Excluded directories are pruned in place so :func:`os.walk` never
    descends into them.  Files larger than ``config.max_file_size_mb``
    are skipped with a warning.  The result is sorted.
    """
    cfg = config or NamesakeConfig()
    source_files: List[Path] = []
    exclude = cfg.exclude_dirs
    extensions = cfg.target_extensions
    max_bytes = cfg.max_file_size_mb * 1024 * 1024

    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames[:] = [d for d in dirnames if d not in exclude]

        for fname in filenames:
            _, ext = os.path.splitext(fname)
            if ext not in extensions:
                continue

            full = os.path.join(dirpath, fname)
            try:
                size = os.path.getsize(full)
            except OSError:
                continue

            if size <= max_bytes:
                source_files.append(Path(full))
            else:
                logger.warning(
                    f"Skipping large file: {full} ({size / (1024 * 1024):.1f}MB)"
                )

    source_files.sort()
    return source_files
