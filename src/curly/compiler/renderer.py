"""Renderer - runs Program IR against data and returns the output text."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from curly.compiler.paths import add_to_path, iter_entries, resolve, to_text
from curly.compiler.spec import (
    CallUserFunction,
    EmitCurrentPath,
    EmitLiteral,
    EmitLiteralTree,
    EmitResolvedPath,
    ForEachPathSegment,
    IfPathDefined,
    Op,
    Program,
    UserFunction,
    WithPath,
)
from curly.errors import UnknownFunctionError

log = logging.getLogger(__name__)


@dataclass
class ExecutionContext:
    """Mutable state of one render call. Never shared between calls."""

    data: Any
    path: str = ""
    out: List[str] = field(default_factory=list)

    @contextmanager
    def scoped_path(self, path: str) -> Iterator[str]:
        """Set the current path for the duration of a block, then restore it."""
        saved = self.path
        self.path = path
        try:
            yield path
        finally:
            self.path = saved

    def here(self, part: str) -> str:
        return add_to_path(self.path, part)


class Renderer:
    """Renders Programs to text.

    Holds only the user function table; all per-render state lives in a
    fresh ExecutionContext, so one Renderer (and one Program) can serve
    concurrent renders.
    """

    def __init__(self, functions: Optional[Mapping[str, UserFunction]] = None):
        self.functions = dict(functions or {})

    def render(self, program: Program, data: Any = None) -> str:
        ctx = ExecutionContext(data={} if data is None else data)
        log.debug("Rendering program with %d top-level instructions", len(program.body))
        self._run(program.body, ctx)
        output = "".join(ctx.out)
        log.debug("Rendered %d chars", len(output))
        return output

    def _run(self, body: Sequence[Op], ctx: ExecutionContext) -> None:
        for op in body:
            self._execute(op, ctx)

    def _execute(self, op: Op, ctx: ExecutionContext) -> None:
        if isinstance(op, EmitLiteral):
            ctx.out.append(op.text)
        elif isinstance(op, EmitLiteralTree):
            ctx.out.append(op.source)
        elif isinstance(op, EmitResolvedPath):
            ctx.out.append(to_text(resolve(ctx.data, ctx.here(op.path))))
        elif isinstance(op, EmitCurrentPath):
            ctx.out.append(ctx.here(op.path))
        elif isinstance(op, WithPath):
            with ctx.scoped_path(ctx.here(op.path)):
                self._run(op.body, ctx)
        elif isinstance(op, IfPathDefined):
            if resolve(ctx.data, ctx.here(op.path)) is not None:
                self._run(op.body, ctx)
        elif isinstance(op, ForEachPathSegment):
            self._for_each(op, ctx)
        elif isinstance(op, CallUserFunction):
            ctx.out.append(self._call(op.name, ctx))
        else:
            raise TypeError(f"Unknown instruction: {op!r}")

    def _for_each(self, op: ForEachPathSegment, ctx: ExecutionContext) -> None:
        with ctx.scoped_path(ctx.here(op.path)) as collection_path:
            for segment in iter_entries(resolve(ctx.data, collection_path)):
                with ctx.scoped_path(add_to_path(collection_path, segment)):
                    self._run(op.body, ctx)

    def _call(self, name: str, ctx: ExecutionContext) -> str:
        fn = self.functions.get(name)
        if fn is None:
            raise UnknownFunctionError(name)
        return to_text(fn(ctx.path, ctx.data))
