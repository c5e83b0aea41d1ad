"""curly - a minimal brace templating language

    >>> render("{each pages {. title} }", {"pages": [{"title": "A"}, {"title": "B"}]})
    'A B '

Templates compile once to a Program which renders any number of data values.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from curly.ast import Group, Parser, Text, parse
from curly.compiler import (
    Compiler,
    MacroRegistry,
    Program,
    Renderer,
    builtin_macros,
    compile_children,
    parse_arg,
    parse_path,
)
from curly.compiler.paths import add_to_path, resolve
from curly.compiler.spec import (
    CallUserFunction,
    EmitCurrentPath,
    EmitLiteral,
    EmitLiteralTree,
    EmitResolvedPath,
    ForEachPathSegment,
    IfPathDefined,
    WithPath,
)
from curly.config import Options, resolve_options
from curly.errors import (
    CurlyError,
    ProgramDecodeError,
    UnknownFunctionError,
    UnknownMacroError,
    UnmatchedBraceError,
)
from curly.utils import setup_logging


def compile(
    source: str,
    macros: Mapping[str, Callable[..., Any]] | None = None,
    *,
    options: Options | Mapping[str, Any] | None = None,
) -> Program:
    """Compile a template to a reusable Program."""
    opts = resolve_options(options, macros=macros)
    return Compiler(opts.macros).compile(source)


def render(
    source: str,
    data: Any = None,
    macros: Mapping[str, Callable[..., Any]] | None = None,
    *,
    functions: Mapping[str, Callable[..., Any]] | None = None,
    options: Options | Mapping[str, Any] | None = None,
) -> str:
    """Compile `source` and render it once against `data`."""
    opts = resolve_options(options, macros=macros, functions=functions)
    program = Compiler(opts.macros).compile(source)
    return Renderer(opts.functions).render(program, data)


__all__ = [
    # API
    "compile",
    "render",
    "parse",
    "Options",
    # Tree and IR
    "Group",
    "Text",
    "Program",
    "CallUserFunction",
    "EmitCurrentPath",
    "EmitLiteral",
    "EmitLiteralTree",
    "EmitResolvedPath",
    "ForEachPathSegment",
    "IfPathDefined",
    "WithPath",
    # Engine
    "Compiler",
    "MacroRegistry",
    "Parser",
    "Renderer",
    "builtin_macros",
    # Macro author helpers
    "add_to_path",
    "compile_children",
    "parse_arg",
    "parse_path",
    "resolve",
    # Logging
    "setup_logging",
    # Errors
    "CurlyError",
    "ProgramDecodeError",
    "UnknownFunctionError",
    "UnknownMacroError",
    "UnmatchedBraceError",
]
