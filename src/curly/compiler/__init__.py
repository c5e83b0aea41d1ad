"""Curly compiler - turns parsed templates into Program IR and renders it."""

from curly.compiler.compiler import Compiler, compile_template
from curly.compiler.macros import (
    MacroCompiler,
    MacroRegistry,
    builtin_macros,
    compile_children,
    parse_arg,
    parse_path,
)
from curly.compiler.renderer import ExecutionContext, Renderer
from curly.compiler.spec import Program

__all__ = [
    "Compiler",
    "ExecutionContext",
    "MacroCompiler",
    "MacroRegistry",
    "Program",
    "Renderer",
    "builtin_macros",
    "compile_children",
    "compile_template",
    "parse_arg",
    "parse_path",
]
