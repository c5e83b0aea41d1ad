"""Compiler - transforms a parsed template tree into Program IR."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from curly.ast.node import Group, Text
from curly.ast.parser import Parser
from curly.compiler.macros import (
    MacroCompiler,
    MacroRegistry,
    as_fragment,
    builtin_macros,
    parse_arg,
)
from curly.compiler.spec import Fragment, Program
from curly.errors import UnknownMacroError

log = logging.getLogger(__name__)

OUTPUT_MACRO = "out"


class Compiler:
    """Compiles template source to a Program.

    User macros are consulted before the registry's own macros.
    """

    def __init__(
        self,
        macros: Optional[Mapping[str, MacroCompiler]] = None,
        registry: Optional[MacroRegistry] = None,
        parser: Optional[Parser] = None,
    ):
        self.registry = registry or builtin_macros
        self.parser = parser or Parser()
        self._macros = self.registry.layered(macros)

    def compile(self, source: str) -> Program:
        """Compile template source.

        The whole template is compiled as the argument of an implicit
        {out ...} group, so whitespace leading the template is dropped.

        Raises:
            UnmatchedBraceError: braces do not balance.
            UnknownMacroError: a group names no known macro.
        """
        return self.compile_tree(self.parser.parse(source))

    def compile_file(self, filepath: str | Path) -> Program:
        return self.compile_tree(self.parser.parse_file(filepath))

    def compile_tree(self, tree: Group) -> Program:
        """Compile a parsed tree. The tree is consumed: macros strip the
        invocation text off each group they read."""
        root = Group([Text(f"{OUTPUT_MACRO} {tree.head.value}"), *tree.children[1:]])

        program = Program(body=self.transform(root))
        log.debug("Compiled template to %d instructions", sum(1 for _ in program.walk()))
        return program

    def transform(self, group: Group) -> Fragment:
        """Compile one group by dispatching on its macro name."""
        name = parse_arg(group)
        macro = self._macros.get(name)
        if macro is None:
            raise UnknownMacroError(name)

        log.debug("Dispatching macro %r", name)
        return as_fragment(macro(group, self.transform))


def compile_template(
    source: str, macros: Optional[Mapping[str, MacroCompiler]] = None
) -> Program:
    return Compiler(macros).compile(source)
