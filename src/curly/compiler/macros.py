"""
MacroRegistry - named compilation rules for groups.

A macro receives the group it was invoked for and a `recurse` callback that
compiles any other group into a fragment. It returns the fragment standing
in for its group:

    registry = MacroRegistry()

    @registry.register("upper")
    def upper_macro(group, recurse):
        return EmitLiteral(group.inner_source().upper())

Lookup layers caller supplied macros in front of the registered ones, so a
user table can both add names and override built-ins.
"""

from __future__ import annotations

import logging
import re
from collections import ChainMap
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Union

from curly.ast.node import Group, Text
from curly.compiler.spec import (
    CallUserFunction,
    EmitCurrentPath,
    EmitLiteral,
    EmitLiteralTree,
    EmitResolvedPath,
    ForEachPathSegment,
    Fragment,
    IfPathDefined,
    Instruction,
    WithPath,
)

log = logging.getLogger(__name__)

_LEADING_TOKEN = re.compile(r"^\S+")

Recurse = Callable[[Group], Fragment]
MacroResult = Union[Instruction, str, Iterable[Instruction], None]


class MacroCompiler(Protocol):
    def __call__(self, group: Group, recurse: Recurse) -> MacroResult: ...


# ---------------------------------------------------------------- helpers


def parse_arg(group: Group) -> str:
    """Consume the leading token of the group's first text.

    The token and the whitespace after it are stripped from the group, so the
    macro body sees only what follows.
    """
    head = group.head.value
    match = _LEADING_TOKEN.match(head)
    arg = match.group(0) if match else ""
    group.children[0] = Text(head[len(arg):].lstrip())
    return arg


def parse_path(group: Group) -> str:
    return parse_arg(group) or ""


def compile_children(group: Group, recurse: Recurse) -> Fragment:
    """Compile a group's children as a plain concatenation."""
    ops: List[Instruction] = []
    for child in group.children:
        if isinstance(child, Group):
            ops.extend(recurse(child))
        elif child.value:
            ops.append(EmitLiteral(child.value))
    return tuple(ops)


def as_fragment(result: MacroResult) -> Fragment:
    """Normalize whatever a macro returned into a fragment."""
    if result is None:
        return ()
    if isinstance(result, str):
        return (EmitLiteral(result),) if result else ()
    if isinstance(result, Instruction):
        return (result,)
    fragment = tuple(result)
    for op in fragment:
        if not isinstance(op, Instruction):
            raise TypeError(f"Macro produced a non-instruction: {op!r}")
    return fragment


# --------------------------------------------------------------- registry


class MacroRegistry:
    def __init__(self, macros: Optional[Mapping[str, MacroCompiler]] = None) -> None:
        self._macros: Dict[str, MacroCompiler] = dict(macros or {})

    def register(self, name: str):
        """Decorator that registers a function as the macro `name`."""

        def decorator(fn: MacroCompiler) -> MacroCompiler:
            self._macros[name] = fn
            log.debug("Registered macro: %s", name)
            return fn

        return decorator

    def has(self, name: str) -> bool:
        return name in self._macros

    def lookup(
        self, name: str, overrides: Optional[Mapping[str, MacroCompiler]] = None
    ) -> Optional[MacroCompiler]:
        return self.layered(overrides).get(name)

    def layered(
        self, overrides: Optional[Mapping[str, MacroCompiler]] = None
    ) -> ChainMap:
        return ChainMap(dict(overrides or {}), self._macros)

    def copy(self) -> "MacroRegistry":
        return MacroRegistry(self._macros)

    def registered_names(self) -> List[str]:
        return sorted(self._macros)


# --------------------------------------------------------------- built-ins

builtin_macros = MacroRegistry()


@builtin_macros.register(".")
def value_macro(group: Group, recurse: Recurse) -> MacroResult:
    """Resolve a value: {. title} or just {.}"""
    return EmitResolvedPath(parse_path(group))


@builtin_macros.register("->")
def descend_macro(group: Group, recurse: Recurse) -> MacroResult:
    """Move down in the path for the body: {-> person.name {path}}"""
    path = parse_path(group)
    return WithPath(path, compile_children(group, recurse))


@builtin_macros.register("has")
def has_macro(group: Group, recurse: Recurse) -> MacroResult:
    """Run the body only when the path resolves: {has title <h1>{. title}</h1>}"""
    path = parse_path(group)
    return IfPathDefined(path, compile_children(group, recurse))


@builtin_macros.register("each")
def each_macro(group: Group, recurse: Recurse) -> MacroResult:
    """Run the body for every entry of a list or mapping: {each pages <li>{. title}</li>}"""
    path = parse_path(group)
    return ForEachPathSegment(path, compile_children(group, recurse))


@builtin_macros.register("path")
def path_macro(group: Group, recurse: Recurse) -> MacroResult:
    """Output the path itself: {each foo {path bar} } -> foo.0.bar foo.1.bar"""
    return EmitCurrentPath(parse_path(group))


@builtin_macros.register("out")
def out_macro(group: Group, recurse: Recurse) -> MacroResult:
    return compile_children(group, recurse)


@builtin_macros.register("literal")
def literal_macro(group: Group, recurse: Recurse) -> MacroResult:
    """Output the body untouched: {literal {hello: bla}} -> {hello: bla}"""
    return EmitLiteralTree(group.inner_source())


@builtin_macros.register("fn")
def fn_macro(group: Group, recurse: Recurse) -> MacroResult:
    """Call a user function with the current path and the data: {fn name}"""
    return CallUserFunction(parse_path(group))
