"""Compiler IR spec - the program a template compiles to.

Instructions are frozen msgspec structs tagged by class name, so a Program
is plain data: it never holds the data it renders, and it round-trips
through JSON.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

import msgspec

from curly.errors import ProgramDecodeError


class Instruction(msgspec.Struct, frozen=True, tag=True):
    pass


class EmitLiteral(Instruction):
    text: str


class EmitResolvedPath(Instruction):
    """Emit the textual form of the value at current path + `path`."""

    path: str


class EmitCurrentPath(Instruction):
    """Emit current path + `path` itself."""

    path: str


class WithPath(Instruction):
    path: str
    body: Tuple[Op, ...] = ()


class IfPathDefined(Instruction):
    path: str
    body: Tuple[Op, ...] = ()


class ForEachPathSegment(Instruction):
    path: str
    body: Tuple[Op, ...] = ()


class CallUserFunction(Instruction):
    name: str


class EmitLiteralTree(Instruction):
    """Emit the reconstructed source of a subtree that was not compiled."""

    source: str


Op = Union[
    EmitLiteral,
    EmitResolvedPath,
    EmitCurrentPath,
    WithPath,
    IfPathDefined,
    ForEachPathSegment,
    CallUserFunction,
    EmitLiteralTree,
]

Fragment = Tuple[Op, ...]

UserFunction = Callable[[str, Any], str]


class Program(msgspec.Struct, frozen=True):
    """A compiled template, reusable across any number of renders."""

    body: Tuple[Op, ...] = ()

    def __call__(
        self,
        data: Any = None,
        functions: Optional[Mapping[str, UserFunction]] = None,
    ) -> str:
        from curly.compiler.renderer import Renderer

        return Renderer(functions).render(self, data)

    def to_json(self) -> bytes:
        return msgspec.json.encode(self)

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> "Program":
        try:
            return msgspec.json.decode(raw, type=cls)
        except msgspec.DecodeError as exc:
            raise ProgramDecodeError(f"Invalid program: {exc}") from exc

    def walk(self):
        """Yield every instruction, depth first."""
        stack = list(reversed(self.body))
        while stack:
            op = stack.pop()
            yield op
            stack.extend(reversed(getattr(op, "body", ())))

    def stats(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for op in self.walk():
            name = type(op).__name__
            counts[name] = counts.get(name, 0) + 1
        return counts
