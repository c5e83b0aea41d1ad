"""Compile and render options"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from pydantic import BaseModel


class Options(BaseModel):
    """Extension points shared by compile() and render().

    macros: user macros, looked up before the built-ins.
    functions: the table {fn name} calls into, as fn(path, data) -> str.
    """

    macros: dict[str, Callable[..., Any]] = {}
    functions: dict[str, Callable[..., Any]] = {}

    model_config = {"frozen": True}

    def merged(
        self,
        macros: Mapping[str, Callable[..., Any]] | None = None,
        functions: Mapping[str, Callable[..., Any]] | None = None,
    ) -> "Options":
        """Return a copy with the given entries layered in front."""
        return Options(
            macros={**self.macros, **(macros or {})},
            functions={**self.functions, **(functions or {})},
        )


def resolve_options(
    options: Options | Mapping[str, Any] | None = None,
    macros: Mapping[str, Callable[..., Any]] | None = None,
    functions: Mapping[str, Callable[..., Any]] | None = None,
) -> Options:
    if options is None:
        base = Options()
    elif isinstance(options, Options):
        base = options
    else:
        base = Options.model_validate(dict(options))
    return base.merged(macros=macros, functions=functions)
