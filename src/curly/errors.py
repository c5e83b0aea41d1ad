"""Curly Exceptions

Custom exceptions raised while compiling and rendering templates.
"""

from __future__ import annotations


class CurlyError(Exception):
    """Base exception for all curly errors."""

    pass


class UnmatchedBraceError(CurlyError):
    """Raised when the braces of a template do not balance."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Unmatched brace at position {position}")


class UnknownMacroError(CurlyError):
    """Raised when a group names a macro that is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Not a macro: {name}")


class UnknownFunctionError(CurlyError):
    """Raised when {fn name} runs without `name` in the function table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Not a function: {name}")


class ProgramDecodeError(CurlyError):
    """Raised when a serialized program cannot be decoded."""

    pass
