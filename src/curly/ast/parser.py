from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Tuple

from curly.ast.node import Group, Text
from curly.errors import UnmatchedBraceError


class Parser:
    """Turns template text into a tree of Text and Group nodes.

    '{example {foo {bar}} {bla}}' parses to a root group holding::

        Group['', Group['example ', Group['foo ', Group['bar'], ''], ' ',
                        Group['bla'], ''], '']

    There is no escaping: `{` and `}` always delimit groups.
    """

    _file_loader: Callable[[str], str]

    def __init__(self, file_loader: Callable[[str], str] | None = None):
        self._file_loader = file_loader or read_file

    def parse_file(self, filepath: str | Path) -> Group:
        return self.parse(self._file_loader(str(filepath)))

    def parse(self, source: str) -> Group:
        if not isinstance(source, str):
            raise TypeError("`source` must be a template string")

        root = Group()
        current = root
        # (parent, offset of the `{` that opened `current`)
        stack: List[Tuple[Group, int]] = []

        for offset, char in enumerate(source):
            if char == "{":
                stack.append((current, offset))
                current = Group()
            elif char == "}":
                if not stack:
                    raise UnmatchedBraceError(offset)
                parent, _ = stack.pop()
                parent.children.append(current)
                parent.children.append(Text())
                current = parent
            else:
                current.append_text(char)

        if stack:
            _, opened_at = stack[-1]
            raise UnmatchedBraceError(opened_at)

        return root


def parse(source: str) -> Group:
    """Parse `source` with a default Parser."""
    return Parser().parse(source)


def read_file(filepath: str) -> str:
    try:
        with open(filepath, "r", encoding="utf-8") as file:
            return file.read()
    except OSError as exc:
        raise FileNotFoundError(f"Could not read file: {filepath}") from exc
