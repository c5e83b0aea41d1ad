"""Template tree nodes produced by the parser."""

from dataclasses import dataclass, field
from typing import List, Union


@dataclass
class Text:
    """A run of literal template text."""

    value: str = ""

    def source(self) -> str:
        return self.value


@dataclass
class Group:
    """One matched `{...}` span.

    The first child is always a Text holding the macro invocation (name plus
    inline argument); macros strip it as they consume it.
    """

    children: List["Node"] = field(default_factory=lambda: [Text()])

    @property
    def head(self) -> Text:
        return self.children[0]

    def append_text(self, char: str) -> None:
        last = self.children[-1]
        last.value += char

    def inner_source(self) -> str:
        """Rebuild the source between this group's braces."""
        return "".join(child.source() for child in self.children)

    def source(self) -> str:
        return "{" + self.inner_source() + "}"


Node = Union[Text, Group]
