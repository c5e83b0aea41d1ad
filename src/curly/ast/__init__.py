from curly.ast.node import Group, Node, Text
from curly.ast.parser import Parser, parse

__all__ = ["Group", "Node", "Parser", "Text", "parse"]
