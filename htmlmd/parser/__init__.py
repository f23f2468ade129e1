"""Parser module -- tokenizer, token types, tree builder."""

from htmlmd.parser.tokenizer import tokenize
from htmlmd.parser.tokens import Comment, EndTag, SelfClosingTag, StartTag, Text, Token
from htmlmd.parser.tree import Element, Node, TextNode, build

__all__ = [
    "tokenize",
    "build",
    "Token",
    "StartTag",
    "EndTag",
    "SelfClosingTag",
    "Text",
    "Comment",
    "Node",
    "Element",
    "TextNode",
]
