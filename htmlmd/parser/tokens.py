"""Token types produced by the tokenizer."""

from dataclasses import dataclass, field
from typing import Dict, Union


@dataclass(frozen=True)
class StartTag:
    """An opening tag such as ``<a href="x">``."""

    name: str
    attrs: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EndTag:
    name: str


@dataclass(frozen=True)
class SelfClosingTag:
    """A tag written as ``<name ... />``; never opens an element."""

    name: str
    attrs: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Text:
    """Raw character data between tags (entities still encoded)."""

    data: str


@dataclass(frozen=True)
class Comment:
    data: str


Token = Union[StartTag, EndTag, SelfClosingTag, Text, Comment]
