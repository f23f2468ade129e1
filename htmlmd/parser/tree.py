"""Tree builder -- turns a token stream into an owned node tree.

Malformed markup is recovered locally and never aborts the build:

* an end tag closes the nearest open element with the same name, implicitly
  closing everything opened after it (``<b><i></b></i>`` closes ``i`` then
  ``b``);
* an end tag with no open match is ignored;
* elements still open at end of input are closed implicitly;
* beyond ``MAX_DEPTH`` open elements, further start tags are added as empty
  elements and their content stays with the deepest open element.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Union

from htmlmd.parser.entities import decode_entities
from htmlmd.parser.tokens import Comment, EndTag, SelfClosingTag, StartTag, Text, Token
from htmlmd.utils.logger import get_logger

log = get_logger(__name__)

DOCUMENT = "#document"

# Keeps recursive rendering within the interpreter's default recursion limit.
MAX_DEPTH = 128

# Elements that can never have children, with or without a trailing "/>".
VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)


@dataclass
class TextNode:
    """Entity-decoded character data."""

    data: str


@dataclass
class Element:
    """An element owning its ordered children."""

    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def text_content(self) -> str:
        """Concatenated character data of every descendant, in document order."""
        parts: List[str] = []
        for child in self.children:
            if isinstance(child, TextNode):
                parts.append(child.data)
            else:
                parts.append(child.text_content())
        return "".join(parts)

    def append_text(self, data: str) -> None:
        """Append *data*, merging with a trailing text child if there is one."""
        if self.children and isinstance(self.children[-1], TextNode):
            self.children[-1].data += data
        else:
            self.children.append(TextNode(data))


Node = Union[Element, TextNode]


def build(tokens: Iterable[Token]) -> Element:
    """Build a tree from *tokens* and return its synthetic document root."""
    root = Element(DOCUMENT)
    stack: List[Element] = [root]
    count = 0

    for token in tokens:
        if isinstance(token, (StartTag, SelfClosingTag)):
            element = Element(token.name, dict(token.attrs))
            stack[-1].children.append(element)
            count += 1
            if isinstance(token, StartTag) and token.name not in VOID_ELEMENTS:
                if len(stack) > MAX_DEPTH:
                    log.debug("Nesting limit reached, <%s> left empty", token.name)
                else:
                    stack.append(element)

        elif isinstance(token, EndTag):
            for depth in range(len(stack) - 1, 0, -1):
                if stack[depth].tag == token.name:
                    closed = stack[depth + 1 :]
                    if closed:
                        log.debug(
                            "</%s> implicitly closed %s",
                            token.name,
                            ", ".join(e.tag for e in reversed(closed)),
                        )
                    del stack[depth:]
                    break
            else:
                log.debug("Ignored stray </%s>", token.name)

        elif isinstance(token, Text):
            if token.data:
                stack[-1].append_text(decode_entities(token.data))

        elif isinstance(token, Comment):
            continue

    if len(stack) > 1:
        log.debug("Closed %d element(s) left open at end of input", len(stack) - 1)
    log.debug("Built tree with %d element(s)", count)
    return root
