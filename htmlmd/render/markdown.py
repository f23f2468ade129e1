"""Markdown renderer -- walks the node tree depth-first and emits Markdown text."""

import re
from typing import Callable, Dict, Iterator, List, Optional

from htmlmd.parser.tree import DOCUMENT, Element, Node, TextNode
from htmlmd.render.options import ConvertOptions

BLANK_LINE_RE = re.compile(r"^[ \t]+$", re.MULTILINE)
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
SOURCE_INDENT_RE = re.compile(r"\n[ \t]+")
UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")
BACKTICK_RUN_RE = re.compile(r"`+")

# Constructs with no Markdown analogue; their whole subtree is dropped.
STRIPPED_TAGS = frozenset(
    {"iframe", "object", "embed", "noscript", "template", "select", "textarea", "canvas", "svg"}
)
TABLE_SECTIONS = ("thead", "tbody", "tfoot")
TABLE_CELLS = ("th", "td")
LANGUAGE_PREFIXES = ("language-", "lang-")


def normalize_blank_lines(text: str) -> str:
    """Empty whitespace-only lines and collapse 3+ newlines to exactly 2.

    A whitespace-only line counts as trailing whitespace, so plain text still
    comes back unchanged apart from trimming.
    """
    return EXCESS_NEWLINES_RE.sub("\n\n", BLANK_LINE_RE.sub("", text))


def _indent(text: str, indent: str) -> str:
    return "\n".join(indent + line if line.strip() else "" for line in text.split("\n"))


def _title_suffix(element: Element) -> str:
    title = element.attrs.get("title")
    if not title:
        return ""
    return ' "%s"' % title.replace('"', '\\"')


def _language(element: Optional[Element]) -> str:
    if element is None:
        return ""
    for cls in element.attrs.get("class", "").split():
        for prefix in LANGUAGE_PREFIXES:
            if cls.startswith(prefix) and len(cls) > len(prefix):
                return cls[len(prefix) :]
    return ""


def _child_elements(element: Element) -> Iterator[Element]:
    for child in element.children:
        if isinstance(child, Element):
            yield child


def _table_rows(table: Element) -> Iterator[Element]:
    for child in _child_elements(table):
        if child.tag == "tr":
            yield child
        elif child.tag in TABLE_SECTIONS:
            for row in _child_elements(child):
                if row.tag == "tr":
                    yield row


def _table_row(cells: List[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def _has_content(nodes: List[Node]) -> bool:
    return any(isinstance(n, Element) or n.data.strip() for n in nodes)


def _item_segments(item: Element) -> List[List[Node]]:
    """Split an ``li`` into the node runs of one or more list items.

    An unclosed ``<li>`` swallows the next one (``<li>a<li>b``), so an ``li``
    found directly inside another starts a sibling item.
    """
    segments: List[List[Node]] = [[]]
    for child in item.children:
        if isinstance(child, Element) and child.tag == "li":
            segments.extend(_item_segments(child))
            segments.append([])
        else:
            segments[-1].append(child)
    return [nodes for i, nodes in enumerate(segments) if i == 0 or _has_content(nodes)]


class MarkdownRenderer:
    """Renders a document tree to Markdown.

    Every element kind is looked up in a dispatch table; tags without an
    entry are transparent and contribute only their children's output.
    """

    def __init__(self, options: Optional[ConvertOptions] = None):
        self.options = options or ConvertOptions()
        self._handlers: Dict[str, Callable[[Element], str]] = {
            "strong": self._strong,
            "b": self._strong,
            "em": self._emphasis,
            "i": self._emphasis,
            "del": self._strike,
            "s": self._strike,
            "strike": self._strike,
            "code": self._inline_code,
            "pre": self._code_block,
            "a": self._link,
            "img": self._image,
            "blockquote": self._blockquote,
            "ul": self._unordered_list,
            "ol": self._ordered_list,
            "table": self._table,
            "hr": self._rule,
            "p": self._paragraph,
            "br": self._line_break,
        }
        for level in range(1, 7):
            self._handlers[f"h{level}"] = self._heading
        for tag in STRIPPED_TAGS:
            self._handlers[tag] = self._strip

    def render(self, root: Element) -> str:
        """Render *root* and normalise blank lines and surrounding whitespace."""
        return normalize_blank_lines(self.render_node(root)).strip()

    def render_node(self, node: Node) -> str:
        if isinstance(node, TextNode):
            return node.data
        handler = self._handlers.get(node.tag, self.render_children)
        return handler(node)

    def render_children(self, element: Element) -> str:
        return self._render_nodes(element.children, dedent=element.tag != DOCUMENT)

    def _render_nodes(self, nodes: List[Node], dedent: bool = True) -> str:
        # Source indentation inside elements would read as an indented code block.
        parts: List[str] = []
        for node in nodes:
            if isinstance(node, TextNode) and dedent:
                parts.append(SOURCE_INDENT_RE.sub("\n", node.data))
            else:
                parts.append(self.render_node(node))
        return "".join(parts)

    # --- Inline -------------------------------------------------------------

    def _wrap(self, element: Element, marker: str) -> str:
        content = self.render_children(element)
        stripped = content.strip()
        if not stripped:
            return content
        # Markers must hug the text, so edge whitespace moves outside them.
        lead = content[: len(content) - len(content.lstrip())]
        trail = content[len(content.rstrip()) :]
        return f"{lead}{marker}{stripped}{marker}{trail}"

    def _strong(self, element: Element) -> str:
        return self._wrap(element, self.options.strong_marker)

    def _emphasis(self, element: Element) -> str:
        return self._wrap(element, self.options.em_marker)

    def _strike(self, element: Element) -> str:
        return self._wrap(element, self.options.strike_marker)

    def _inline_code(self, element: Element) -> str:
        text = element.text_content()
        if not text:
            return ""
        longest = max((len(run) for run in BACKTICK_RUN_RE.findall(text)), default=0)
        delimiter = "`" * (longest + 1)
        if text.startswith("`") or text.endswith("`"):
            text = f" {text} "
        return f"{delimiter}{text}{delimiter}"

    def _link(self, element: Element) -> str:
        href = element.attrs.get("href", "")
        return f"[{self.render_children(element)}]({href}{_title_suffix(element)})"

    def _image(self, element: Element) -> str:
        alt = element.attrs.get("alt", "")
        src = element.attrs.get("src", "")
        return f"![{alt}]({src}{_title_suffix(element)})"

    def _line_break(self, element: Element) -> str:
        return "  \n"

    def _strip(self, element: Element) -> str:
        return ""

    # --- Blocks -------------------------------------------------------------

    def _heading(self, element: Element) -> str:
        level = int(element.tag[1])
        content = re.sub(r"\s*\n\s*", " ", self.render_children(element).strip())
        return f"\n{'#' * level} {content}\n"

    def _paragraph(self, element: Element) -> str:
        return f"\n{self.render_children(element).strip()}\n"

    def _rule(self, element: Element) -> str:
        return f"\n{self.options.hr}\n"

    def _code_block(self, element: Element) -> str:
        code = next((c for c in _child_elements(element) if c.tag == "code"), None)
        language = _language(code) or _language(element)
        fence = self.options.code_fence
        return f"\n{fence}{language}\n{element.text_content().strip()}\n{fence}\n"

    def _blockquote(self, element: Element) -> str:
        content = normalize_blank_lines(self.render_children(element)).strip()
        lines = [f"> {line}" if line.strip() else ">" for line in content.split("\n")]
        return "\n" + "\n".join(lines) + "\n"

    def _list_item(self, nodes: List[Node], prefix: str) -> str:
        content = normalize_blank_lines(self._render_nodes(nodes)).strip()
        first, _, rest = content.partition("\n")
        if rest:
            first += "\n" + _indent(rest, " " * len(prefix))
        return f"{prefix}{first}\n"

    def _list(self, element: Element, ordered: bool) -> str:
        lines: List[str] = []
        index = 0
        indent = ""
        for child in _child_elements(element):
            if child.tag == "li":
                for nodes in _item_segments(child):
                    index += 1
                    prefix = f"{index}. " if ordered else f"{self.options.bullet} "
                    lines.append(self._list_item(nodes, prefix))
                    indent = " " * len(prefix)
            elif child.tag in ("ul", "ol"):
                # A list nested directly in a list belongs to the previous item.
                nested = self.render_node(child).strip("\n")
                if nested:
                    lines.append(_indent(nested, indent) + "\n")
        return "\n" + "".join(lines) + "\n"

    def _unordered_list(self, element: Element) -> str:
        return self._list(element, ordered=False)

    def _ordered_list(self, element: Element) -> str:
        return self._list(element, ordered=True)

    def _table_cell(self, cell: Element) -> str:
        lines = (line.strip() for line in self.render_children(cell).split("\n"))
        return UNESCAPED_PIPE_RE.sub(r"\\|", " ".join(line for line in lines if line))

    def _table(self, element: Element) -> str:
        rows: List[List[str]] = []
        for row in _table_rows(element):
            cells = [self._table_cell(c) for c in _child_elements(row) if c.tag in TABLE_CELLS]
            if cells:
                rows.append(cells)
        if not rows:
            return ""
        lines = [_table_row(rows[0]), _table_row(["---"] * len(rows[0]))]
        lines.extend(_table_row(cells) for cells in rows[1:])
        return "\n" + "\n".join(lines) + "\n\n"


def render(root: Element, options: Optional[ConvertOptions] = None) -> str:
    """Render the tree under *root* to a Markdown string."""
    return MarkdownRenderer(options).render(root)
