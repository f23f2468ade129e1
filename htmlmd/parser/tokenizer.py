"""Markup tokenizer -- splits raw HTML text into a lazy stream of tokens."""

import re
from typing import Dict, Iterator, List, Optional

from htmlmd.parser.entities import decode_entities
from htmlmd.parser.tokens import Comment, EndTag, SelfClosingTag, StartTag, Text, Token
from htmlmd.utils.logger import get_logger

log = get_logger(__name__)

START_TAG_RE = re.compile(
    r"""<([a-zA-Z][^\s/<>]*)"""
    r"""((?:\s+[^\s"'<>/=]+(?:\s*=\s*(?:"[^"<]*"|'[^'<]*'|[^\s"'<>]+))?)*)"""
    r"""\s*(/?)\s*>"""
)
END_TAG_RE = re.compile(r"</([a-zA-Z][^\s/<>]*)[^<>]*>")
ATTR_RE = re.compile(r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'<>]+)))?""")

# Content of these elements is not markup: everything up to the closing tag is dropped.
RAW_TEXT_END_RE = {
    name: re.compile(rf"</{name}(?=[\s/>])[^>]*>", re.IGNORECASE)
    for name in ("script", "style")
}


def _parse_attrs(raw: str) -> Dict[str, str]:
    attrs: Dict[str, str] = {}
    for match in ATTR_RE.finditer(raw):
        value = next((g for g in match.group(2, 3, 4) if g is not None), "")
        # Later duplicates overwrite earlier ones.
        attrs[match.group(1).lower()] = decode_entities(value)
    return attrs


def tokenize(html: str, include_comments: bool = False) -> Iterator[Token]:
    """Yield tokens for *html* lazily.

    Each call starts from scratch, so the same string can be tokenized any
    number of times.  Malformed markup never raises: a ``<`` that does not
    open a tag, comment or declaration is passed through as literal text.
    Comments are dropped unless *include_comments* is set.

    A tag never spans another ``<``, so every match is bounded by the next
    ``<`` and the whole scan stays linear in the input length.
    """
    pos = 0
    end = len(html)
    next_gt = -1
    pending: List[str] = []

    while pos < end:
        lt = html.find("<", pos)
        if lt < 0:
            pending.append(html[pos:])
            break
        if lt > pos:
            pending.append(html[pos:lt])
        pos = lt

        if html.startswith("<!--", pos):
            close = html.find("-->", pos + 4)
            if close < 0:
                log.debug("Unterminated comment at offset %d, dropping rest of input", pos)
                break
            if include_comments:
                if pending:
                    yield Text("".join(pending))
                    pending = []
                yield Comment(html[pos + 4 : close])
            pos = close + 3
            continue

        if next_gt < pos:
            next_gt = html.find(">", pos)
            if next_gt < 0:
                log.debug("No '>' after offset %d, rest of input is text", pos)
                pending.append(html[pos:])
                break
        segment_end = html.find("<", pos + 1)
        if segment_end < 0:
            segment_end = end
        token: Optional[Token] = None

        if html.startswith(("<!", "<?"), pos):
            if next_gt >= segment_end:
                pending.append(html[pos:segment_end])
                pos = segment_end
                continue
            pos = next_gt + 1

        elif html.startswith("</", pos):
            match = END_TAG_RE.match(html, pos, segment_end)
            if not match:
                pending.append(html[pos:segment_end])
                pos = segment_end
                continue
            token = EndTag(match.group(1).lower())
            pos = match.end()

        else:
            match = START_TAG_RE.match(html, pos, segment_end)
            if not match:
                log.debug("Literal '<' at offset %d", pos)
                pending.append(html[pos:segment_end])
                pos = segment_end
                continue
            name = match.group(1).lower()
            self_closing = bool(match.group(3))
            pos = match.end()
            if name in RAW_TEXT_END_RE:
                if not self_closing:
                    close_match = RAW_TEXT_END_RE[name].search(html, pos)
                    pos = close_match.end() if close_match else end
                log.debug("Dropped <%s> block ending at offset %d", name, pos)
                continue
            attrs = _parse_attrs(match.group(2))
            token = SelfClosingTag(name, attrs) if self_closing else StartTag(name, attrs)

        if token is not None:
            if pending:
                yield Text("".join(pending))
                pending = []
            yield token

    if pending:
        yield Text("".join(pending))
