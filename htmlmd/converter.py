"""HTML to Markdown conversion."""

from typing import Optional

from htmlmd.parser.tokenizer import tokenize
from htmlmd.parser.tree import build
from htmlmd.render.markdown import render
from htmlmd.render.options import ConvertOptions
from htmlmd.utils.logger import get_logger

log = get_logger(__name__)


def convert(html: Optional[str], options: Optional[ConvertOptions] = None) -> str:
    """Convert an HTML string (document or fragment) to clean Markdown.

    Never fails on malformed markup; every input produces some output.
    """
    if not html or not html.strip():
        return ""
    text = html.replace("\r\n", "\n").replace("\r", "\n")
    root = build(tokenize(text))
    md = render(root, options)
    log.debug("Converted %d chars of HTML to %d chars of Markdown", len(html), len(md))
    return md
