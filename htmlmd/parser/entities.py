"""HTML entity decoding shared by the tokenizer and the tree builder."""

import html
import re

# Non-breaking spaces become ordinary spaces so Markdown wraps them normally.
NBSP_RE = re.compile(r"&nbsp;")


def decode_entities(text: str) -> str:
    """Decode named and numeric character references in *text*."""
    if "&" not in text:
        return text
    return html.unescape(NBSP_RE.sub(" ", text))
