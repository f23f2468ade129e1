"""Conversion options -- an explicit record passed by the caller."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConvertOptions:
    """Markdown markers used by the renderer.

    The defaults produce ATX headings, ``-`` bullets, ``**strong**``,
    ``*em*``, ``~~strike~~`` and backtick fences.
    """

    bullet: str = "-"
    strong_marker: str = "**"
    em_marker: str = "*"
    strike_marker: str = "~~"
    code_fence: str = "```"
    hr: str = "---"
