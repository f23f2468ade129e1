"""Render module -- Markdown renderer and its options record."""

from htmlmd.render.markdown import MarkdownRenderer, render
from htmlmd.render.options import ConvertOptions

__all__ = ["ConvertOptions", "MarkdownRenderer", "render"]
