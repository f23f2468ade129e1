"""htmlmd -- convert HTML fragments to Markdown via tokenize, build-tree, render."""

from htmlmd.converter import convert
from htmlmd.render.options import ConvertOptions

__all__ = ["convert", "ConvertOptions"]
