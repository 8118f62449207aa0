"""Render a small Markdown dialect to an HTML fragment in a single pass."""

from md2html.escaping import escape_html
from md2html.markdown_html import markdown_to_html, render_markdown
from md2html.output_sequence import OutputSequence

__version__ = "0.1.0"

__all__ = [
    "OutputSequence",
    "__version__",
    "escape_html",
    "markdown_to_html",
    "render_markdown",
]
