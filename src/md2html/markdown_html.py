from __future__ import annotations

from md2html.block_scanner import scan_document
from md2html.domain.models import RenderSettings, RenderState
from md2html.output_sequence import OutputSequence


def render_markdown(document: bytes, *, settings: RenderSettings | None = None) -> OutputSequence:
    """Render a Markdown document to an HTML fragment.

    Supported:
    - Headings: `#`, `##`, ... followed by a space
    - Paragraphs (consecutive lines stay separate lines inside one `<p>`)
    - Lists: `- item`, task items `- [ ] item`
    - Blockquotes: `> text`
    - Fenced code blocks delimited by three backticks
    - Horizontal rules: `---`
    - Raw HTML blocks and `<?...?>` processing instructions, copied verbatim
    - Inline: `**strong**`, `*em*`, `_em_`, `***both***`, `` `code` ``,
      `[label](url)`, `\\(math\\)`, two trailing spaces for `<br>`

    The returned sequence ends with a NUL sentinel; use ``fragment()`` for the HTML.
    """
    settings = settings or RenderSettings()
    out = OutputSequence(initial_capacity=settings.initial_capacity)
    state = RenderState(document=bytes(document))
    scan_document(state, out)
    out.terminate()
    return out


def markdown_to_html(markdown_text: str, *, settings: RenderSettings | None = None) -> str:
    rendered = render_markdown(markdown_text.encode("utf-8"), settings=settings)
    return rendered.fragment().decode("utf-8")
