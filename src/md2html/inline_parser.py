from __future__ import annotations

from md2html.domain.models import Link, RenderState, SpanRule
from md2html.escaping import append_escaped
from md2html.output_sequence import OutputSequence

_SPACE = ord(" ")
_NEWLINE = ord("\n")

# Longer and more specific markers must come first.
SPAN_RULES: tuple[SpanRule, ...] = (
    SpanRule(b"***", b"***", b"<strong><i>", b"</i></strong>"),
    SpanRule(b"**_", b"_**", b"<strong><i>", b"</i></strong>"),
    SpanRule(b"_**", b"**_", b"<strong><i>", b"</i></strong>"),
    SpanRule(b"**", b"**", b"<strong>", b"</strong>"),
    SpanRule(b"*", b"*", b"<i>", b"</i>"),
    SpanRule(b"_", b"_", b"<i>", b"</i>"),
    SpanRule(b"`", b"`", b"<code>", b"</code>"),
    SpanRule(b"\\(", b"\\)", b"\\(", b"\\)", escape_body=False),
)

PI_OPEN = b"<?"
PI_CLOSE = b"?>"


class LineAbandoned(Exception):
    """Raised when a span opener has no closer on its line."""


def parse_inline(state: RenderState, out: OutputSequence) -> None:
    """Render the line starting at ``state.cursor`` into ``out``.

    On return the cursor sits where scanning stopped: the line terminator, the
    end of the document, or the marker that could not be closed.
    """
    _InlineParser(state, out).run()


def match_opening_rule(document: bytes, pos: int) -> SpanRule | None:
    rejected: bytes | None = None
    for rule in SPAN_RULES:
        if not document.startswith(rule.opener, pos):
            continue
        # A rejected opener also rules out the shorter markers it starts with.
        if rejected is not None and rejected.startswith(rule.opener):
            continue
        if _byte_at(document, pos + len(rule.opener)) == _SPACE:
            rejected = rule.opener
            continue
        return rule
    return None


def find_closing_marker(document: bytes, closer: bytes, start: int, end: int) -> int:
    pos = document.find(closer, start, end)
    while pos != -1 and _byte_at(document, pos - 1) == _SPACE:
        pos = document.find(closer, pos + 1, end)
    return pos


def is_hard_break(document: bytes, pos: int, end: int) -> bool:
    if pos + 2 != end or _byte_at(document, end) != _NEWLINE:
        return False
    if document[pos:end] != b"  ":
        return False
    return pos == 0 or document[pos - 1] != _SPACE


def scan_link(document: bytes, pos: int, end: int) -> Link | None:
    """Parse ``[label](url)`` at ``pos``.

    Returns ``None`` when the bracket does not resolve to ``](`` on this line.
    Raises ``LineAbandoned`` when the URL is never closed.
    """
    label_end = document.find(b"]", pos + 1, end)
    if label_end == -1 or not document.startswith(b"(", label_end + 1):
        return None
    url_end = document.find(b")", label_end + 2, end)
    if url_end == -1:
        raise LineAbandoned
    return Link(
        label=document[pos + 1 : label_end],
        url=document[label_end + 2 : url_end],
        end=url_end + 1,
    )


def _byte_at(document: bytes, pos: int) -> int | None:
    if 0 <= pos < len(document):
        return document[pos]
    return None


class _InlineParser:
    def __init__(self, state: RenderState, out: OutputSequence) -> None:
        self.state = state
        self.out = out
        self.document = state.document
        self.pos = state.cursor
        self.end = state.line_end(self.pos)

    def run(self) -> None:
        try:
            while self.pos < self.end:
                if is_hard_break(self.document, self.pos, self.end):
                    self.out.append_bytes(b"<br>")
                    break
                self.pos = self._step()
        except LineAbandoned:
            # Unclosed marker: nothing more is emitted for this line.
            pass
        self.state.advance_to(self.pos)

    def _step(self) -> int:
        for recognizer in (self._try_span, self._try_link, self._try_processing_instruction):
            next_pos = recognizer()
            if next_pos is not None:
                return next_pos
        append_escaped(self.out, self.document[self.pos : self.pos + 1])
        return self.pos + 1

    def _try_span(self) -> int | None:
        rule = match_opening_rule(self.document, self.pos)
        if rule is None:
            return None
        body_start = self.pos + len(rule.opener)
        close = find_closing_marker(self.document, rule.closer, body_start, self.end)
        if close == -1:
            raise LineAbandoned
        if close == body_start:
            # Doubled marker such as "__" with nothing between: literal text.
            return None
        body = self.document[body_start:close]
        self.out.append_bytes(rule.open_tag)
        if rule.escape_body:
            append_escaped(self.out, body)
        else:
            self.out.append_bytes(body)
        self.out.append_bytes(rule.close_tag)
        return close + len(rule.closer)

    def _try_link(self) -> int | None:
        if not self.document.startswith(b"[", self.pos):
            return None
        link = scan_link(self.document, self.pos, self.end)
        if link is None:
            append_escaped(self.out, b"[")
            return self.pos + 1
        self.out.append_bytes(b'<a href="')
        self.out.append_bytes(link.url)
        self.out.append_bytes(b'">')
        append_escaped(self.out, link.label)
        self.out.append_bytes(b"</a>")
        return link.end

    def _try_processing_instruction(self) -> int | None:
        if not self.document.startswith(PI_OPEN, self.pos):
            return None
        close = self.document.find(PI_CLOSE, self.pos + len(PI_OPEN))
        if close == -1:
            return None
        after = close + len(PI_CLOSE)
        self.out.append_bytes(self.document[self.pos : after])
        self.state.advance_to(after)
        self.end = self.state.line_end(after)
        return after
