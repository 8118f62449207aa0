from __future__ import annotations

from collections.abc import Callable

from md2html.domain.models import BlockKind, RenderState
from md2html.escaping import append_escaped
from md2html.inline_parser import PI_CLOSE, PI_OPEN, parse_inline
from md2html.output_sequence import OutputSequence

_INDENT = b" \t"
_CODE_FENCE = b"```"
_TASK_PREFIX = b"- [ ] "
_LIST_PREFIX = b"- "
_QUOTE_PREFIX = b"> "
_RULE_LINE = b"---"
_CHECKBOX = b'<input type="checkbox" disabled>'


def skip_indent(document: bytes, pos: int) -> int:
    while pos < len(document) and document[pos] in _INDENT:
        pos += 1
    return pos


def heading_level(document: bytes, content: int) -> int:
    """Number of leading ``#`` when they are followed by a space, else 0."""
    level = 0
    while document.startswith(b"#", content + level):
        level += 1
    if level and document.startswith(b" ", content + level):
        return level
    return 0


def classify_line(document: bytes, line_start: int, content: int) -> BlockKind:
    end = document.find(b"\n", content)
    if end == -1:
        end = len(document)

    if content == end:
        return BlockKind.blank
    if document.startswith(PI_OPEN, content) and document.find(PI_CLOSE, content + len(PI_OPEN)) != -1:
        return BlockKind.processing_instruction
    if line_start > 0 and end < len(document) and document[content:end] == _RULE_LINE:
        return BlockKind.horizontal_rule
    if document.startswith(b"<", content):
        return BlockKind.raw_html
    if heading_level(document, content):
        return BlockKind.heading
    if document.startswith(_TASK_PREFIX, content):
        return BlockKind.task_item
    if document.startswith(_LIST_PREFIX, content):
        return BlockKind.list_item
    if document.startswith(_QUOTE_PREFIX, content):
        return BlockKind.blockquote
    if document.startswith(_CODE_FENCE, content):
        return BlockKind.code_fence
    return BlockKind.paragraph


def scan_document(state: RenderState, out: OutputSequence) -> None:
    _BlockScanner(state, out).run()


class _BlockScanner:
    def __init__(self, state: RenderState, out: OutputSequence) -> None:
        self.state = state
        self.out = out
        self.document = state.document
        self._handlers: dict[BlockKind, Callable[[int], None]] = {
            BlockKind.blank: self._blank,
            BlockKind.processing_instruction: self._processing_instruction,
            BlockKind.horizontal_rule: self._horizontal_rule,
            BlockKind.raw_html: self._raw_html,
            BlockKind.heading: self._heading,
            BlockKind.task_item: self._task_item,
            BlockKind.list_item: self._list_item,
            BlockKind.blockquote: self._blockquote,
            BlockKind.code_fence: self._code_fence,
            BlockKind.paragraph: self._paragraph,
        }

    def run(self) -> None:
        while not self.state.at_end:
            line_start = self.state.cursor
            content = skip_indent(self.document, line_start)
            kind = classify_line(self.document, line_start, content)
            self._handlers[kind](content)

        self.close_paragraph()
        self.close_list()

    def close_paragraph(self) -> None:
        if not self.state.paragraph_open:
            return
        self.out.append_bytes(b"</p>\n")
        self.state.paragraph_open = False

    def close_list(self) -> None:
        if not self.state.list_open:
            return
        self.out.append_bytes(b"</ul>\n")
        self.state.list_open = False

    def close_blocks(self) -> None:
        self.close_paragraph()
        self.close_list()

    def _inline_line(self, start: int) -> None:
        self.state.advance_to(start)
        parse_inline(self.state, self.out)

    def _finish_line(self) -> None:
        self.state.advance_to(self.state.next_line_start())

    def _blank(self, content: int) -> None:
        self.close_blocks()
        self.state.advance_to(self.state.next_line_start(content))

    def _processing_instruction(self, content: int) -> None:
        close = self.document.find(PI_CLOSE, content + len(PI_OPEN))
        after = close + len(PI_CLOSE)
        self.out.append_bytes(self.document[content:after])

        rest_end = self.state.line_end(after)
        if self.document[after:rest_end].strip(_INDENT):
            self.state.advance_to(after)
            return
        if rest_end < len(self.document):
            self.out.append_bytes(b"\n")
        self.state.advance_to(self.state.next_line_start(after))

    def _horizontal_rule(self, content: int) -> None:
        self.close_blocks()
        self.out.append_bytes(b"<hr>\n")
        self.state.advance_to(self.state.next_line_start(content))

    def _raw_html(self, content: int) -> None:
        self.close_blocks()
        closing_tag = self.document.find(b"</", content)
        tag_end = -1 if closing_tag == -1 else self.document.find(b">", closing_tag + 2)

        if tag_end == -1:
            self.out.append_bytes(self.document[content : self.state.line_end(content)])
            self.out.append_bytes(b"\n")
            self.state.advance_to(self.state.next_line_start(content))
            return

        # Copied through the first closing tag even when it sits many lines below.
        self.out.append_bytes(self.document[content : tag_end + 1])
        self._inline_line(tag_end + 1)
        self.out.append_bytes(b"\n")
        self._finish_line()

    def _heading(self, content: int) -> None:
        self.close_blocks()
        level = heading_level(self.document, content)
        text = content + level
        while self.document.startswith(b" ", text):
            text += 1

        self.out.append_str(f"<h{level}>")
        self._inline_line(text)
        self.out.append_str(f"</h{level}>\n")
        self._finish_line()

    def _task_item(self, content: int) -> None:
        self.close_blocks()
        self.out.append_bytes(b"<ul><li>" + _CHECKBOX)
        self._inline_line(content + len(_TASK_PREFIX))
        self.out.append_bytes(b"</li></ul>\n")
        self._finish_line()

    def _list_item(self, content: int) -> None:
        self.close_paragraph()
        if not self.state.list_open:
            self.out.append_bytes(b"<ul>\n")
            self.state.list_open = True
        self.out.append_bytes(b"<li>")
        self._inline_line(content + len(_LIST_PREFIX))
        self.out.append_bytes(b"</li>\n")
        self._finish_line()

    def _blockquote(self, content: int) -> None:
        self.close_blocks()
        self.out.append_bytes(b"<blockquote>")
        self._inline_line(content + len(_QUOTE_PREFIX))
        self.out.append_bytes(b"</blockquote>\n")
        self._finish_line()

    def _code_fence(self, content: int) -> None:
        self.close_blocks()
        body_start = self.state.next_line_start(content)
        close = self.document.find(_CODE_FENCE, body_start)
        if close == -1:
            body_end = after = len(self.document)
        else:
            body_end, after = close, close + len(_CODE_FENCE)

        self.out.append_bytes(b"<pre><code>")
        append_escaped(self.out, self.document[body_start:body_end])
        self.out.append_bytes(b"</code></pre>\n")
        self.state.advance_to(after)

    def _paragraph(self, content: int) -> None:
        self.close_list()
        if not self.state.paragraph_open:
            self.out.append_bytes(b"<p>")
            self.state.paragraph_open = True
        self._inline_line(content)
        self.out.append_bytes(b"\n")
        self._finish_line()
