from __future__ import annotations

import pytest

from md2html.block_scanner import classify_line, heading_level, scan_document, skip_indent
from md2html.domain.models import BlockKind, RenderState
from md2html.markdown_html import markdown_to_html
from md2html.output_sequence import OutputSequence


def _scan(document: bytes) -> tuple[bytes, RenderState]:
    state = RenderState(document=document)
    out = OutputSequence()
    scan_document(state, out)
    return out.getvalue(), state


def test_plain_text_renders_escaped_paragraph() -> None:
    assert markdown_to_html("a < b\n") == "<p>a &lt; b\n</p>\n"


def test_consecutive_lines_stay_separate_inside_one_paragraph() -> None:
    assert markdown_to_html("one\ntwo\n\nthree\n") == "<p>one\ntwo\n</p>\n<p>three\n</p>\n"


def test_consecutive_list_items_share_one_list() -> None:
    rendered = markdown_to_html("- x\n- x\n- x\n")
    assert rendered == "<ul>\n<li>x</li>\n<li>x</li>\n<li>x</li>\n</ul>\n"


def test_blank_line_splits_lists() -> None:
    rendered = markdown_to_html("- a\n- b\n\n- c\n")
    assert rendered == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n<ul>\n<li>c</li>\n</ul>\n"
    assert rendered.count("<ul>") == 2


def test_paragraph_and_list_close_each_other() -> None:
    assert markdown_to_html("- a\ntext\n") == "<ul>\n<li>a</li>\n</ul>\n<p>text\n</p>\n"
    assert markdown_to_html("text\n- a\n") == "<p>text\n</p>\n<ul>\n<li>a</li>\n</ul>\n"


def test_unterminated_emphasis_emits_nothing_for_the_line() -> None:
    rendered = markdown_to_html("*foo\n")
    assert rendered.startswith("<p>")
    assert rendered == "<p>\n</p>\n"
    assert "foo" not in rendered


def test_fenced_code_block_discards_language_tag() -> None:
    rendered = markdown_to_html("```c\nint x;\n```\n")
    assert rendered == "<pre><code>int x;\n</code></pre>\n"


def test_fenced_code_block_escapes_and_does_not_parse_markup() -> None:
    rendered = markdown_to_html("```\n**a** <b> & [x](y)\n```\nafter\n")
    assert rendered == "<pre><code>**a** &lt;b&gt; &amp; [x](y)\n</code></pre>\n<p>after\n</p>\n"


def test_unterminated_code_fence_runs_to_document_end() -> None:
    rendered = markdown_to_html("```\ncode <b>\n")
    assert rendered == "<pre><code>code &lt;b&gt;\n</code></pre>\n"


@pytest.mark.parametrize("level", range(1, 9))
def test_heading_level_matches_hash_count(level: int) -> None:
    rendered = markdown_to_html("#" * level + " Title *x*\n")
    assert rendered == f"<h{level}>Title <i>x</i></h{level}>\n"


def test_hashes_without_space_are_paragraph_text() -> None:
    assert markdown_to_html("#nospace\n") == "<p>#nospace\n</p>\n"


def test_task_items_are_standalone_lists() -> None:
    rendered = markdown_to_html("- [ ] todo\n- [ ] next\n")
    checkbox = '<input type="checkbox" disabled>'
    assert rendered == (f"<ul><li>{checkbox}todo</li></ul>\n<ul><li>{checkbox}next</li></ul>\n")


def test_task_item_closes_open_list() -> None:
    rendered = markdown_to_html("- a\n- [ ] b\n")
    assert rendered == '<ul>\n<li>a</li>\n</ul>\n<ul><li><input type="checkbox" disabled>b</li></ul>\n'


def test_blockquote_is_one_element_per_line() -> None:
    rendered = markdown_to_html("> quoted *text*\n> again\n")
    assert rendered == "<blockquote>quoted <i>text</i></blockquote>\n<blockquote>again</blockquote>\n"


def test_horizontal_rule_closes_open_paragraph() -> None:
    rendered = markdown_to_html("intro\n---\nafter\n")
    assert rendered == "<p>intro\n</p>\n<hr>\n<p>after\n</p>\n"


def test_horizontal_rule_needs_previous_line_and_newline() -> None:
    assert markdown_to_html("---\n") == "<p>---\n</p>\n"
    assert markdown_to_html("a\n---") == "<p>a\n---\n</p>\n"


def test_raw_html_block_spans_lines_until_closing_tag() -> None:
    rendered = markdown_to_html("<div>\n*raw*\n</div> tail *x*\nnext\n")
    assert rendered == "<div>\n*raw*\n</div> tail <i>x</i>\n<p>next\n</p>\n"


def test_raw_html_without_closing_tag_copies_one_line() -> None:
    assert markdown_to_html("<br>\ntext\n") == "<br>\n<p>text\n</p>\n"


def test_raw_html_search_absorbs_up_to_later_closing_tag() -> None:
    rendered = markdown_to_html("<img src=x>\nplain *x*\n<p>para</p>\n")
    assert rendered == "<img src=x>\nplain *x*\n<p>para</p>\n"


def test_stray_markers_between_words_render_as_text() -> None:
    assert markdown_to_html("a ** b\n") == "<p>a ** b\n</p>\n"
    assert markdown_to_html("x __ y\n") == "<p>x __ y\n</p>\n"


def test_raw_html_closes_paragraph() -> None:
    assert markdown_to_html("text\n<div>x</div>\n") == "<p>text\n</p>\n<div>x</div>\n"


def test_processing_instruction_block_keeps_paragraph_open() -> None:
    rendered = markdown_to_html("para\n<?x?>\nmore\n")
    assert rendered == "<p>para\n<?x?>\nmore\n</p>\n"


def test_processing_instruction_block_spans_lines() -> None:
    rendered = markdown_to_html("<?php\necho '<b>';\n?>\nafter\n")
    assert rendered == "<?php\necho '<b>';\n?>\n<p>after\n</p>\n"


def test_processing_instruction_followed_by_text_on_same_line() -> None:
    assert markdown_to_html("<?x?> hello\n") == "<?x?><p>hello\n</p>\n"


def test_inline_processing_instruction_moves_block_cursor() -> None:
    rendered = markdown_to_html("a <?x\n# not a heading\ny?> b\nc\n")
    assert rendered == "<p>a <?x\n# not a heading\ny?> b\nc\n</p>\n"


def test_hard_break_inside_paragraph() -> None:
    rendered = markdown_to_html("line one  \nline two\n")
    assert rendered == "<p>line one<br>\nline two\n</p>\n"


def test_leading_indentation_is_trimmed() -> None:
    assert markdown_to_html("   \t- item\n") == "<ul>\n<li>item</li>\n</ul>\n"


def test_empty_document_renders_nothing() -> None:
    assert markdown_to_html("") == ""
    assert markdown_to_html("\n\n   \n") == ""


def test_missing_final_newline_still_closes_blocks() -> None:
    assert markdown_to_html("- a") == "<ul>\n<li>a</li>\n</ul>\n"


def test_scan_leaves_state_closed_and_cursor_at_end() -> None:
    document = b"para\n- item\ntext"
    _, state = _scan(document)
    assert not state.paragraph_open
    assert not state.list_open
    assert state.cursor == len(document)


def test_reserved_characters_outside_passthrough_spans_are_escaped() -> None:
    rendered = markdown_to_html("x & y > z\n- a<b\n# h&\n> q<\n")
    assert rendered == (
        "<p>x &amp; y &gt; z\n</p>\n<ul>\n<li>a&lt;b</li>\n</ul>\n<h1>h&amp;</h1>\n<blockquote>q&lt;</blockquote>\n"
    )


@pytest.mark.parametrize(
    ("line", "line_start", "expected"),
    [
        (b"   \n", 0, BlockKind.blank),
        (b"<?x?>\n", 0, BlockKind.processing_instruction),
        (b"<?x\n", 0, BlockKind.raw_html),
        (b"---\n", 3, BlockKind.horizontal_rule),
        (b"---\n", 0, BlockKind.paragraph),
        (b"<div>\n", 0, BlockKind.raw_html),
        (b"### h\n", 0, BlockKind.heading),
        (b"- [ ] t\n", 0, BlockKind.task_item),
        (b"- i\n", 0, BlockKind.list_item),
        (b"> q\n", 0, BlockKind.blockquote),
        (b"```py\n", 0, BlockKind.code_fence),
        (b"-no\n", 0, BlockKind.paragraph),
        (b">no\n", 0, BlockKind.paragraph),
    ],
)
def test_classify_line(line: bytes, line_start: int, expected: BlockKind) -> None:
    document = b"x" * line_start + line
    content = skip_indent(document, line_start)
    assert classify_line(document, line_start, content) == expected


def test_heading_level_requires_space() -> None:
    assert heading_level(b"## x", 0) == 2
    assert heading_level(b"##x", 0) == 0
    assert heading_level(b"x", 0) == 0
