from __future__ import annotations

import re

from md2html.output_sequence import OutputSequence

_ESCAPES: dict[bytes, bytes] = {
    b"<": b"&lt;",
    b">": b"&gt;",
    b"&": b"&amp;",
    b"'": b"&#39;",
    b'"': b"&quot;",
}
_ESCAPE_RE = re.compile(rb"[<>&'\"]")


def escape_html(run: bytes) -> bytes:
    return _ESCAPE_RE.sub(lambda match: _ESCAPES[match.group()], run)


def append_escaped(out: OutputSequence, run: bytes) -> None:
    out.append_bytes(escape_html(run))
