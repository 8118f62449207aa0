from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class DomainModel(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class RenderSettings(DomainModel):
    initial_capacity: Annotated[int, Field(ge=1)] = 256
    write_sentinel: bool = False


class BlockKind(StrEnum):
    blank = "blank"
    processing_instruction = "processing_instruction"
    horizontal_rule = "horizontal_rule"
    raw_html = "raw_html"
    heading = "heading"
    task_item = "task_item"
    list_item = "list_item"
    blockquote = "blockquote"
    code_fence = "code_fence"
    paragraph = "paragraph"


@dataclass(frozen=True)
class SpanRule:
    opener: bytes
    closer: bytes
    open_tag: bytes
    close_tag: bytes
    escape_body: bool = True


@dataclass(frozen=True)
class Link:
    label: bytes
    url: bytes
    end: int


@dataclass
class RenderState:
    """Mutable context shared by the block scanner and the inline parser for one render call.

    ``cursor`` only moves forward. The inline parser is allowed to push it past
    the current line when it copies an embedded ``<?...?>`` span; the block
    scanner then resumes from wherever the cursor was left.
    """

    document: bytes
    cursor: int = 0
    paragraph_open: bool = False
    list_open: bool = False

    @property
    def at_end(self) -> bool:
        return self.cursor >= len(self.document)

    def advance_to(self, position: int) -> None:
        if position < self.cursor:
            raise ValueError(f"cursor may not move backwards ({position} < {self.cursor})")
        self.cursor = min(position, len(self.document))

    def line_end(self, start: int | None = None) -> int:
        pos = self.cursor if start is None else start
        end = self.document.find(b"\n", pos)
        return len(self.document) if end == -1 else end

    def next_line_start(self, start: int | None = None) -> int:
        end = self.line_end(start)
        return min(end + 1, len(self.document))
