"""Core domain types for md2html."""

from md2html.domain.models import (
    BlockKind,
    DomainModel,
    Link,
    RenderSettings,
    RenderState,
    SpanRule,
)

__all__ = [
    "BlockKind",
    "DomainModel",
    "Link",
    "RenderSettings",
    "RenderState",
    "SpanRule",
]
