from __future__ import annotations

from pathlib import Path

import typer

from md2html.document_io import DocumentReadError, DocumentWriteError, read_document, write_document
from md2html.markdown_html import render_markdown
from md2html.settings import RenderSettingsError, load_render_settings

USAGE = "Usage: md2html INPUT [-o OUTPUT]"


def _usage_error(message: str | None = None) -> typer.Exit:
    if message:
        typer.echo(message, err=True)
    typer.echo(USAGE, err=True)
    return typer.Exit(code=1)


def _fatal(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=1)


def run_render(
    *,
    input_path: Path | None,
    output: Path | None,
    config: Path | None,
    extra_args: tuple[str, ...] = (),
) -> None:
    if extra_args:
        raise _usage_error(f"Unknown argument: {extra_args[0]}")
    if input_path is None:
        raise _usage_error()

    try:
        settings = load_render_settings(config_path=config)
        document = read_document(input_path)
    except (RenderSettingsError, DocumentReadError) as exc:
        raise _fatal(str(exc)) from exc

    rendered = render_markdown(document, settings=settings)

    if output is None:
        typer.echo(rendered.fragment())
        return

    payload = rendered.getvalue() if settings.write_sentinel else rendered.fragment()
    try:
        write_document(output, payload)
    except DocumentWriteError as exc:
        raise _fatal(str(exc)) from exc
