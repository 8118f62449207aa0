from pathlib import Path
from typing import Annotated

import typer

app = typer.Typer(add_completion=False)


def _version_callback(value: bool) -> None:
    if not value:
        return
    from md2html import __version__

    typer.echo(__version__)
    raise typer.Exit()


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def render(
    ctx: typer.Context,
    input_path: Annotated[
        Path | None,
        typer.Argument(metavar="INPUT", show_default=False, help="Markdown file to render."),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the HTML fragment here instead of stdout."),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(help="YAML settings file (default: $MD2HTML_CONFIG or ~/.config/md2html/config.yaml)."),
    ] = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Print version."),
    ] = False,
) -> None:
    """Render a Markdown file to an HTML fragment."""
    from md2html.entrypoints.render import run_render

    run_render(
        input_path=input_path,
        output=output,
        config=config,
        extra_args=tuple(ctx.args),
    )


def main() -> None:
    # Usage errors exit with 1 rather than click's default of 2.
    try:
        exit_code = app(standalone_mode=False)
    except typer.TyperException as exc:
        exc.show()
        raise SystemExit(1) from exc
    if exit_code:
        raise SystemExit(exit_code)
