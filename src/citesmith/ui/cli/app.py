"""Typer application wiring for the citesmith CLI."""

from __future__ import annotations

from pathlib import Path

import typer

from citesmith.core.config import OutputTarget
from citesmith.core.exceptions import CitationError
from citesmith.pipeline import process_text
from citesmith.processor import Processor

from ._options import (
    AppearanceOrderOption,
    BibliographyOption,
    DebugOption,
    InputPathArgument,
    LinksOption,
    LocaleOption,
    OutputFormatOption,
    OutputPathOption,
    StrictOption,
    StyleOption,
    VerbosityOption,
)
from .diagnostics import CliEmitter
from .state import debug_enabled, emit_error, reset_cli_state, set_cli_state


app = typer.Typer(
    help="Render AsciiDoc citation macros and bibliographies from BibTeX data.",
    context_settings={"help_option_names": ["--help"]},
)


@app.command()
def render(
    input_path: InputPathArgument,
    bibliography: BibliographyOption,
    style: StyleOption = "ieee",
    locale: LocaleOption = "en-US",
    links: LinksOption = False,
    appearance_order: AppearanceOrderOption = False,
    output_format: OutputFormatOption = OutputTarget.ASCIIDOC,
    output: OutputPathOption = None,
    strict: StrictOption = False,
    verbose: VerbosityOption = 0,
    debug: DebugOption = False,
) -> None:
    """Replace citation macros in INPUT and expand bibliography::[] blocks."""
    reset_cli_state()
    state = set_cli_state(verbosity=verbose, debug=debug)

    try:
        processor = Processor(
            bibliography,
            style=style,
            locale=locale,
            links=links,
            numeric_in_appearance_order=appearance_order,
            output=output_format,
            throw_on_unknown=strict,
            emitter=CliEmitter(state),
        )
        text = Path(input_path).read_text(encoding="utf-8")
        result = process_text(text, processor)
    except (CitationError, OSError) as exc:
        if debug_enabled():
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(result, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result, encoding="utf-8")


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main", "render"]
