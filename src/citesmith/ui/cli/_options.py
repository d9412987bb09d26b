"""Shared Typer option definitions for the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from citesmith.core.config import OutputTarget


INPUTS_PANEL = "Input Handling"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputPathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="INPUT",
        help="AsciiDoc document containing cite:[...] and citenp:[...] macros.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

BibliographyOption = Annotated[
    Path,
    typer.Option(
        "--bibliography",
        "-b",
        help="BibTeX database providing the cited references.",
        dir_okay=False,
        rich_help_panel=INPUTS_PANEL,
    ),
]

StyleOption = Annotated[
    str,
    typer.Option(
        "--style",
        "-s",
        help="Citation style, e.g. 'ieee', 'apa' or 'chicago-author-date'.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

LocaleOption = Annotated[
    str,
    typer.Option(
        "--locale",
        help="Locale used for connective words such as 'and' and 'et al.'.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

LinksOption = Annotated[
    bool,
    typer.Option(
        "--links/--no-links",
        help="Link each citation to its bibliography entry.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

AppearanceOrderOption = Annotated[
    bool,
    typer.Option(
        "--appearance-order",
        help="Number numeric citations in order of first appearance.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

OutputFormatOption = Annotated[
    OutputTarget,
    typer.Option(
        "--output-format",
        "-f",
        help="Emit AsciiDoc text or LaTeX citation commands.",
        case_sensitive=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the processed document here instead of stdout.",
        dir_okay=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

StrictOption = Annotated[
    bool,
    typer.Option(
        "--strict",
        help="Fail on citation keys missing from the bibliography.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

VerbosityOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase diagnostic output (repeatable).",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks on failure.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
