#!/usr/bin/env python3
"""
isometric_converter.cli.cli

Typer-based CLI for converting flat images to a 30 degree isometric view.

The raster work is done by GraphicsMagick, which must be on ``PATH`` (or
named through the ``gm_binary`` option).

Examples
--------
Convert one image:

    isometric-convert sprite.png out/sprite.png

Convert every image of a directory with progress output:

    isometric-convert sprites/ out/ '{"verbose": true}'
"""

from __future__ import annotations

import traceback

import typer
from pydantic import ValidationError

from isometric_converter.application.results import ConversionOutcome
from isometric_converter.errors import ConversionError
from isometric_converter.schemas import ConverterOptionsConfig

app = typer.Typer(
    name="isometric-convert",
    help="Convert flat raster images to a 30 degree isometric projection.",
    no_args_is_help=True,
)


def _banner(text: str, color: str) -> str:
    return typer.style(text, fg=color, bold=True)


def _parse_options(raw: str | None) -> ConverterOptionsConfig:
    """Parse the optional JSON options argument.

    Parameters
    ----------
    raw : str | None
        JSON object text, e.g. ``'{"verbose": true}'``.

    Raises
    ------
    typer.BadParameter
        If the text is not a JSON object matching the options schema.
    """
    if raw is None or not raw.strip():
        return ConverterOptionsConfig()
    try:
        return ConverterOptionsConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid options JSON: {exc}") from exc


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print the failure banner and error details.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(_banner("Failed!", typer.colors.RED), err=True)
    typer.echo(f"{type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _report_outcome(outcome: ConversionOutcome) -> None:
    """Print the one-line status of a converted image."""
    target = outcome.task.output_path
    if outcome.status == "success":
        typer.echo(f"{_banner('Success!', typer.colors.BRIGHT_GREEN)} - {target}")
    elif outcome.status == "outside_margin":
        typer.echo(
            f"{_banner('Outside Margin!', typer.colors.BRIGHT_YELLOW)} - {target}",
            err=True,
        )
    else:
        typer.echo(
            f"{_banner('Failed!', typer.colors.RED)} - {outcome.task.input_path}: "
            f"{outcome.reason}",
            err=True,
        )


@app.command()
def convert_cmd(
    input_path: str = typer.Argument(
        ..., help="Image file, or directory whose entries are converted."
    ),
    output_path: str = typer.Argument(
        ..., help="Output image file, or output directory for directory input."
    ),
    options_json: str | None = typer.Argument(
        None,
        help='Options as JSON, e.g. \'{"verbose": true, "max_concurrency": 4}\'.',
    ),
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
) -> None:
    """Convert an image, or a directory of images, to isometric.

    Parameters
    ----------
    input_path : str
        Source image or directory; resolved to an absolute path.
    output_path : str
        Destination image or directory; resolved to an absolute path.
    options_json : str | None, default=None
        JSON object with ``verbose``, ``max_concurrency`` and ``gm_binary``.
    debug : bool, default=False
        Whether to print tracebacks for failures.
    """
    options = _parse_options(options_json)

    try:
        from isometric_converter.api import convert_to_isometric

        convert_to_isometric(
            input_path,
            output_path,
            verbose=options.verbose,
            max_concurrency=options.max_concurrency,
            gm_binary=options.gm_binary,
            on_outcome=_report_outcome,
        )
    except ConversionError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))


if __name__ == "__main__":
    app()
