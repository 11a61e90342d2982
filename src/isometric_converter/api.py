"""Public synchronous conversion API (delegates to application use-cases)."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from isometric_converter.application.results import ConversionOutcome
from isometric_converter.application.use_cases import build_conversion_options
from isometric_converter.application.use_cases import convert_path
from isometric_converter.types import StrPath


def convert_to_isometric(
    input_path: StrPath,
    output_path: StrPath,
    verbose: bool = False,
    max_concurrency: int = 8,
    gm_binary: str = "gm",
    on_outcome: Callable[[ConversionOutcome], None] | None = None,
) -> list[ConversionOutcome]:
    """Convert an image file, or every entry of a directory, to isometric.

    Parameters
    ----------
    input_path : str | os.PathLike
        Image file, or directory whose immediate entries are converted.
    output_path : str | os.PathLike
        Output file for a single image, or output directory (created when
        missing) for a directory input.
    verbose : bool, default=False
        Emit progress, warnings and errors on stderr.
    max_concurrency : int, default=8
        Upper bound on images converted at the same time.
    gm_binary : str, default="gm"
        GraphicsMagick executable name or path.
    on_outcome : callable, optional
        Called with each outcome as its image finishes converting.

    Returns
    -------
    list[ConversionOutcome]
        One outcome per converted image, in directory-entry order.
    """
    options = build_conversion_options(
        verbose=verbose,
        max_concurrency=max_concurrency,
        gm_binary=gm_binary,
    )
    return asyncio.run(
        convert_path(
            input_path=input_path,
            output_path=output_path,
            options=options,
            on_outcome=on_outcome,
        )
    )
