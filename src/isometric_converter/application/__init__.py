"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from isometric_converter.application.options import ConversionOptions
from isometric_converter.application.ports import ConversionReporter, RasterBackend
from isometric_converter.application.results import (
    ConversionOutcome,
    ConversionTask,
)
from isometric_converter.types import StrPath


def build_conversion_options(
    *,
    verbose: bool = False,
    max_concurrency: int = 8,
    gm_binary: str = "gm",
) -> ConversionOptions:
    """Build typed conversion options via lazy use-case import."""
    from isometric_converter.application.use_cases import (
        build_conversion_options as _impl,
    )

    return _impl(
        verbose=verbose,
        max_concurrency=max_concurrency,
        gm_binary=gm_binary,
    )


async def convert_image(
    *,
    input_path: Path,
    output_path: Path,
    backend: RasterBackend,
    reporter: ConversionReporter | None = None,
) -> ConversionOutcome:
    """Convert one image via lazy use-case import."""
    from isometric_converter.application.use_cases import convert_image as _impl

    return await _impl(
        ConversionTask(input_path=input_path, output_path=output_path),
        backend,
        reporter,
    )


async def convert_path(
    *,
    input_path: StrPath,
    output_path: StrPath,
    options: ConversionOptions,
    backend: RasterBackend | None = None,
    reporter: ConversionReporter | None = None,
    on_outcome: Callable[[ConversionOutcome], None] | None = None,
) -> list[ConversionOutcome]:
    """Convert a file or directory via lazy use-case import."""
    from isometric_converter.application.use_cases import convert_path as _impl

    return await _impl(
        input_path=input_path,
        output_path=output_path,
        options=options,
        backend=backend,
        reporter=reporter,
        on_outcome=on_outcome,
    )


__all__ = [
    "ConversionOptions",
    "ConversionOutcome",
    "ConversionTask",
    "build_conversion_options",
    "convert_image",
    "convert_path",
]
