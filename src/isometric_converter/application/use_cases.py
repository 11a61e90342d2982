"""Application use-cases orchestrating isometric conversion workflows."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from pydantic import ValidationError

from isometric_converter.adapters.graphicsmagick import GraphicsMagickBackend
from isometric_converter.application.options import ConversionOptions
from isometric_converter.application.ports import ConversionReporter, RasterBackend
from isometric_converter.application.results import (
    ConversionOutcome,
    ConversionTask,
)
from isometric_converter.errors import (
    ConversionError,
    InputNotFoundError,
    InvalidInputError,
    InvalidOutputError,
)
from isometric_converter.geometry import GeometryPlan, plan
from isometric_converter.infrastructure.reporting import NullReporter, build_reporter
from isometric_converter.schemas import ConversionPathsConfig
from isometric_converter.types import StrPath
from isometric_converter.validate import DEFAULT_MARGIN_PERCENT, dimensions_within_margin

logger = logging.getLogger(__name__)

OutcomeCallback: TypeAlias = Callable[[ConversionOutcome], None]


async def transform(backend: RasterBackend, path: Path, geometry: GeometryPlan) -> None:
    """Resize to the target width then shear, both in place on ``path``.

    The source height is kept during the resize; the shear supplies the
    extra ``y_shear`` rows.
    """
    await backend.resize(path, geometry.target_width, geometry.source_height)
    await backend.shear(path, geometry.backend_shear_degrees)


async def convert_image(
    task: ConversionTask,
    backend: RasterBackend,
    reporter: ConversionReporter | None = None,
    margin_percent: float = DEFAULT_MARGIN_PERCENT,
) -> ConversionOutcome:
    """Use-case: convert one image file into its isometric projection.

    Raises
    ------
    InputNotFoundError
        If ``task.input_path`` is not a regular file. Raised before the
        backend is touched.
    BackendError
        If the backend fails or reports unparsable geometry.
    """
    reporter = reporter or NullReporter()
    input_path, output_path = task.input_path, task.output_path

    if not await asyncio.to_thread(input_path.is_file):
        reporter.error("%s does not exist", input_path)
        raise InputNotFoundError(f"Cannot convert image that does not exist: {input_path}")

    reporter.info("Converting %s to isometric at %s", input_path, output_path)

    source = await backend.query_dimensions(input_path)
    geometry = plan(source.width, source.height)
    reporter.info(
        "Conversion dimensions - original size: %s, target width: %d, target height: %d",
        source,
        geometry.target_width,
        geometry.target_height,
    )

    await asyncio.to_thread(shutil.copyfile, input_path, output_path)
    await transform(backend, output_path, geometry)

    final = await backend.query_dimensions(output_path)
    reporter.info("Final identify result - dimensions: %s", final)

    if dimensions_within_margin(final, geometry, margin_percent):
        return ConversionOutcome(
            task=task, status="success", final_dimensions=final, plan=geometry
        )

    reporter.warning(
        "Final dimensions are not within %g%% of target dimensions.", margin_percent
    )
    return ConversionOutcome(
        task=task,
        status="outside_margin",
        final_dimensions=final,
        plan=geometry,
        reason=(
            f"final {final} outside {margin_percent:g}% of target {geometry.target}"
        ),
    )


async def settle_image(
    task: ConversionTask,
    backend: RasterBackend,
    reporter: ConversionReporter | None = None,
    margin_percent: float = DEFAULT_MARGIN_PERCENT,
) -> ConversionOutcome:
    """Run :func:`convert_image`, turning any failure into a failed outcome."""
    reporter = reporter or NullReporter()
    try:
        return await convert_image(task, backend, reporter, margin_percent)
    except ConversionError as exc:
        reason = f"{type(exc).__name__}: {exc}"
    except OSError as exc:
        logger.debug("filesystem error converting %s", task.input_path, exc_info=True)
        reason = f"{type(exc).__name__}: {exc}"
    except Exception as exc:
        logger.debug("unexpected error converting %s", task.input_path, exc_info=True)
        reason = f"{type(exc).__name__}: {exc}"
    reporter.error("Conversion of %s failed: %s", task.input_path, reason)
    return ConversionOutcome(task=task, status="failed", reason=reason)


def _stat_kind(path: Path) -> str | None:
    if not path.exists():
        return None
    if path.is_file():
        return "file"
    if path.is_dir():
        return "dir"
    return "other"


async def _prepare_output_dir(output_path: Path) -> None:
    kind = await asyncio.to_thread(_stat_kind, output_path)
    if kind == "file":
        raise InvalidOutputError(
            f"Invalid Output: Cannot write to file as directory: {output_path}"
        )
    if kind != "dir":
        await asyncio.to_thread(output_path.mkdir, parents=True, exist_ok=True)


def build_directory_tasks(input_dir: Path, output_dir: Path) -> list[ConversionTask]:
    """Map each immediate entry of ``input_dir`` onto ``output_dir``."""
    return [
        ConversionTask(input_path=input_dir / name, output_path=output_dir / name)
        for name in sorted(os.listdir(input_dir))
    ]


async def convert_directory(
    tasks: list[ConversionTask],
    backend: RasterBackend,
    reporter: ConversionReporter,
    options: ConversionOptions,
    on_outcome: OutcomeCallback | None = None,
) -> list[ConversionOutcome]:
    """Run ``tasks`` concurrently, at most ``options.max_concurrency`` at once.

    Every task settles; one failure never cancels its siblings. ``on_outcome``
    is called as each task settles, in completion order. The returned
    outcomes are in task order.
    """
    semaphore = asyncio.Semaphore(options.max_concurrency)

    async def _bounded(task: ConversionTask) -> ConversionOutcome:
        async with semaphore:
            outcome = await settle_image(
                task, backend, reporter, options.margin_percent
            )
        if on_outcome is not None:
            on_outcome(outcome)
        return outcome

    return list(await asyncio.gather(*(_bounded(task) for task in tasks)))


async def convert_path(
    *,
    input_path: StrPath,
    output_path: StrPath,
    options: ConversionOptions,
    backend: RasterBackend | None = None,
    reporter: ConversionReporter | None = None,
    on_outcome: OutcomeCallback | None = None,
) -> list[ConversionOutcome]:
    """Use-case: convert a single image or every entry of a directory.

    Single-file runs propagate conversion errors. Directory runs report
    per-entry failures as ``failed`` outcomes instead. ``on_outcome``
    receives every outcome as soon as it is known.

    Raises
    ------
    InputNotFoundError
        If ``input_path`` does not exist.
    InvalidInputError
        If ``input_path`` is neither a file nor a directory.
    InvalidOutputError
        If ``input_path`` is a directory and ``output_path`` is a file.
    """
    try:
        config = ConversionPathsConfig(
            input_path=os.fspath(input_path), output_path=os.fspath(output_path)
        )
    except ValidationError as exc:
        raise ConversionError(f"Invalid conversion parameters: {exc}") from exc

    backend = backend or GraphicsMagickBackend(options.gm_binary)
    reporter = reporter or build_reporter(options.verbose)

    kind = await asyncio.to_thread(_stat_kind, config.input_path)
    if kind is None:
        raise InputNotFoundError(f"Input path does not exist: {config.input_path}")
    if kind == "file":
        task = ConversionTask(
            input_path=config.input_path, output_path=config.output_path
        )
        outcome = await convert_image(task, backend, reporter, options.margin_percent)
        if on_outcome is not None:
            on_outcome(outcome)
        return [outcome]
    if kind == "dir":
        await _prepare_output_dir(config.output_path)
        tasks = await asyncio.to_thread(
            build_directory_tasks, config.input_path, config.output_path
        )
        return await convert_directory(tasks, backend, reporter, options, on_outcome)
    raise InvalidInputError(
        f"Invalid Input: Input path was not a file or directory: {config.input_path}"
    )


def build_conversion_options(
    *,
    verbose: bool = False,
    max_concurrency: int = 8,
    gm_binary: str = "gm",
    margin_percent: float = DEFAULT_MARGIN_PERCENT,
) -> ConversionOptions:
    """Build typed option object from command/API params."""
    if max_concurrency < 1:
        raise ConversionError("max_concurrency must be at least 1.")
    return ConversionOptions(
        verbose=verbose,
        max_concurrency=max_concurrency,
        gm_binary=gm_binary,
        margin_percent=margin_percent,
    )
