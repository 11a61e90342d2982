"""Convert flat raster images into a 30 degree isometric projection."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from isometric_converter.geometry import Dimensions, GeometryPlan, plan
from isometric_converter.types import StrPath
from isometric_converter.validate import within_margin

if TYPE_CHECKING:
    from isometric_converter.application.results import ConversionOutcome

__version__ = "0.1.0"


def convert_to_isometric(
    input_path: StrPath,
    output_path: StrPath,
    verbose: bool = False,
    max_concurrency: int = 8,
    gm_binary: str = "gm",
    on_outcome: Callable[[ConversionOutcome], None] | None = None,
) -> list[ConversionOutcome]:
    """Convert an image or a directory of images to isometric.

    See :func:`isometric_converter.api.convert_to_isometric`.
    """
    from .api import convert_to_isometric as _impl

    return _impl(
        input_path,
        output_path,
        verbose=verbose,
        max_concurrency=max_concurrency,
        gm_binary=gm_binary,
        on_outcome=on_outcome,
    )


__all__ = [
    "Dimensions",
    "GeometryPlan",
    "convert_to_isometric",
    "plan",
    "within_margin",
]
