"""Application-layer task and result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from isometric_converter.geometry import Dimensions, GeometryPlan
from isometric_converter.types import OutcomeStatus


@dataclass(frozen=True)
class ConversionTask:
    """One image to convert and where to write it."""

    input_path: Path
    output_path: Path


@dataclass(frozen=True)
class ConversionOutcome:
    """Structured conversion outcome.

    ``outside_margin`` outcomes still have their output file written; only
    ``failed`` outcomes carry no usable image.
    """

    task: ConversionTask
    status: OutcomeStatus
    final_dimensions: Dimensions | None = None
    plan: GeometryPlan | None = None
    reason: str | None = None

    @property
    def success(self) -> bool:
        return self.status == "success"
