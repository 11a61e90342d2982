"""Target size and shear derivation for the isometric projection."""

from __future__ import annotations

import math
from dataclasses import dataclass

SHEAR_ANGLE_DEGREES = 30
# Applied by the backend; a 35 degree X shear renders a 30 degree edge.
BACKEND_SHEAR_OFFSET_DEGREES = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity.

    ``round_half_up(2.5) == 3`` and ``round_half_up(-2.5) == -2``. Python's
    built-in ``round`` rounds ties to even and would shift targets and
    margins by one pixel at exact halves. The fractional part is compared
    directly; ``floor(value + 0.5)`` would round the float just below 0.5
    up to 1.
    """
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


@dataclass(frozen=True)
class Dimensions:
    """Pixel size of an image as reported by the raster backend."""

    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class GeometryPlan:
    """Resize and shear parameters derived from a source image size.

    Parameters
    ----------
    shear_angle_degrees : int
        Projection angle of the isometric edge.
    target_width : int
        Width after foreshortening to two thirds.
    target_height : int
        Source height plus the vertical displacement of the shear.
    y_shear : int
        Vertical displacement a ``shear_angle_degrees`` shear induces over
        ``target_width``.
    """

    shear_angle_degrees: int
    target_width: int
    target_height: int
    y_shear: int

    @property
    def backend_shear_degrees(self) -> int:
        """Shear angle handed to the raster backend."""
        return self.shear_angle_degrees + BACKEND_SHEAR_OFFSET_DEGREES

    @property
    def source_height(self) -> int:
        return self.target_height - self.y_shear

    @property
    def target(self) -> Dimensions:
        return Dimensions(width=self.target_width, height=self.target_height)


def plan(width: int, height: int) -> GeometryPlan:
    """Compute the isometric target geometry for a ``width`` x ``height`` image."""
    target_width = round_half_up(width * 2 / 3)
    y_shear = round_half_up(
        math.tan(SHEAR_ANGLE_DEGREES * math.pi / 180) * target_width
    )
    return GeometryPlan(
        shear_angle_degrees=SHEAR_ANGLE_DEGREES,
        target_width=target_width,
        target_height=height + y_shear,
        y_shear=y_shear,
    )
