"""Dimension tolerance checks for converted images."""

from __future__ import annotations

from isometric_converter.geometry import Dimensions, GeometryPlan, round_half_up

DEFAULT_MARGIN_PERCENT = 0.5


def within_margin(value: int, target: int, margin_percent: float) -> bool:
    """Check whether ``value`` lies strictly inside ``target`` +/- a percentage.

    Parameters
    ----------
    value : int
        Measured value.
    target : int
        Expected value.
    margin_percent : float
        Tolerance as a percentage of ``target`` (``1`` means +/- 1 %).

    Returns
    -------
    bool
        ``True`` when ``target - d < value < target + d`` with
        ``d = round_half_up(target * margin_percent / 100)``. Both bounds are
        exclusive, so a zero tolerance rejects even an exact match.
    """
    plus_minus = round_half_up(target * margin_percent / 100)
    return target - plus_minus < value < target + plus_minus


def dimensions_within_margin(
    final: Dimensions,
    geometry: GeometryPlan,
    margin_percent: float = DEFAULT_MARGIN_PERCENT,
) -> bool:
    """Check both axes of ``final`` against the targets of ``geometry``."""
    return within_margin(
        final.width, geometry.target_width, margin_percent
    ) and within_margin(final.height, geometry.target_height, margin_percent)
