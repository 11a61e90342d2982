"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from isometric_converter.geometry import Dimensions


class RasterBackend(Protocol):
    """Inspect and transform raster images on disk."""

    async def query_dimensions(self, path: Path) -> Dimensions:
        """Return the pixel size of the image at ``path``."""

    async def resize(self, path: Path, width: int, height: int) -> None:
        """Stretch the image in place to exactly ``width`` x ``height``."""

    async def shear(self, path: Path, degrees: float) -> None:
        """Shear the image in place along X over a transparent background."""


class ConversionReporter(Protocol):
    """Receive human-readable progress messages.

    ``logging.Logger`` satisfies this protocol.
    """

    def info(self, msg: str, *args: object) -> None:
        """Report progress."""

    def warning(self, msg: str, *args: object) -> None:
        """Report a non-fatal problem."""

    def error(self, msg: str, *args: object) -> None:
        """Report a failure."""
