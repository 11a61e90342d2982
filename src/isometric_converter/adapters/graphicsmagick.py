"""GraphicsMagick raster backend implementing application ports."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from collections.abc import Sequence
from pathlib import Path

from isometric_converter.errors import BackendExecutionError, BackendParseError
from isometric_converter.geometry import Dimensions

logger = logging.getLogger(__name__)

_GEOMETRY_LINE = re.compile(r"^\s*Geometry:\s*(?P<value>\S+)", re.MULTILINE)
_GEOMETRY_VALUE = re.compile(r"(?P<width>\d+)x(?P<height>\d+)")


def parse_geometry_report(report: str) -> Dimensions:
    """Extract image dimensions from ``gm identify -verbose`` output.

    Parameters
    ----------
    report : str
        Text printed by the identify command. Only the first ``Geometry:``
        line is considered; multi-frame images report one per frame.

    Returns
    -------
    Dimensions
        Width and height parsed from the leading ``WxH`` of the geometry.

    Raises
    ------
    BackendParseError
        If no ``Geometry:`` line is present or its value is not ``WxH...``.
    """
    line = _GEOMETRY_LINE.search(report)
    if line is None:
        raise BackendParseError("Backend report has no Geometry field.")
    raw = line.group("value")
    match = _GEOMETRY_VALUE.match(raw)
    if match is None:
        raise BackendParseError(f"Malformed geometry '{raw}' in backend report.")
    width = int(match.group("width"))
    height = int(match.group("height"))
    if width <= 0 or height <= 0:
        raise BackendParseError(f"Non-positive geometry '{raw}' in backend report.")
    return Dimensions(width=width, height=height)


def _path_argument(path: Path) -> str:
    # Absolute paths start with a separator, so gm never reads them as options.
    return os.fspath(Path(path).absolute())


class GraphicsMagickBackend:
    """Drive the ``gm`` executable without a shell."""

    def __init__(self, binary: str = "gm") -> None:
        self.binary = binary

    async def _run(self, args: Sequence[str]) -> str:
        command = (self.binary, *args)
        logger.debug("running %s", command)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise BackendExecutionError(
                f"Could not start raster backend '{self.binary}': {exc}",
                command=command,
            ) from exc
        stdout, stderr = await process.communicate()
        err_text = stderr.decode(errors="replace").strip()
        if process.returncode != 0 or err_text:
            raise BackendExecutionError(
                f"Raster backend command failed (exit {process.returncode}): "
                f"{err_text or '<no error output>'}",
                command=command,
                returncode=process.returncode,
                stderr=err_text,
            )
        return stdout.decode(errors="replace")

    async def query_dimensions(self, path: Path) -> Dimensions:
        """Return the dimensions reported by ``gm identify -verbose``."""
        report = await self._run(["identify", "-verbose", _path_argument(path)])
        return parse_geometry_report(report)

    async def resize(self, path: Path, width: int, height: int) -> None:
        """Force the image to ``width`` x ``height``, ignoring aspect ratio."""
        await self._run(
            ["mogrify", "-geometry", f"{width}x{height}!", _path_argument(path)]
        )

    async def shear(self, path: Path, degrees: float) -> None:
        """Shear along X, filling uncovered pixels with transparency."""
        await self._run(
            [
                "mogrify",
                "-background",
                "transparent",
                "-shear",
                f"0x{degrees:g}",
                _path_argument(path),
            ]
        )
