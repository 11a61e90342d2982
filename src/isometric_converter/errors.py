"""Exception hierarchy for isometric conversion."""

from __future__ import annotations

from collections.abc import Sequence


class ConversionError(Exception):
    """Base class for conversion failures surfaced to callers."""

    exit_code = 1


class InputNotFoundError(ConversionError):
    """Input path is missing, or is not a regular file where one is expected."""


class InvalidInputError(ConversionError):
    """Input path exists but is neither a file nor a directory."""


class InvalidOutputError(ConversionError):
    """Output path exists with a type that cannot receive the conversion."""


class BackendError(ConversionError):
    """Base class for raster backend failures."""


class BackendExecutionError(BackendError):
    """Raster backend command failed or reported on its error stream."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class BackendParseError(BackendError):
    """Raster backend output did not contain a usable geometry report."""
