"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConverterOptionsConfig(BaseModel):
    """Validated options object accepted as JSON on the command line.

    Unknown keys are ignored so option blobs written for other versions of
    the tool keep working.
    """

    model_config = ConfigDict(extra="ignore", strict=True)

    verbose: bool = False
    max_concurrency: int = Field(default=8, ge=1)
    gm_binary: str = "gm"

    @field_validator("gm_binary")
    @classmethod
    def _validate_gm_binary(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("gm_binary cannot be empty.")
        return value


class ConversionPathsConfig(BaseModel):
    """Validated input and output locations for one conversion run."""

    model_config = ConfigDict(extra="forbid")

    input_path: Path
    output_path: Path

    @field_validator("input_path", "output_path", mode="before")
    @classmethod
    def _validate_path(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            raise ValueError("paths cannot be empty.")
        return value

    @field_validator("input_path", "output_path")
    @classmethod
    def _resolve_path(cls, value: Path) -> Path:
        return value.expanduser().resolve()
