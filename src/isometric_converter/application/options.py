"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass

from isometric_converter.validate import DEFAULT_MARGIN_PERCENT


@dataclass(frozen=True)
class ConversionOptions:
    """Shared conversion options passed through use-cases."""

    verbose: bool = False
    max_concurrency: int = 8
    gm_binary: str = "gm"
    margin_percent: float = DEFAULT_MARGIN_PERCENT
