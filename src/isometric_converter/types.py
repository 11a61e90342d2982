"""Shared type aliases for converter modules."""

from __future__ import annotations

import os
from typing import Literal, TypeAlias

OutcomeStatus: TypeAlias = Literal["success", "outside_margin", "failed"]
StrPath: TypeAlias = str | os.PathLike[str]
