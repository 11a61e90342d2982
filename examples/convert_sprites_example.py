#!/usr/bin/env python3
"""Example: convert a folder of flat sprites into isometric tiles.

Requires GraphicsMagick (``gm``) on PATH.
"""

from __future__ import annotations

import sys
from pathlib import Path

from isometric_converter import convert_to_isometric, plan


def main() -> None:
    """Convert ``argv[1]`` into ``argv[2]`` and summarize the outcomes."""
    if len(sys.argv) != 3:
        raise SystemExit("usage: convert_sprites_example.py SRC_DIR OUT_DIR")
    src, out = Path(sys.argv[1]), Path(sys.argv[2])

    preview = plan(300, 200)
    print(
        "A 300x200 sprite becomes "
        f"{preview.target_width}x{preview.target_height} "
        f"(shear {preview.backend_shear_degrees} deg in gm)."
    )

    outcomes = convert_to_isometric(src, out, verbose=True, max_concurrency=4)
    counts: dict[str, int] = {}
    for outcome in outcomes:
        counts[outcome.status] = counts.get(outcome.status, 0) + 1
        if outcome.status != "success":
            print(f"{outcome.status}: {outcome.task.input_path} ({outcome.reason})")
    print(", ".join(f"{status}={count}" for status, count in sorted(counts.items())))


if __name__ == "__main__":
    main()
