#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/isometric_converter"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    # Only the adapter may spawn processes; nothing may go through a shell.
    for path in PACKAGE.rglob("*.py"):
        _assert_no_imports(path, ["shell=True", "os.system", "create_subprocess_shell"])
        if path.parent.name != "adapters":
            _assert_no_imports(path, ["import subprocess", "create_subprocess_exec"])

    for path in (PACKAGE / "application").glob("*.py"):
        _assert_no_imports(path, ["import typer", "from typer"])

    for name in ("geometry.py", "validate.py"):
        _assert_no_imports(PACKAGE / name, ["import asyncio", "import typer", "pydantic"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
