"""Integration tests for file and directory conversion orchestration."""

from __future__ import annotations

import asyncio
import math
import os
from collections.abc import Callable
from pathlib import Path

import pytest

from isometric_converter import api as api_module
from isometric_converter.application.use_cases import (
    build_conversion_options,
    convert_path,
)
from isometric_converter.errors import (
    BackendExecutionError,
    InputNotFoundError,
    InvalidInputError,
    InvalidOutputError,
)
from isometric_converter.geometry import Dimensions
from isometric_converter.infrastructure.reporting import NullReporter

MakeImage = Callable[[Path, int, int], Path]


class _Backend:
    """Backend faking images as ``WxH`` text files, with per-name failures."""

    def __init__(self, fail_names: frozenset[str] = frozenset()) -> None:
        self.fail_names = fail_names
        self.calls: list[tuple[str, Path]] = []
        self.active = 0
        self.peak = 0

    async def _enter(self, op: str, path: Path) -> None:
        self.calls.append((op, path))
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(0)
        self.active -= 1

    async def query_dimensions(self, path: Path) -> Dimensions:
        await self._enter("query", path)
        if path.name in self.fail_names:
            raise BackendExecutionError("gm: unable to open image", returncode=1)
        width, height = path.read_text().split("x")
        return Dimensions(int(width), int(height))

    async def resize(self, path: Path, width: int, height: int) -> None:
        await self._enter("resize", path)
        path.write_text(f"{width}x{height}")

    async def shear(self, path: Path, degrees: float) -> None:
        await self._enter("shear", path)
        width, height = (int(v) for v in path.read_text().split("x"))
        rows = math.floor(math.tan(math.pi / 6) * width + 0.5)
        path.write_text(f"{width}x{height + rows}")


class _CrashingBackend(_Backend):
    """Backend raising a non-conversion error for one entry."""

    async def query_dimensions(self, path: Path) -> Dimensions:
        if path.name in self.fail_names:
            await asyncio.sleep(0)
            raise RuntimeError(f"decoder crashed on {path.name}")
        return await super().query_dimensions(path)


class _SlowFirstBackend(_Backend):
    """Backend that finishes ``a.png`` after every other entry."""

    async def query_dimensions(self, path: Path) -> Dimensions:
        if path.name == "a.png":
            await asyncio.sleep(0.05)
        return await super().query_dimensions(path)


def _run(input_path: Path, output_path: Path, backend: _Backend, **options: object):
    return asyncio.run(
        convert_path(
            input_path=input_path,
            output_path=output_path,
            options=build_conversion_options(**options),
            backend=backend,
            reporter=NullReporter(),
        )
    )


def test_single_file_conversion(tmp_path: Path, make_image: MakeImage) -> None:
    """Convert one file and return a single success outcome."""
    source = make_image(tmp_path / "sprite.png", 300, 200)
    output = tmp_path / "iso.png"

    outcomes = _run(source, output, _Backend())

    assert len(outcomes) == 1
    assert outcomes[0].success
    assert outcomes[0].final_dimensions == Dimensions(200, 315)
    assert output.read_text() == "200x315"


def test_relative_paths_are_resolved(
    tmp_path: Path, make_image: MakeImage, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Resolve relative input and output paths to absolute form."""
    make_image(tmp_path / "sprite.png", 300, 200)
    monkeypatch.chdir(tmp_path)

    outcomes = _run(Path("sprite.png"), Path("iso.png"), _Backend())

    assert outcomes[0].task.input_path.is_absolute()
    assert outcomes[0].task.output_path == (tmp_path / "iso.png").resolve()


def test_missing_input_fails_before_backend(tmp_path: Path) -> None:
    """Raise InputNotFoundError without touching the backend."""
    backend = _Backend()

    with pytest.raises(InputNotFoundError):
        _run(tmp_path / "nope.png", tmp_path / "out.png", backend)

    assert backend.calls == []


def test_single_file_errors_propagate(tmp_path: Path, make_image: MakeImage) -> None:
    """Propagate backend errors in single-file mode."""
    source = make_image(tmp_path / "broken.png", 300, 200)

    with pytest.raises(BackendExecutionError):
        _run(source, tmp_path / "out.png", _Backend(frozenset({"broken.png"})))


def test_directory_partial_failure_settles_every_task(
    tmp_path: Path, make_image: MakeImage
) -> None:
    """Keep converting siblings when one entry fails, without raising."""
    src = tmp_path / "src"
    for name in ("a.png", "b.png", "c.png"):
        make_image(src / name, 300, 200)
    out = tmp_path / "out"

    outcomes = _run(src, out, _Backend(frozenset({"b.png"})))

    assert [o.task.input_path.name for o in outcomes] == ["a.png", "b.png", "c.png"]
    assert [o.status for o in outcomes] == ["success", "failed", "success"]
    assert outcomes[1].reason is not None
    assert "BackendExecutionError" in outcomes[1].reason
    assert (out / "a.png").read_text() == "200x315"
    assert (out / "c.png").read_text() == "200x315"
    assert not (out / "b.png").exists()


def test_directory_unexpected_backend_error_is_isolated(
    tmp_path: Path, make_image: MakeImage
) -> None:
    """Settle an entry as failed when the backend raises a non-conversion error."""
    src = tmp_path / "src"
    for name in ("a.png", "b.png", "c.png"):
        make_image(src / name, 300, 200)
    out = tmp_path / "out"

    outcomes = _run(src, out, _CrashingBackend(frozenset({"b.png"})))

    assert [o.status for o in outcomes] == ["success", "failed", "success"]
    assert outcomes[1].reason == "RuntimeError: decoder crashed on b.png"
    assert (out / "a.png").read_text() == "200x315"
    assert (out / "c.png").read_text() == "200x315"


def test_directory_reports_outcomes_in_completion_order(
    tmp_path: Path, make_image: MakeImage
) -> None:
    """Hand each outcome to the callback as it settles, and return task order."""
    src = tmp_path / "src"
    for name in ("a.png", "b.png", "c.png"):
        make_image(src / name, 300, 200)
    reported: list[str] = []

    outcomes = asyncio.run(
        convert_path(
            input_path=src,
            output_path=tmp_path / "out",
            options=build_conversion_options(),
            backend=_SlowFirstBackend(),
            reporter=NullReporter(),
            on_outcome=lambda outcome: reported.append(outcome.task.input_path.name),
        )
    )

    assert reported[-1] == "a.png"
    assert sorted(reported[:2]) == ["b.png", "c.png"]
    assert [o.task.input_path.name for o in outcomes] == ["a.png", "b.png", "c.png"]


def test_directory_creates_missing_output_tree(
    tmp_path: Path, make_image: MakeImage
) -> None:
    """Create the output directory, parents included."""
    src = tmp_path / "src"
    make_image(src / "a.png", 30, 20)
    out = tmp_path / "deep" / "nested" / "out"

    outcomes = _run(src, out, _Backend())

    assert out.is_dir()
    assert outcomes[0].task.output_path == out.resolve() / "a.png"


def test_directory_is_not_recursive(tmp_path: Path, make_image: MakeImage) -> None:
    """Report subdirectories as failed entries instead of descending into them."""
    src = tmp_path / "src"
    make_image(src / "a.png", 300, 200)
    make_image(src / "sub" / "inner.png", 300, 200)

    outcomes = _run(src, tmp_path / "out", _Backend())

    by_name = {o.task.input_path.name: o for o in outcomes}
    assert by_name["a.png"].success
    assert by_name["sub"].status == "failed"
    assert by_name["sub"].reason is not None
    assert by_name["sub"].reason.startswith("InputNotFoundError")
    assert not (tmp_path / "out" / "inner.png").exists()


def test_output_file_for_directory_input_is_rejected(
    tmp_path: Path, make_image: MakeImage
) -> None:
    """Raise InvalidOutputError and write nothing when output is a file."""
    src = tmp_path / "src"
    make_image(src / "a.png", 300, 200)
    out = tmp_path / "out.png"
    out.write_text("keep")
    backend = _Backend()

    with pytest.raises(InvalidOutputError):
        _run(src, out, backend)

    assert out.read_text() == "keep"
    assert backend.calls == []
    assert sorted(p.name for p in tmp_path.iterdir()) == ["out.png", "src"]


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires POSIX FIFOs")
def test_input_neither_file_nor_directory(tmp_path: Path) -> None:
    """Raise InvalidInputError for special files."""
    fifo = tmp_path / "pipe"
    os.mkfifo(fifo)

    with pytest.raises(InvalidInputError):
        _run(fifo, tmp_path / "out.png", _Backend())


def test_directory_concurrency_is_bounded(tmp_path: Path, make_image: MakeImage) -> None:
    """Never run more backend calls at once than max_concurrency allows."""
    src = tmp_path / "src"
    for index in range(6):
        make_image(src / f"{index}.png", 300, 200)
    backend = _Backend()

    outcomes = _run(src, tmp_path / "out", backend, max_concurrency=2)

    assert all(o.success for o in outcomes)
    assert 1 <= backend.peak <= 2


def test_conversion_is_idempotent(tmp_path: Path, make_image: MakeImage) -> None:
    """Yield identical dimensions when converting one input to two outputs."""
    source = make_image(tmp_path / "sprite.png", 641, 479)

    first = _run(source, tmp_path / "one.png", _Backend())[0]
    second = _run(source, tmp_path / "two.png", _Backend())[0]

    assert first.final_dimensions == second.final_dimensions
    assert first.plan == second.plan
    assert first.status == second.status


def test_public_api_runs_event_loop(
    tmp_path: Path, make_image: MakeImage, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Drive the async orchestrator from the synchronous API."""
    source = make_image(tmp_path / "sprite.png", 300, 200)
    backend = _Backend()

    import isometric_converter.application.use_cases as use_cases_module

    monkeypatch.setattr(
        use_cases_module, "GraphicsMagickBackend", lambda binary: backend
    )

    outcomes = api_module.convert_to_isometric(source, tmp_path / "iso.png")

    assert [o.status for o in outcomes] == ["success"]
    assert backend.calls
