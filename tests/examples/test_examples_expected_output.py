"""Run every example's ``main()`` and compare stdout with its ``# =>`` comments."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import pytest

from slotwire import registry_context

EXAMPLES_ROOT = Path(__file__).resolve().parents[2] / "examples"
EXPECTATION_MARKER = "# =>"


def _expected_lines(path: Path) -> list[str]:
    return [
        line.split(EXPECTATION_MARKER, maxsplit=1)[1].strip()
        for line in path.read_text(encoding="utf-8").splitlines()
        if EXPECTATION_MARKER in line
    ]


def _load_example(path: Path) -> ModuleType:
    module_name = f"slotwire_example_{path.parent.name}_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[module_name]
        raise
    return module


EXAMPLE_PATHS = sorted(EXAMPLES_ROOT.glob("ex_*/*.py"))


def test_examples_are_collected() -> None:
    assert EXAMPLE_PATHS


@pytest.mark.parametrize(
    "path",
    EXAMPLE_PATHS,
    ids=[str(path.relative_to(EXAMPLES_ROOT)) for path in EXAMPLE_PATHS],
)
def test_example_stdout_matches_inline_expectations(
    path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    expected = _expected_lines(path)
    assert expected, f"{path} has no '{EXPECTATION_MARKER}' expectations"

    module = _load_example(path)
    previous = registry_context.get_bound()
    registry_context.reset()
    try:
        module.main()
        bound_after_run = registry_context.is_bound
    finally:
        sys.modules.pop(module.__name__, None)
        registry_context.restore(previous)

    assert capsys.readouterr().out.splitlines() == expected
    assert not bound_after_run, f"{path} left registry_context bound"
