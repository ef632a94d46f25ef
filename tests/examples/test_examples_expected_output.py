from __future__ import annotations

import ast
import difflib
import runpy
from pathlib import Path

import pytest

EXAMPLES_ROOT = Path(__file__).resolve().parents[2] / "examples"
_EXPECTED_MARKER = "# =>"


def _example_paths() -> list[Path]:
    paths = sorted(EXAMPLES_ROOT.glob("ex_*/01_*.py"))
    if not paths:
        msg = f"No examples found under {EXAMPLES_ROOT}"
        raise AssertionError(msg)
    return paths


def _expected_lines(path: Path) -> list[str]:
    """Collect the ``# =>`` annotation on the closing line of every ``print`` call."""
    source = path.read_text(encoding="utf-8")
    source_lines = source.splitlines()
    print_calls = sorted(
        (
            node
            for node in ast.walk(ast.parse(source, filename=str(path)))
            if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) and node.func.id == "print"
        ),
        key=lambda node: (node.lineno, node.col_offset),
    )

    expected: list[str] = []
    for call in print_calls:
        closing_line = source_lines[(call.end_lineno or call.lineno) - 1]
        if _EXPECTED_MARKER not in closing_line:
            msg = f"{path}:{call.end_lineno}: print() closing line must carry '{_EXPECTED_MARKER}' output."
            raise AssertionError(msg)
        expected.append(closing_line.split(_EXPECTED_MARKER, maxsplit=1)[1].strip())
    return expected


@pytest.mark.parametrize(
    "path",
    _example_paths(),
    ids=lambda path: path.parent.name,
)
def test_example_stdout_matches_inline_expectations(path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    expected = _expected_lines(path)

    runpy.run_path(str(path), run_name="__main__")

    actual = capsys.readouterr().out.splitlines()
    if actual != expected:
        diff = "\n".join(difflib.unified_diff(expected, actual, fromfile="expected", tofile="actual", lineterm=""))
        msg = f"Example output mismatch for {path}\n{diff}"
        raise AssertionError(msg)
