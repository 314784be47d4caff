"""Run the analyzer over tests/testdata/src and compare with // want comments."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import TESTDATA, read_wants
from duperrormsg.analyzer import analyze_units
from duperrormsg.golang import load_units


def _check(package_dir: Path) -> None:
    units, skipped = load_units([package_dir])
    assert skipped == []
    diagnostics = analyze_units(units)

    got: dict[tuple[str, int], list[str]] = {}
    for d in diagnostics:
        got.setdefault((Path(d.position.file).name, d.position.line), []).append(str(d))

    expected: dict[tuple[str, int], object] = {}
    for go_file in sorted(package_dir.glob("*.go")):
        for line_no, pattern in read_wants(go_file).items():
            expected[(go_file.name, line_no)] = pattern

    problems: list[str] = []
    for where, pattern in expected.items():
        messages = got.get(where, [])
        if len(messages) != 1 or not pattern.search(messages[0]):
            problems.append(f"{where[0]}:{where[1]}: want {pattern.pattern!r}, got {messages}")
    for where, messages in got.items():
        if where not in expected:
            problems.append(f"{where[0]}:{where[1]}: unexpected {messages}")
    assert not problems, "\n".join(problems)


@pytest.mark.parametrize("package", ["messages", "chained"])
def test_want_annotations(package):
    _check(TESTDATA / package)


def test_packages_are_checked_separately():
    _check(TESTDATA / "scope")
