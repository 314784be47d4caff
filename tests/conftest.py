from __future__ import annotations

import re
from pathlib import Path

import pytest

from duperrormsg.shapes import (
    BareCall,
    ChainedCall,
    Expression,
    OpaqueCall,
    Position,
    QualifiedCall,
    StringLiteral,
)

TESTDATA = Path(__file__).resolve().parent / "testdata" / "src"

_WANT_RE = re.compile(r"//\s*want\s+(?:`([^`]*)`|\"((?:[^\"\\]|\\.)*)\")")


def lit(text: str) -> StringLiteral:
    """Interpreted string literal token for text."""
    return StringLiteral(f'"{text}"')


def expr(text: str = "x") -> Expression:
    return Expression(text)


class CallFactory:
    """Builds call shapes on consecutive lines of one fake file."""

    def __init__(self, file: str = "unit.go") -> None:
        self.file = file
        self.line = 0

    def _pos(self) -> Position:
        self.line += 1
        return Position(self.file, self.line, 2)

    def bare(self, name: str, *args) -> BareCall:
        return BareCall(name, tuple(args), self._pos())

    def qualified(self, receiver: str, member: str, *args) -> QualifiedCall:
        return QualifiedCall(receiver, member, tuple(args), self._pos())

    def chained(self, receiver, member: str, *args) -> ChainedCall:
        return ChainedCall(receiver, member, tuple(args), self._pos())

    def opaque(self, *args) -> OpaqueCall:
        return OpaqueCall(tuple(args), self._pos())


@pytest.fixture
def calls() -> CallFactory:
    return CallFactory()


def read_wants(path: Path) -> dict[int, re.Pattern[str]]:
    """Map 1-based line number -> expected diagnostic pattern from // want comments."""
    wants: dict[int, re.Pattern[str]] = {}
    for line_no, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        m = _WANT_RE.search(line)
        if m:
            pattern = m.group(1) if m.group(1) is not None else m.group(2)
            wants[line_no] = re.compile(pattern)
    return wants
