"""
Call-expression shapes handed to the analyzer by a source front end.

A call is one of four closed variants, decided once when the source is parsed:

- BareCall:      NewUserError("...")
- QualifiedCall: errors.New("..."), log.Printf("...")
- ChainedCall:   logger.Info().Logf("...")
- OpaqueCall:    any other callee (func literals, index expressions, a.b.C(...))

Arguments are either a StringLiteral (raw token text, delimiters included) or
an Expression (anything computed).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Position:
    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class StringLiteral:
    """A string literal argument exactly as written, e.g. '"a %s"' or '`raw`'."""

    raw: str


@dataclass(frozen=True)
class Expression:
    """Any non-literal argument. `text` is kept for debugging only."""

    text: str = ""


Argument = Union[StringLiteral, Expression]


@dataclass(frozen=True)
class BareCall:
    name: str
    args: tuple[Argument, ...]
    position: Position


@dataclass(frozen=True)
class QualifiedCall:
    receiver: str
    member: str
    args: tuple[Argument, ...]
    position: Position


@dataclass(frozen=True)
class ChainedCall:
    receiver: "CallNode"
    member: str
    args: tuple[Argument, ...]
    position: Position


@dataclass(frozen=True)
class OpaqueCall:
    args: tuple[Argument, ...]
    position: Position


CallNode = Union[BareCall, QualifiedCall, ChainedCall, OpaqueCall]


def first_string_literal(args: tuple[Argument, ...]) -> StringLiteral | None:
    """Return the first StringLiteral among args, or None."""
    for arg in args:
        if isinstance(arg, StringLiteral):
            return arg
    return None
