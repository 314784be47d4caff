"""
Go source front end: .go files -> call shapes, grouped by package.

Parsing uses tree-sitter with the Go grammar. Every call_expression becomes
one call shape; calls are listed in pre-order over the source, so an outer
call comes before the calls nested in its receiver or arguments.

A compilation unit is every file in one directory that shares a package
clause. An external test package (package foo_test) is a unit of its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from .shapes import (
    Argument,
    BareCall,
    CallNode,
    ChainedCall,
    Expression,
    OpaqueCall,
    Position,
    QualifiedCall,
    StringLiteral,
)

logger = logging.getLogger(__name__)

# Same directories the go tool leaves out of ./...
SKIP_DIRS = frozenset({"vendor", "testdata"})

_STRING_LITERAL_TYPES = frozenset({"interpreted_string_literal", "raw_string_literal"})
_IDENTIFIER_TYPES = frozenset({"identifier", "package_identifier"})

_PARSER: Optional[Parser] = None


def _get_parser() -> Parser:
    global _PARSER
    if _PARSER is None:
        _PARSER = Parser(Language(tree_sitter_go.language()))
    return _PARSER


@dataclass
class GoFile:
    path: str
    package: str
    calls: list[CallNode] = field(default_factory=list)
    has_errors: bool = False


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def _position(node: Node, path: str) -> Position:
    row, column = node.start_point[0], node.start_point[1]
    return Position(path, row + 1, column + 1)


def _argument(node: Node) -> Argument:
    if node.type in _STRING_LITERAL_TYPES:
        return StringLiteral(_text(node))
    return Expression(_text(node))


def _call_shape(node: Node, path: str) -> CallNode:
    position = _position(node, path)
    args_node = node.child_by_field_name("arguments")
    args: tuple[Argument, ...] = ()
    if args_node is not None:
        args = tuple(_argument(a) for a in args_node.named_children if a.type != "comment")

    func = node.child_by_field_name("function")
    if func is None:
        return OpaqueCall(args, position)
    if func.type == "identifier":
        return BareCall(_text(func), args, position)
    if func.type == "selector_expression":
        operand = func.child_by_field_name("operand")
        member = func.child_by_field_name("field")
        if operand is not None and member is not None:
            if operand.type in _IDENTIFIER_TYPES:
                return QualifiedCall(_text(operand), _text(member), args, position)
            if operand.type == "call_expression":
                return ChainedCall(_call_shape(operand, path), _text(member), args, position)
    return OpaqueCall(args, position)


def _iter_call_nodes(root: Node) -> Iterator[Node]:
    """Pre-order walk yielding call_expression nodes."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "call_expression":
            yield node
        stack.extend(reversed(node.named_children))


def _package_name(root: Node) -> str:
    for child in root.named_children:
        if child.type == "package_clause":
            for part in child.named_children:
                if part.type == "package_identifier":
                    return _text(part)
    return ""


def parse_source(source: bytes, path: str) -> GoFile:
    """Parse one Go file's bytes into its package name and call shapes."""
    tree = _get_parser().parse(source)
    root = tree.root_node
    go_file = GoFile(path=path, package=_package_name(root), has_errors=root.has_error)
    go_file.calls = [_call_shape(node, path) for node in _iter_call_nodes(root)]
    return go_file


def _is_skipped_dir(name: str) -> bool:
    return name in SKIP_DIRS or name.startswith((".", "_"))


def collect_go_files(paths: list[Path], *, include_tests: bool = True) -> list[Path]:
    """
    Return .go files under paths, sorted by resolved location.

    Explicit file arguments are always kept; directory walks skip vendor/,
    testdata/, and names starting with '.' or '_'. A file reached through
    several spellings (relative and absolute, overlapping directories) is
    listed once, under the first path that found it.
    """
    found: dict[Path, Path] = {}
    for path in paths:
        if path.is_file():
            if path.suffix == ".go":
                found.setdefault(path.resolve(), path)
            continue
        for candidate in path.rglob("*.go"):
            rel_dirs = candidate.relative_to(path).parts[:-1]
            if any(_is_skipped_dir(part) for part in rel_dirs):
                continue
            if not candidate.is_file():
                continue
            found.setdefault(candidate.resolve(), candidate)
    if not include_tests:
        found = {real: p for real, p in found.items() if not p.name.endswith("_test.go")}
    return [found[real] for real in sorted(found)]


def load_units(
    paths: list[Path],
    *,
    include_tests: bool = True,
) -> tuple[dict[str, list[CallNode]], list[tuple[Path, str]]]:
    """
    Parse Go files under paths and group their calls by package.

    Returns (units, skipped): units maps "<resolved dir> [<package>]" to the calls of
    that package in file-name then source order; skipped lists files that
    could not be read, with the reason.
    """
    units: dict[str, list[CallNode]] = {}
    skipped: list[tuple[Path, str]] = []
    for path in collect_go_files(paths, include_tests=include_tests):
        try:
            source = path.read_bytes()
        except OSError as e:
            logger.warning("cannot read %s: %s", path, e)
            skipped.append((path, str(e)))
            continue
        go_file = parse_source(source, str(path))
        if go_file.has_errors:
            logger.warning("%s: syntax errors, analyzing what could be parsed", path)
        unit = f"{path.resolve().parent} [{go_file.package}]"
        units.setdefault(unit, []).extend(go_file.calls)
        logger.debug("%s: %d call(s) in unit %s", path, len(go_file.calls), unit)
    return units, skipped
