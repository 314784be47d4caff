"""
Check Go packages for error and log messages reused across call sites.

Every errors.New / fmt.Errorf / log.* / custom error-constructor call with a
literal message is collected per package. Messages that are identical once
format verbs are collapsed (%s, %v, %d -> %x) are reported at every site, with
later sites pointing back at the first.

Exit code: 0 if no duplicates, 1 if duplicates found, 2 on bad input paths.
Output to stdout only unless --report PATH is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .analyzer import SCOPE_UNIT, SCOPES, Diagnostic, analyze_units
from .golang import load_units


def _format_report(
    diagnostics: list[Diagnostic],
    unit_count: int,
    skipped: list[tuple[Path, str]],
) -> list[str]:
    """Produce human-readable report lines."""
    lines = [
        "Duplicate error message report",
        "==============================",
        "",
    ]
    for diagnostic in diagnostics:
        lines.append(str(diagnostic))
    if diagnostics:
        lines.append("")
    for path, reason in skipped:
        lines.append(f"Skipped {path}: {reason}")
    groups = sum(1 for d in diagnostics if d.is_primary)
    status = "FAILED" if diagnostics else "OK"
    lines.append(
        f"Duplicate error message check: {status} "
        f"(packages analyzed: {unit_count}, duplicate groups: {groups})"
    )
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="duperrormsg",
        description="Report duplicate error/log messages in Go packages.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        default=[Path(".")],
        metavar="PATH",
        help="Go files or directories to analyze (default: .)",
    )
    parser.add_argument(
        "--scope",
        choices=SCOPES,
        default=SCOPE_UNIT,
        help="Deduplicate within each package (unit) or across every input (all) "
        f"(default: {SCOPE_UNIT})",
    )
    parser.add_argument(
        "--skip-tests",
        action="store_true",
        help="Ignore _test.go files",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write report to path (default: stdout only)",
    )
    parser.add_argument(
        "--no-fail",
        action="store_true",
        help="Exit 0 even when duplicates are found",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log recognised calls and discovered packages to stderr",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    missing = [p for p in args.paths if not p.exists()]
    if missing:
        for path in missing:
            print(f"Path not found: {path}", file=sys.stderr)
        return 2

    units, skipped = load_units(args.paths, include_tests=not args.skip_tests)
    diagnostics = analyze_units(units, scope=args.scope)
    report_lines = _format_report(diagnostics, len(units), skipped)

    for line in report_lines:
        print(line)

    if args.report is not None:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        args.report.write_text("\n".join(report_lines) + "\n", encoding="utf-8")

    if diagnostics and not args.no_fail:
        return 1
    return 0
