"""
Walk call nodes, record literal error/log messages, report duplicates.

analyze() is one pass over one compilation unit: it owns its registry and
keeps nothing once it returns. analyze_units() runs one pass per unit (or a
single pass over all of them) and concatenates the results.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .normalizer import normalize
from .recognizer import DEFAULT_RULES, Rule, recognize
from .registry import DuplicateRegistry, Occurrence
from .shapes import CallNode, Position

logger = logging.getLogger(__name__)

SCOPE_UNIT = "unit"
SCOPE_ALL = "all"
SCOPES = (SCOPE_UNIT, SCOPE_ALL)


@dataclass(frozen=True)
class Diagnostic:
    position: Position
    key: str
    construct: str
    first: Optional[Position] = None

    @property
    def is_primary(self) -> bool:
        return self.first is None

    @property
    def message(self) -> str:
        if self.first is None:
            return f'duplicate error message "{self.key}" used in multiple locations'
        return f'duplicate error message "{self.key}" also used at {self.first}'

    def __str__(self) -> str:
        return f"{self.position}: {self.message}"


def analyze(calls: Iterable[CallNode], rules: Iterable[Rule] = DEFAULT_RULES) -> list[Diagnostic]:
    """
    Return diagnostics for every message literal used by more than one call.

    `calls` must be in a deterministic order (pre-order, lexical); the first
    call of each group is the primary and the rest point back at it.
    """
    rules = tuple(rules)
    registry = DuplicateRegistry()
    for call in calls:
        found = recognize(call, rules)
        if found is None:
            continue
        key = normalize(found.message.raw)
        if not key:
            continue
        logger.debug("%s: %s (%s) message %r", call.position, found.construct, found.rule, key)
        registry.record(key, Occurrence(call.position, found.construct))

    logger.debug("%d distinct message(s) recorded", len(registry))
    diagnostics: list[Diagnostic] = []
    for key, occurrences in registry.groups():
        first = occurrences[0]
        diagnostics.append(Diagnostic(first.position, key, first.construct))
        for occ in occurrences[1:]:
            diagnostics.append(Diagnostic(occ.position, key, occ.construct, first=first.position))
    return diagnostics


def analyze_units(
    units: Mapping[str, Iterable[CallNode]],
    *,
    scope: str = SCOPE_UNIT,
    rules: Iterable[Rule] = DEFAULT_RULES,
) -> list[Diagnostic]:
    """
    Analyze several compilation units.

    scope="unit" gives each unit its own pass and registry, so a message
    repeated in two different units is not reported. scope="all" treats every
    unit handed to this call as one pass.
    """
    if scope not in SCOPES:
        raise ValueError(f"unknown scope {scope!r} (expected one of {', '.join(SCOPES)})")
    rules = tuple(rules)
    if scope == SCOPE_ALL:
        return analyze(itertools.chain.from_iterable(units.values()), rules)

    diagnostics: list[Diagnostic] = []
    for name, calls in units.items():
        found = analyze(calls, rules)
        logger.debug("unit %s: %d diagnostic(s)", name, len(found))
        diagnostics.extend(found)
    return diagnostics
