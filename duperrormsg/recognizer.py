"""
Decide whether a call builds an error or log message, and which argument holds it.

Rules are tried in order and the first rule whose call shape matches decides
the outcome. If that rule cannot find a literal message the call is skipped;
later rules are not consulted.

Known limitations:

- The naming-convention rules fall back to the first string literal anywhere
  in the argument list, which can pick up a literal that is not the message
  (a field name, a key). That is accepted as part of the heuristic.
- Message keys come from normalizer.normalize, which does not treat "%%" as
  an escaped percent: "100%% of %s" keys as '100%% of %x', and "%%s" as '%%x'.
  Messages are still compared consistently, but the key is not the rendered
  text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .shapes import (
    BareCall,
    CallNode,
    ChainedCall,
    QualifiedCall,
    StringLiteral,
    first_string_literal,
)

logger = logging.getLogger(__name__)

CHAINED_LOG_METHODS = frozenset({"Log", "Logf", "LogError", "LogErrorf"})

LOG_FUNC_SUFFIXES = (
    "", "f", "ln",
    "Error", "Errorf", "Errorln",
    "Fatal", "Fatalf", "Fatalln",
    "Panic", "Panicf", "Panicln",
    "Warning", "Warningf", "Warningln",
    "Info", "Infof", "Infoln",
)

LOG_FUNC_STEMS = ("", "Log", "Print")

LOG_FUNC_NAMES = frozenset(
    stem + suffix for stem in LOG_FUNC_STEMS for suffix in LOG_FUNC_SUFFIXES
) - {""}


@dataclass(frozen=True)
class Recognition:
    construct: str
    rule: str
    message: StringLiteral


class Rule:
    """A call-shape matcher. Subclasses set `name` and implement both hooks."""

    name = "rule"

    def construct(self, call: CallNode) -> Optional[str]:
        """Return a construct label if the call shape matches, else None."""
        raise NotImplementedError

    def message(self, call: CallNode) -> Optional[StringLiteral]:
        """Return the literal message argument of a matched call, if any."""
        if call.args and isinstance(call.args[0], StringLiteral):
            return call.args[0]
        return None


class ChainedLogRule(Rule):
    """logger.Info().Logf("...") and friends."""

    name = "chained-log"

    def construct(self, call: CallNode) -> Optional[str]:
        if isinstance(call, ChainedCall) and call.member in CHAINED_LOG_METHODS:
            return call.member
        return None


@dataclass(frozen=True)
class BuiltinRule(Rule):
    """An exact package.Function pair such as errors.New."""

    receiver: str
    member: str
    single_arg: bool = False

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"{self.receiver}.{self.member}"

    def construct(self, call: CallNode) -> Optional[str]:
        if (
            isinstance(call, QualifiedCall)
            and call.receiver == self.receiver
            and call.member == self.member
        ):
            return self.name
        return None

    def message(self, call: CallNode) -> Optional[StringLiteral]:
        if self.single_arg and len(call.args) != 1:
            return None
        return super().message(call)


class LoggingFamilyRule(Rule):
    """log.Printf, logger.Errorf, mylog.LogWarningln, ..."""

    name = "logging-family"

    def construct(self, call: CallNode) -> Optional[str]:
        if not isinstance(call, QualifiedCall):
            return None
        if call.receiver != "log" and "log" not in call.receiver.lower():
            return None
        if call.member in LOG_FUNC_NAMES:
            return call.receiver
        return None


class _NamingConventionRule(Rule):
    def message(self, call: CallNode) -> Optional[StringLiteral]:
        return first_string_literal(call.args)


class SelectorNamingRule(_NamingConventionRule):
    """pkg.NewThing(...), apperr.ValidationError(...), x.FailWith(...)."""

    name = "selector-naming"

    def construct(self, call: CallNode) -> Optional[str]:
        if not isinstance(call, QualifiedCall):
            return None
        member = call.member
        if (
            member.endswith("Error")
            or member.startswith("New")
            or "Error" in member
            or "fail" in member.lower()
        ):
            return member
        return None


class BareNamingRule(_NamingConventionRule):
    """NewUserError(...), NewErrNotFound(...), NewFailure(...)."""

    name = "bare-naming"

    def construct(self, call: CallNode) -> Optional[str]:
        if not isinstance(call, BareCall):
            return None
        name = call.name
        if name.startswith("New") and any(part in name for part in ("Error", "Err", "Fail")):
            return name
        return None


DEFAULT_RULES: tuple[Rule, ...] = (
    ChainedLogRule(),
    BuiltinRule("errors", "New", single_arg=True),
    BuiltinRule("fmt", "Errorf"),
    LoggingFamilyRule(),
    SelectorNamingRule(),
    BareNamingRule(),
)


def recognize(call: CallNode, rules: Iterable[Rule] = DEFAULT_RULES) -> Optional[Recognition]:
    """Return the matching construct and its literal message, or None."""
    for rule in rules:
        construct = rule.construct(call)
        if construct is None:
            continue
        message = rule.message(call)
        if message is None:
            logger.debug("%s: %s matched %s without a literal message", call.position, construct, rule.name)
            return None
        return Recognition(construct=construct, rule=rule.name, message=message)
    return None
