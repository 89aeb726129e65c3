"""Dependency-ordered rule queue with skip propagation and cycle detection."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from meetup_lint.linter.errors import (
    DuplicateRuleError,
    RuleCycleError,
    UnknownRuleDependencyError,
)

if TYPE_CHECKING:
    from meetup_lint.linter.rules.base import LintRule


class RuleQueue:
    """
    Hands out rules in registration order once their dependencies are terminal.

    A rule whose dependency failed is completed as failed without being
    returned. When no remaining rule can ever become ready, the remaining rules
    form a cycle and ``dequeue`` raises ``RuleCycleError``.
    """

    __slots__ = ("_completed", "_in_flight", "_logger", "_pending", "_rules")

    def __init__(self, rules: Sequence[LintRule], *, logger: Any | None = None) -> None:
        self._rules: tuple[LintRule, ...] = tuple(rules)
        registered = _index_rule_names(self._rules)
        _validate_dependencies(self._rules, registered)

        self._pending: list[LintRule] = list(self._rules)
        self._completed: dict[str, bool] = {}
        self._in_flight: set[str] = set()
        self._logger = logger if logger is not None else structlog.get_logger(__name__)

    @property
    def rules(self) -> tuple[LintRule, ...]:
        return self._rules

    @property
    def remaining(self) -> tuple[str, ...]:
        return tuple(rule.name() for rule in self._pending)

    def dequeue(self) -> LintRule | None:
        """Return the next invocable rule, or ``None`` when nothing is left to run."""

        while True:
            progressed = False
            for rule in tuple(self._pending):
                name = rule.name()
                if name in self._completed:
                    self._pending.remove(rule)
                    continue

                dependencies = rule.dependencies()
                if not _dependencies_resolved(dependencies, self._completed):
                    continue

                self._pending.remove(rule)
                failed = _failed_dependencies(dependencies, self._completed)
                if not failed:
                    self._in_flight.add(name)
                    return rule

                self._logger.debug("lint_rule_skipped", rule=name, failed_dependencies=failed)
                self.set_completed_rule(rule, False)
                progressed = True

            if not progressed:
                break

        if not self._pending or self._in_flight:
            return None
        raise RuleCycleError(self._find_cycle())

    def set_completed_rule(self, rule: LintRule, success: bool) -> None:
        name = rule.name()
        self._in_flight.discard(name)
        self._completed[name] = success

    def get_completed_rules(self) -> dict[str, bool]:
        return dict(self._completed)

    def _find_cycle(self) -> tuple[str, ...]:
        """Walk unresolved dependencies from the first pending rule until a node repeats."""

        by_name = {rule.name(): rule for rule in self._pending}
        stack: list[str] = []
        stack_index: dict[str, int] = {}
        cursor = self._pending[0].name()

        while cursor not in stack_index:
            stack_index[cursor] = len(stack)
            stack.append(cursor)
            unresolved = [
                dependency
                for dependency in by_name[cursor].dependencies()
                if dependency not in self._completed
            ]
            cursor = unresolved[0]

        return (*stack[stack_index[cursor] :], cursor)


def _index_rule_names(rules: Sequence[LintRule]) -> frozenset[str]:
    seen: set[str] = set()
    for rule in rules:
        name = rule.name()
        if not name:
            raise ValueError(f"Linter name must be non-empty: {rule!r}")
        if name in seen:
            raise DuplicateRuleError(name)
        seen.add(name)
    return frozenset(seen)


def _validate_dependencies(rules: Sequence[LintRule], registered: frozenset[str]) -> None:
    for rule in rules:
        for dependency in rule.dependencies():
            if dependency not in registered:
                raise UnknownRuleDependencyError(rule.name(), dependency)


def _dependencies_resolved(dependencies: Sequence[str], completed: Mapping[str, bool]) -> bool:
    return all(dependency in completed for dependency in dependencies)


def _failed_dependencies(
    dependencies: Sequence[str], completed: Mapping[str, bool]
) -> list[str]:
    return [dependency for dependency in dependencies if not completed[dependency]]


__all__ = ["RuleQueue"]
