"""
Lint pipeline orchestration.

Runs every registered rule once in dependency order against a working copy of
the record, aggregates validation failures, and in fix mode commits the
changed top-level attributes before reporting them.

Failure model
- ``LintError`` from a rule marks it failed, discards its partial changes and
  is merged into the aggregate raised at the end of the run.
- Any other exception aborts the run immediately; nothing is committed.
"""

from __future__ import annotations

import inspect
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from meetup_lint.linter.errors import IncompleteRunError, LintError, LintIssue
from meetup_lint.linter.rules.base import FieldRule, LintRule
from meetup_lint.linter.scheduler import RuleQueue
from meetup_lint.services.body import update_body_field
from meetup_lint.services.record_store import changed_fields, diff_records

if TYPE_CHECKING:
    from meetup_lint.domain.models import Record
    from meetup_lint.services.record_store import RecordStore


@dataclass(frozen=True, slots=True)
class LintReport:
    """Linted record with the aggregated failures of one run, if any."""

    record: Record
    error: LintError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def issues(self) -> tuple[LintIssue, ...]:
        return () if self.error is None else self.error.get_issues()


class LinterOrchestrator:
    """Validate-then-commit driver over an explicit rule list."""

    def __init__(
        self,
        rules: Sequence[LintRule],
        store: RecordStore | None = None,
        *,
        logger: Any | None = None,
    ) -> None:
        self._rules = tuple(rules)
        self._store = store
        self._logger = logger if logger is not None else structlog.get_logger(__name__)
        self._labels = _field_labels(self._rules)
        # Fail fast on duplicate or dangling rule identities.
        RuleQueue(self._rules, logger=self._logger)

    @property
    def rules(self) -> tuple[LintRule, ...]:
        return self._rules

    async def run(self, record: Record, fix_mode: bool) -> Record:
        """
        Lint ``record`` and return the linted copy.

        Raises the aggregated ``LintError`` after the commit step when any rule
        failed. The caller's record is never modified.
        """

        report = await self.lint(record, fix_mode)
        if report.error is not None:
            raise report.error
        return report.record

    async def lint(self, record: Record, fix_mode: bool) -> LintReport:
        """Same as ``run`` but returns the aggregated failures with the linted copy."""

        if fix_mode:
            self._require_store()

        logger = self._logger.bind(record_id=record.id, fix_mode=fix_mode)
        original = record.clone()
        working = record.clone()
        queue = RuleQueue(self._rules, logger=logger)
        aggregate: LintError | None = None

        while (rule := queue.dequeue()) is not None:
            name = rule.name()
            logger.debug("lint_rule_started", rule=name)
            try:
                working = await _evaluate(rule, working.clone(), fix_mode)
            except LintError as error:
                queue.set_completed_rule(rule, False)
                aggregate = error if aggregate is None else aggregate.merge(error)
                logger.info(
                    "lint_rule_completed",
                    rule=name,
                    success=False,
                    messages=error.get_messages(),
                )
                continue
            queue.set_completed_rule(rule, True)
            logger.debug("lint_rule_completed", rule=name, success=True)

        completed = queue.get_completed_rules()
        stragglers = [rule.name() for rule in self._rules if rule.name() not in completed]
        if stragglers:
            raise IncompleteRunError(stragglers)

        if fix_mode:
            await self._commit(original, working, logger)

        return LintReport(record=working, error=aggregate)

    async def _commit(self, original: Record, working: Record, logger: Any) -> None:
        for name in changed_fields(original, working):
            update_body_field(working, name, label=self._labels.get(name))

        patch = diff_records(original, working)
        if patch.is_empty:
            return
        store = self._require_store()
        await store.update_record(working.id, patch)
        logger.info("lint_record_committed", attributes=list(patch.changed_attributes()))

    def _require_store(self) -> RecordStore:
        if self._store is None:
            raise ValueError("A record store is required to run in fix mode")
        return self._store


def _field_labels(rules: Sequence[LintRule]) -> dict[str, str]:
    labels: dict[str, str] = {}
    for rule in rules:
        if isinstance(rule, FieldRule):
            labels.setdefault(rule.field_name, rule.field_label)
    return labels


async def _evaluate(rule: LintRule, record: Record, fix_mode: bool) -> Record:
    candidate = rule.evaluate(record, fix_mode)
    if inspect.isawaitable(candidate):
        return await candidate
    return candidate


__all__ = ["LintReport", "LinterOrchestrator"]
