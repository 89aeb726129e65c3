"""
meetup-lint — single record lint entrypoint.

Purpose
- Build the default rule set from validated config, lint one record inside a
  correlation scope and turn the report into the downstream output payload.

Failure model
- Lint issues are returned on the outcome; ``should_fail`` tells the caller
  whether ``[linter] fail_on_error`` turns them into a failed run.
- Configuration, rule graph and collaborator errors propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from meetup_lint.linter.orchestrator import LinterOrchestrator
from meetup_lint.linter.registry import build_default_rules
from meetup_lint.observability.logging import correlation_scope
from meetup_lint.services.output import build_output

if TYPE_CHECKING:
    from meetup_lint.domain.models import Record
    from meetup_lint.linter.errors import LintIssue
    from meetup_lint.services.drive import DriveFolderService, DriveTemplateService
    from meetup_lint.services.record_store import RecordStore


@dataclass(frozen=True, slots=True)
class LintOutcome:
    """Result of linting one record."""

    record: Record
    issues: tuple[LintIssue, ...]
    output: dict[str, Any]
    fail_on_error: bool = True

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def should_fail(self) -> bool:
        return self.fail_on_error and not self.ok

    def lint_messages(self) -> str:
        """Issue messages, one per line."""

        return "\n".join(issue.message for issue in self.issues)


async def lint_record(
    record: Record,
    config: Mapping[str, Any],
    *,
    folder_service: DriveFolderService,
    template_service: DriveTemplateService,
    store: RecordStore | None = None,
    fix_mode: bool | None = None,
    logger: Any | None = None,
) -> LintOutcome:
    """
    Lint ``record`` with the default rules.

    ``fix_mode`` defaults to ``[linter] fix_mode``; fixing requires ``store``.
    """

    linter_config = config["linter"]
    effective_fix = bool(linter_config["fix_mode"]) if fix_mode is None else fix_mode
    log = logger if logger is not None else structlog.get_logger(__name__)

    rules = build_default_rules(config, folder_service, template_service)
    orchestrator = LinterOrchestrator(rules, store, logger=log)

    with correlation_scope(record_id=record.id):
        log.info("lint_started", record_id=record.id, fix_mode=effective_fix, rules=len(rules))
        report = await orchestrator.lint(record, effective_fix)
        if report.ok:
            log.info("lint_succeeded", record_id=record.id)
        else:
            log.warning(
                "lint_failed",
                record_id=record.id,
                issues=[issue.message for issue in report.issues],
            )

    return LintOutcome(
        record=report.record,
        issues=report.issues,
        output=build_output(report.record, report.issues),
        fail_on_error=bool(linter_config["fail_on_error"]),
    )


__all__ = ["LintOutcome", "lint_record"]
