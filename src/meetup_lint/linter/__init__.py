"""
meetup-lint — linter pipeline

Purpose
- Structured lint errors, dependency-ordered rule scheduling and the
  validate-then-commit orchestrator.
"""

from meetup_lint.linter.errors import (
    DuplicateRuleError,
    IncompleteRunError,
    LintError,
    LintIssue,
    RuleCycleError,
    RuleGraphError,
    RulePreconditionError,
    UnknownRuleDependencyError,
)
from meetup_lint.linter.orchestrator import LintReport, LinterOrchestrator
from meetup_lint.linter.registry import build_default_rules
from meetup_lint.linter.scheduler import RuleQueue

__all__ = [
    "DuplicateRuleError",
    "IncompleteRunError",
    "LintError",
    "LintIssue",
    "LintReport",
    "LinterOrchestrator",
    "RuleCycleError",
    "RuleGraphError",
    "RulePreconditionError",
    "RuleQueue",
    "UnknownRuleDependencyError",
    "build_default_rules",
]
