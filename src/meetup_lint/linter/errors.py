"""
Structured lint errors and fatal rule-graph errors.

``LintError`` is both the signal a rule raises for an invalid field and the
aggregation unit for a whole pipeline run. Everything else in this module is a
fatal error: it aborts the run and is never aggregated.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LintIssue:
    """Single structured validation failure."""

    message: str
    field_path: str | None = None
    value: object = None


class LintError(Exception):
    """Raised by a rule when the field(s) it governs are invalid."""

    def __init__(self, issues: Iterable[LintIssue | str]) -> None:
        self._issues: tuple[LintIssue, ...] = tuple(
            LintIssue(message=item) if isinstance(item, str) else item for item in issues
        )
        super().__init__("; ".join(item.message for item in self._issues))

    @classmethod
    def for_field(cls, field_path: str | None, value: object, *messages: str) -> LintError:
        return cls(
            LintIssue(message=message, field_path=field_path, value=value) for message in messages
        )

    @property
    def issues(self) -> tuple[LintIssue, ...]:
        return self._issues

    def get_issues(self) -> tuple[LintIssue, ...]:
        return self._issues

    def get_messages(self) -> list[str]:
        return [item.message for item in self._issues]

    def merge(self, other: LintError) -> LintError:
        """Return a new error with ``other``'s issues appended to this one's."""

        return LintError((*self._issues, *other.get_issues()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LintError):
            return NotImplemented
        return self._issues == other._issues

    def __hash__(self) -> int:
        return hash(self._issues)

    def __repr__(self) -> str:
        return f"LintError({list(self.get_messages())!r})"


class RuleGraphError(RuntimeError):
    """Base class for misconfigured rule sets."""


class DuplicateRuleError(RuleGraphError):
    """Raised when two registered rules report the same identity."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate linter name detected: {name}")


class UnknownRuleDependencyError(RuleGraphError):
    """Raised when a rule depends on an identity that is not registered."""

    def __init__(self, name: str, dependency: str) -> None:
        self.name = name
        self.dependency = dependency
        super().__init__(f"Linter {name} depends on unregistered linter: {dependency}")


class RuleCycleError(RuleGraphError):
    """Raised when the remaining rules can never become ready."""

    cycle: tuple[str, ...]

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        if not self.cycle:
            message = "Circular dependency detected between linters."
        else:
            message = f"Circular dependency detected: {' -> '.join(self.cycle)}"
        super().__init__(message)

    @property
    def name(self) -> str | None:
        return self.cycle[0] if self.cycle else None


class IncompleteRunError(RuleGraphError):
    """Raised when the scheduler stopped before every rule reached a terminal state."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = tuple(names)
        super().__init__(f"Not all linters were processed: {', '.join(self.names)}")


class RulePreconditionError(RuntimeError):
    """Raised when a declared dependency did not leave its field in place."""


__all__ = [
    "DuplicateRuleError",
    "IncompleteRunError",
    "LintError",
    "LintIssue",
    "RuleCycleError",
    "RuleGraphError",
    "RulePreconditionError",
    "UnknownRuleDependencyError",
]
