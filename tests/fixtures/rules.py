"""Configurable stub rules with invocation counters for scheduler/orchestrator tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from meetup_lint.domain.models import Record
from meetup_lint.linter.errors import LintError, LintIssue


class StubRule:
    """Rule that optionally mutates the record, then fails or raises as configured."""

    def __init__(
        self,
        name: str,
        dependencies: Sequence[str] = (),
        *,
        fail: Sequence[LintIssue | str] = (),
        mutate: Callable[[Record], None] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._name = name
        self._dependencies = tuple(dependencies)
        self._fail = tuple(fail)
        self._mutate = mutate
        self._error = error
        self.calls = 0
        self.seen_fix_modes: list[bool] = []

    def name(self) -> str:
        return self._name

    def dependencies(self) -> tuple[str, ...]:
        return self._dependencies

    def evaluate(self, record: Record, fix_mode: bool) -> Record:
        self.calls += 1
        self.seen_fix_modes.append(fix_mode)
        if self._mutate is not None:
            self._mutate(record)
        if self._error is not None:
            raise self._error
        if self._fail:
            raise LintError(self._fail)
        return record


class AsyncStubRule(StubRule):
    async def evaluate(self, record: Record, fix_mode: bool) -> Record:  # type: ignore[override]
        return StubRule.evaluate(self, record, fix_mode)


def set_title(title: str) -> Callable[[Record], None]:
    def mutate(record: Record) -> None:
        record.title = title

    return mutate


def set_field(name: str, value: str | list[str]) -> Callable[[Record], None]:
    def mutate(record: Record) -> None:
        record.fields[name] = value

    return mutate


__all__ = ["AsyncStubRule", "StubRule", "set_field", "set_title"]
