"""
Rule contract shared by every linter rule.

A rule has a stable identity, a list of identities it must run after, and an
``evaluate`` callable that returns the (possibly fixed) record or raises
``LintError``. ``evaluate`` may be a coroutine function when the rule awaits an
external service.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import ClassVar, Protocol, runtime_checkable

from meetup_lint.domain.models import FieldValue, Record, field_label, field_path
from meetup_lint.linter.errors import LintError
from meetup_lint.services.body import update_body_field

RuleOutput = Record | Awaitable[Record]


@runtime_checkable
class LintRule(Protocol):
    """Pluggable unit of validation/fix logic."""

    def name(self) -> str: ...

    def dependencies(self) -> tuple[str, ...]: ...

    def evaluate(self, record: Record, fix_mode: bool) -> RuleOutput: ...


class BaseRule:
    """Default identity and dependency behavior for rules."""

    NAME: ClassVar[str | None] = None

    def name(self) -> str:
        return self.NAME or type(self).__name__

    def dependencies(self) -> tuple[str, ...]:
        return ()

    def evaluate(self, record: Record, fix_mode: bool) -> RuleOutput:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name()!r}>"


class FieldRule(BaseRule):
    """Rule governing a single ``fields`` entry."""

    FIELD: ClassVar[str]

    @property
    def field_name(self) -> str:
        return self.FIELD

    @property
    def field_path(self) -> str:
        return field_path(self.field_name)

    @property
    def field_label(self) -> str:
        return field_label(self.field_name)

    def name(self) -> str:
        return self.NAME or self.field_name

    def message(self, text: str) -> str:
        return f"{self.field_label}: {text.strip()}"

    def fail(self, value: object, *messages: str) -> LintError:
        return LintError.for_field(
            self.field_path, value, *(self.message(item) for item in messages)
        )

    def update_field(self, record: Record, value: FieldValue) -> bool:
        """Store ``value`` and re-render its body section. Returns whether it changed."""

        if record.fields.get(self.field_name) == value:
            return False
        record.fields[self.field_name] = value
        update_body_field(record, self.field_name, label=self.field_label)
        return True


class RequiredTextRule(FieldRule):
    """Field must be a non-empty string."""

    EMPTY_MESSAGE: ClassVar[str] = "Must not be empty"

    def evaluate(self, record: Record, fix_mode: bool) -> Record:
        self.require_text(record)
        return record

    def require_text(self, record: Record) -> str:
        value = record.fields.get(self.field_name)
        if not isinstance(value, str) or not value:
            raise self.fail(value, self.EMPTY_MESSAGE)
        return value


__all__ = ["BaseRule", "FieldRule", "LintRule", "RequiredTextRule", "RuleOutput"]
