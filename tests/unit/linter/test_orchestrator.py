"""Unit tests for linter.orchestrator.LinterOrchestrator."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from meetup_lint.domain.models import EntityLink, Record
from meetup_lint.linter.errors import (
    DuplicateRuleError,
    LintError,
    LintIssue,
    RuleCycleError,
    RulePreconditionError,
)
from meetup_lint.linter.orchestrator import LinterOrchestrator
from meetup_lint.linter.rules.entities import EntityLinkRule
from meetup_lint.services.record_store import InMemoryRecordStore, RecordPatch

from tests.fixtures.records import meetup_record
from tests.fixtures.rules import AsyncStubRule, StubRule, set_field, set_title


@pytest.mark.asyncio
async def test_runs_dependencies_first_and_skips_commit_outside_fix_mode() -> None:
    calls: list[str] = []
    dependent = StubRule("dependent", ["base"], mutate=lambda _record: calls.append("dependent"))
    base = StubRule("base", mutate=lambda _record: calls.append("base"))
    store = InMemoryRecordStore()

    result = await LinterOrchestrator([dependent, base], store).run(meetup_record(), False)

    assert calls == ["base", "dependent"]
    assert result == meetup_record()
    assert store.patches == []


@pytest.mark.asyncio
async def test_caller_record_is_never_mutated() -> None:
    record = meetup_record()
    rule = StubRule("retitle", mutate=set_title("changed"))

    result = await LinterOrchestrator([rule], InMemoryRecordStore()).run(record, True)

    assert record.title == meetup_record().title
    assert result.title == "changed"
    assert result is not record


@pytest.mark.asyncio
async def test_fix_mode_is_forwarded_to_every_rule() -> None:
    first = StubRule("first")
    second = AsyncStubRule("second")

    await LinterOrchestrator([first, second], InMemoryRecordStore()).run(meetup_record(), True)

    assert first.seen_fix_modes == [True]
    assert second.seen_fix_modes == [True]


@pytest.mark.asyncio
async def test_failures_are_aggregated_in_completion_order_and_dependents_are_skipped() -> None:
    first = StubRule("first", fail=["First Lint error"])
    second = AsyncStubRule("second", fail=["Second Lint error"])
    dependent = StubRule("dependent", ["first"])
    store = InMemoryRecordStore()

    with pytest.raises(LintError) as caught:
        await LinterOrchestrator([first, second, dependent], store).run(meetup_record(), False)

    assert caught.value == LintError(["First Lint error", "Second Lint error"])
    assert first.calls == 1
    assert second.calls == 1
    assert dependent.calls == 0
    assert store.patches == []


@pytest.mark.asyncio
async def test_fix_mode_commits_passing_fixes_then_raises_the_aggregate() -> None:
    fixer = StubRule("fixer", mutate=set_title("[Meetup] - fixed"))
    broken = StubRule(
        "broken", fail=[LintIssue(message="Agenda: broken", field_path="fields.agenda")]
    )
    record = meetup_record()
    store = InMemoryRecordStore({record.id: record})

    with pytest.raises(LintError) as caught:
        await LinterOrchestrator([fixer, broken], store).run(record, True)

    assert caught.value.get_messages() == ["Agenda: broken"]
    assert store.patches == [(1, RecordPatch(title="[Meetup] - fixed"))]
    assert store.get_record(1).title == "[Meetup] - fixed"


@pytest.mark.asyncio
async def test_changed_fields_are_rendered_into_the_committed_body() -> None:
    rule = StubRule("retitle_event", mutate=set_field("event_title", "Renamed Event"))
    store = InMemoryRecordStore()

    result = await LinterOrchestrator([rule], store).run(meetup_record(), True)

    assert "### Event Title\n\nRenamed Event\n" in result.display_body
    [(record_id, patch)] = store.patches
    assert record_id == 1
    assert patch.title is None
    assert patch.labels is None
    assert patch.display_body == result.display_body


@pytest.mark.asyncio
async def test_label_reordering_is_not_a_change() -> None:
    rule = StubRule("reorder", mutate=lambda record: record.labels.reverse())
    store = InMemoryRecordStore()

    await LinterOrchestrator([rule], store).run(meetup_record(), True)

    assert store.patches == []


@pytest.mark.asyncio
async def test_failed_rule_mutations_are_discarded() -> None:
    seen_titles: list[str | None] = []
    failing = StubRule("failing", mutate=set_title("partial"), fail=["nope"])
    observer = StubRule("observer", mutate=lambda record: seen_titles.append(record.title))
    store = InMemoryRecordStore()

    with pytest.raises(LintError):
        await LinterOrchestrator([failing, observer], store).run(meetup_record(), True)

    assert seen_titles == [meetup_record().title]
    assert store.patches == []


@pytest.mark.asyncio
async def test_unexpected_exception_aborts_without_commit() -> None:
    fixer = StubRule("fixer", mutate=set_title("fixed"))
    crashing = StubRule("crashing", error=RulePreconditionError("Event Date is required"))
    never = StubRule("never")
    store = InMemoryRecordStore()

    with pytest.raises(RulePreconditionError):
        await LinterOrchestrator([fixer, crashing, never], store).run(meetup_record(), True)

    assert never.calls == 0
    assert store.patches == []


@pytest.mark.asyncio
async def test_cycle_aborts_without_invoking_cycle_members() -> None:
    a = StubRule("a", ["b"])
    b = StubRule("b", ["a"])
    free = StubRule("free", mutate=set_title("fixed"))
    store = InMemoryRecordStore()

    with pytest.raises(RuleCycleError) as caught:
        await LinterOrchestrator([a, b, free], store).run(meetup_record(), True)

    assert caught.value.name in {"a", "b"}
    assert a.calls == 0
    assert b.calls == 0
    assert free.calls == 1
    assert store.patches == []


def test_duplicate_rules_are_rejected_when_building_the_orchestrator() -> None:
    with pytest.raises(DuplicateRuleError):
        LinterOrchestrator([StubRule("same"), StubRule("same")])


@pytest.mark.asyncio
async def test_fix_mode_requires_a_store() -> None:
    with pytest.raises(ValueError, match="record store"):
        await LinterOrchestrator([StubRule("only")]).run(meetup_record(), True)


@pytest.mark.asyncio
async def test_rule_outcomes_are_logged() -> None:
    ok = StubRule("ok", mutate=set_title("fixed"))
    bad = StubRule("bad", fail=["Bad: wrong"])
    skipped = StubRule("skipped", ["bad"])

    with capture_logs() as logs, pytest.raises(LintError):
        await LinterOrchestrator([ok, bad, skipped], InMemoryRecordStore()).run(
            meetup_record(), True
        )

    events = [(entry["event"], entry.get("rule")) for entry in logs]
    assert ("lint_rule_completed", "ok") in events
    assert ("lint_rule_completed", "bad") in events
    assert ("lint_rule_skipped", "skipped") in events
    assert ("lint_record_committed", None) in events

    failure = next(
        entry
        for entry in logs
        if entry["event"] == "lint_rule_completed" and entry.get("rule") == "bad"
    )
    assert failure["success"] is False
    assert failure["messages"] == ["Bad: wrong"]
    assert failure["record_id"] == 1


ACME = EntityLink(name="Acme", url="https://acme.example")
ACME_LINK = "[Acme](https://acme.example)"


def _sponsor_record(heading: str = "Sponsor") -> Record:
    return Record(id=7, display_body=f"### {heading}\n\nAcme\n", fields={"sponsor": "Acme"})


@pytest.mark.asyncio
async def test_custom_entity_field_is_linted_under_its_title_cased_section() -> None:
    rule = EntityLinkRule("sponsor", [ACME], derived_key="sponsors")

    result = await LinterOrchestrator([rule]).run(_sponsor_record(), False)

    assert result.fields["sponsor"] == ACME_LINK
    assert result.display_body == f"### Sponsor\n\n{ACME_LINK}\n"
    assert result.derived["sponsors"] == [ACME]


@pytest.mark.asyncio
async def test_custom_entity_field_with_its_own_label_is_committed() -> None:
    store = InMemoryRecordStore()
    rule = EntityLinkRule("sponsor", [ACME], label="Sponsors")

    result = await LinterOrchestrator([rule], store).run(_sponsor_record("Sponsors"), True)

    assert result.display_body == f"### Sponsors\n\n{ACME_LINK}\n"
    assert store.patches == [(7, RecordPatch(display_body=result.display_body))]


@pytest.mark.asyncio
async def test_commit_renders_custom_fields_changed_without_a_field_rule() -> None:
    store = InMemoryRecordStore()
    rule = StubRule("sponsor", mutate=set_field("sponsor", "Other"))

    result = await LinterOrchestrator([rule], store).run(_sponsor_record(), True)

    assert result.display_body == "### Sponsor\n\nOther\n"
    [(_, patch)] = store.patches
    assert patch.changed_attributes() == ("display_body",)
