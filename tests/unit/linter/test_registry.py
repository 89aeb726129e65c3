"""Default rule set construction and end-to-end runs against the in-memory services."""

from __future__ import annotations

from typing import Any

import pytest

from meetup_lint.config.schema import ConfigValidationError, default_config
from meetup_lint.domain.models import EntityLink
from meetup_lint.linter.errors import LintError
from meetup_lint.linter.orchestrator import LinterOrchestrator
from meetup_lint.linter.registry import build_default_rules
from meetup_lint.services.output import build_output
from meetup_lint.services.record_store import InMemoryRecordStore

from tests.fixtures.drive import FakeDrive, provisioned_drive
from tests.fixtures.records import HOSTERS, SPEAKERS, VALID_TITLE, meetup_record


def _config(**sections: Any) -> dict[str, Any]:
    config: dict[str, Any] = dict(default_config())
    config["hosters"] = [entity.to_dict() for entity in HOSTERS]
    config["speakers"] = [entity.to_dict() for entity in SPEAKERS]
    config.update(sections)
    return config


def _orchestrator(
    drive: FakeDrive, store: InMemoryRecordStore | None = None, **sections: Any
) -> LinterOrchestrator:
    return LinterOrchestrator(build_default_rules(_config(**sections), drive, drive), store)


def test_default_rules_in_registration_order() -> None:
    drive = FakeDrive()

    names = [rule.name() for rule in build_default_rules(_config(), drive, drive)]

    assert names == [
        "event_date",
        "event_title",
        "hoster",
        "event_description",
        "agenda",
        "meetup_link",
        "cncf_link",
        "drive_link",
        "title",
        "labels",
    ]


def test_empty_whitelists_are_rejected() -> None:
    drive = FakeDrive()

    with pytest.raises(ConfigValidationError) as caught:
        build_default_rules(_config(hosters=[], speakers=[]), drive, drive)

    assert [issue.path for issue in caught.value.issues] == ["hosters", "speakers"]


@pytest.mark.asyncio
async def test_valid_record_passes_every_rule() -> None:
    result = await _orchestrator(provisioned_drive()).run(meetup_record(), False)

    output = build_output(result)
    assert output["title"] == VALID_TITLE
    assert output["hoster"] == HOSTERS[0].to_dict()
    assert output["speakers"] == [speaker.to_dict() for speaker in SPEAKERS]
    assert set(output["drive-files"]) == {"slides-link", "notes-link"}


@pytest.mark.asyncio
async def test_fix_mode_repairs_a_loosely_written_issue() -> None:
    record = meetup_record(
        title="My meetup",
        labels=["meetup"],
        fields={
            "hoster": ["Hoster 1"],
            "agenda": "- Speaker One: Talk description One\n- Speaker Two: Talk description Two",
            "meetup_link": meetup_record().fields["meetup_link"] + "/",
        },
    )
    store = InMemoryRecordStore({record.id: record})

    result = await _orchestrator(provisioned_drive(), store).run(record, True)

    assert result.title == VALID_TITLE
    assert sorted(result.labels) == ["hoster:confirmed", "meetup"]
    assert result.fields == meetup_record().fields
    assert result.display_body == meetup_record().display_body
    [(_, patch)] = store.patches
    assert patch.changed_attributes() == ("title", "labels", "display_body")
    assert store.get_record(1).display_body == meetup_record().display_body


@pytest.mark.asyncio
async def test_failures_skip_dependents_and_are_dropped_from_the_output() -> None:
    drive = provisioned_drive()
    record = meetup_record(
        title="Wrong",
        fields={"event_date": "tomorrow", "hoster": ["Nobody"], "agenda": "- Ghost: Boo"},
    )

    with pytest.raises(LintError) as caught:
        await _orchestrator(drive).run(record, False)

    assert caught.value.get_messages() == [
        "Event Date: Invalid ISO date",
        'Hoster: "Nobody" is not in the list of known hosters',
        'Agenda: "Ghost" is not in the list of known speakers',
    ]
    assert drive.calls == []

    output = build_output(record, caught.value.get_issues())
    assert set(output["parsed-body"]) == {
        "event_title",
        "event_description",
        "meetup_link",
        "cncf_link",
        "drive_link",
    }
    assert output["title"] == "Wrong"


@pytest.mark.asyncio
async def test_configured_template_and_entities_are_used() -> None:
    linter = {**default_config()["linter"], "title_template": "<date> | <title>"}
    hosters = [EntityLink("Hoster 1", "https://hosts.example/one").to_dict()]
    record = meetup_record(title=None)
    store = InMemoryRecordStore()

    result = await _orchestrator(
        provisioned_drive(), store, linter=linter, hosters=hosters
    ).run(record, True)

    assert result.title == "2021-12-31 | Meetup Event"
    assert result.fields["hoster"] == ["[Hoster 1](https://hosts.example/one)"]
