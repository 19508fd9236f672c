import json

import pytest

from mentorme.database.migrations import (
    CURRENT_SCHEMA_VERSION,
    LegacyToV1Migration,
    MigrationError,
    MigrationService,
    V1ToV2Migration,
    V2ToV3Migration,
    is_legacy_format,
)
from mentorme.models.backup import ExportEnvelope
from mentorme.models.goal import Goal
from mentorme.models.journal import JournalEntry


@pytest.fixture
def legacy_backup():
    return {
        "version": "1.0.0",
        "exportedAt": "2025-11-16T07:33:58.066679",
        "buildInfo": {
            "gitCommit": "30a69f4ecb75d40c2e88ef44ad7c6d1e446cc12b",
            "gitCommitShort": "30a69f4",
            "buildTimestamp": "2025-11-16T04:24:15Z",
        },
        "data": {
            "goals": [{
                "id": "test-goal-1",
                "title": "Make CBT daily practice",
                "description": "Implement CBT techniques daily.",
                "category": "GoalCategory.personal",
                "status": "GoalStatus.backlog",
                "createdAt": "2025-11-12T22:09:31.785952",
                "targetDate": None,
                "milestonesDetailed": [],
                "currentProgress": 0,
                "isActive": True,
            }],
            "journalEntries": [
                {
                    "id": "test-entry-1",
                    "createdAt": "2025-11-15T22:14:14.115244",
                    "type": "quickNote",
                    "content": "Test content",
                    "goalIds": [],
                },
                {
                    "id": "test-entry-2",
                    "createdAt": "2025-11-15T19:25:37.465211",
                    "type": "structuredJournal",
                    "content": None,
                    "goalIds": [],
                    "structuredSessionId": "1763234737465",
                    "structuredData": {"🍽️ Food Log": None, "Meal Type": "Dinner", "What You Ate": "Pizza"},
                },
            ],
            "habits": [{
                "id": "test-habit-1",
                "title": "Daily Reflection",
                "description": "Use the Journal tab daily",
                "frequency": "HabitFrequency.daily",
                "status": "HabitStatus.active",
                "createdAt": "2025-11-16T06:20:08.566592",
                "completionDates": [],
                "currentStreak": 0,
                "longestStreak": 0,
                "isActive": True,
            }],
            "checkin": {"id": "test-checkin-1", "nextCheckinTime": None, "lastCompletedAt": 1763215864169},
            "pulseEntries": [],
            "pulseTypes": [{"id": "p1", "name": "Mood", "iconName": "mood", "colorHex": "FFE91E63",
                            "isActive": True, "order": 1}],
            "conversations": [{"id": "c1", "title": "Chat 1", "messages": [
                {"id": "m1", "sender": "MessageSender.user", "content": "Hello"}]}],
            "settings": {"aiProvider": "local"},
        },
        "statistics": {"totalGoals": 1, "totalJournalEntries": 2},
    }


def test_detects_legacy_format(legacy_backup):
    assert is_legacy_format(legacy_backup)
    assert not is_legacy_format({"schemaVersion": 1, "exportDate": "2025-11-16T07:33:58"})
    assert not is_legacy_format({"version": "1.0.0", "data": {}, "schemaVersion": 2})
    assert MigrationService().is_legacy_format(legacy_backup)


def test_legacy_to_v1(legacy_backup):
    migration = LegacyToV1Migration()
    assert migration.can_migrate(legacy_backup)
    v1 = migration.migrate(legacy_backup)

    assert v1["schemaVersion"] == 1
    assert v1["exportDate"] == "2025-11-16T07:33:58.066679"
    assert v1["appVersion"] == "1.0.0"
    assert v1["buildNumber"] == "30a69f4"
    assert "statistics" not in v1
    assert "data" not in v1

    for key in ("goals", "journal_entries", "habits", "checkins", "pulse_entries", "pulse_types",
                "conversations", "settings"):
        assert isinstance(v1[key], str)

    goals = json.loads(v1["goals"])
    assert goals[0]["status"] == "GoalStatus.backlog"
    assert "isActive" not in goals[0]

    habits = json.loads(v1["habits"])
    assert habits[0]["isActive"] is True
    assert habits[0]["completionDates"] == []

    conversations = json.loads(v1["conversations"])
    assert conversations[0]["messages"][0]["sender"] == "MessageSender.user"
    assert json.loads(v1["checkins"])["lastCompletedAt"] == 1763215864169


def test_legacy_missing_collections_get_empty_values(frozen_now):
    v1 = LegacyToV1Migration().migrate({"version": "0.9.0", "data": {}})
    assert json.loads(v1["goals"]) == []
    assert json.loads(v1["settings"]) == {}
    assert json.loads(v1["checkins"]) is None
    assert v1["buildNumber"] is None
    assert v1["exportDate"] == "2026-03-18T10:30:00"


def test_v1_to_v2_renders_structured_content():
    entries = [
        {"id": "a", "type": "structuredJournal", "content": None, "structuredSessionId": "s",
         "structuredData": {"🍽️ Food Log": None, "Meal Type": "Dinner", "What You Ate": "Pizza"}},
        {"id": "b", "type": "structuredJournal", "content": "kept", "structuredSessionId": "s",
         "structuredData": {"Mood": "ok"}},
        {"id": "c", "type": "quickNote", "content": "note"},
    ]
    v2 = V1ToV2Migration().migrate({"schemaVersion": 1, "journal_entries": json.dumps(entries)})
    migrated = json.loads(v2["journal_entries"])
    assert v2["schemaVersion"] == 2
    assert migrated[0]["content"] == "Meal Type: Dinner\nWhat You Ate: Pizza"
    assert migrated[1]["content"] == "kept"
    assert migrated[2]["content"] == "note"


def test_v2_to_v3_adds_todos():
    v3 = V2ToV3Migration().migrate({"schemaVersion": 2})
    assert v3["schemaVersion"] == 3
    assert json.loads(v3["todos"]) == []

    existing = json.dumps([{"id": "t1", "title": "x"}])
    assert V2ToV3Migration().migrate({"schemaVersion": 2, "todos": existing})["todos"] == existing


def test_full_legacy_pipeline(legacy_backup):
    service = MigrationService()
    current = service.migrate_legacy(legacy_backup)

    assert current["schemaVersion"] == CURRENT_SCHEMA_VERSION == service.get_current_version()
    assert json.loads(current["todos"]) == []

    entries = [JournalEntry.from_dict(e) for e in json.loads(current["journal_entries"])]
    assert entries[1].content == "Meal Type: Dinner\nWhat You Ate: Pizza"

    goal = Goal.from_dict(json.loads(current["goals"])[0])
    assert goal.is_active is False
    assert "version" in legacy_backup


def test_migrate_leaves_input_untouched():
    data = {"schemaVersion": 2, "exportDate": "2026-01-01T00:00:00"}
    result = MigrationService().migrate(data)
    assert result["schemaVersion"] == 3
    assert data == {"schemaVersion": 2, "exportDate": "2026-01-01T00:00:00"}


def test_current_version_is_a_no_op():
    data = {"schemaVersion": 3, "exportDate": "2026-01-01T00:00:00", "todos": "[]"}
    service = MigrationService()
    assert not service.needs_migration(data)
    assert service.migrate(data) == data


def test_newer_schema_rejected():
    with pytest.raises(MigrationError):
        MigrationService().migrate({"schemaVersion": 4, "exportDate": "2026-01-01T00:00:00"})


def test_invalid_payload_rejected():
    with pytest.raises(MigrationError):
        MigrationService().migrate({"schemaVersion": 2})


def test_corrupt_collection_rejected():
    with pytest.raises(MigrationError):
        MigrationService().migrate({"schemaVersion": 1, "exportDate": "2026-01-01T00:00:00",
                                    "journal_entries": "{not json"})


def test_migration_steps_are_logged(caplog, legacy_backup):
    caplog.set_level("INFO", logger="mentorme.database.migrations")
    MigrationService().migrate_legacy(legacy_backup)
    assert "v1 -> v2" in caplog.text
    assert "v2 -> v3" in caplog.text


class TestExportEnvelope:

    def test_extra_collections_allowed(self):
        envelope = ExportEnvelope.model_validate({
            "schemaVersion": 3, "exportDate": "2026-01-01T00:00:00Z", "buildNumber": 42, "habits": "[]",
        })
        assert envelope.schema_version == 3
        assert envelope.build_number == "42"
        assert envelope.collections() == {"habits": "[]"}

    def test_bad_export_date(self):
        with pytest.raises(ValueError):
            ExportEnvelope.model_validate({"schemaVersion": 3, "exportDate": "yesterday"})
