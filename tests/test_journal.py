import pytest

from mentorme.models.base import ValidationError
from mentorme.models.journal import JournalEntry, JournalEntryType, QAPair


def test_quick_note_requires_content():
    with pytest.raises(ValidationError):
        JournalEntry(type=JournalEntryType.QUICK_NOTE)
    JournalEntry(type=JournalEntryType.QUICK_NOTE, content="Slept well")


def test_guided_requires_qa_pairs():
    with pytest.raises(ValidationError):
        JournalEntry(type=JournalEntryType.GUIDED_JOURNAL, content="text only")


def test_structured_requires_session_id():
    with pytest.raises(ValidationError):
        JournalEntry(type=JournalEntryType.STRUCTURED_JOURNAL, structured_data={"Mood": "ok"})


def test_preview():
    note = JournalEntry(type=JournalEntryType.QUICK_NOTE, content="Long day.\n\nBut   a good one " * 10)
    preview = note.preview(40)
    assert len(preview) == 40
    assert preview.endswith("…")
    assert "\n" not in preview

    guided = JournalEntry(type=JournalEntryType.GUIDED_JOURNAL,
                          qa_pairs=[QAPair("How are you?", "Calm")])
    assert guided.preview() == "Calm"


def test_json(frozen_now):
    entry = JournalEntry(
        type=JournalEntryType.STRUCTURED_JOURNAL,
        structured_session_id="1763234737465",
        structured_data={"Meal Type": "Dinner"},
        content="Meal Type: Dinner",
        goal_ids=["g1"],
    )
    data = entry.to_dict()
    assert data["type"] == "structuredJournal"
    assert data["createdAt"] == "2026-03-18T10:30:00"
    assert JournalEntry.from_dict(data) == entry


def test_from_dict_accepts_qualified_type():
    entry = JournalEntry.from_dict({"type": "JournalEntryType.guidedJournal",
                                    "qaPairs": [{"question": "Q", "answer": "A"}]})
    assert entry.type == JournalEntryType.GUIDED_JOURNAL
    assert entry.qa_pairs == [QAPair("Q", "A")]


def test_from_dict_inconsistent_entry():
    with pytest.raises(ValidationError):
        JournalEntry.from_dict({"type": "quickNote", "content": None})
