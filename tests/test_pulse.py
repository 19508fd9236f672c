from datetime import datetime, timedelta

import pytest

from mentorme.models.base import ValidationError
from mentorme.models.pulse import MoodRating, PulseEntry, PulseType


def test_mood_rating_table():
    assert MoodRating.GOOD.emoji == "🙂"
    assert MoodRating.VERY_BAD.display_name == "Very Bad"
    assert MoodRating.GOOD.score == 4
    assert not MoodRating.NOT_SET.is_set
    assert MoodRating.EXCELLENT.is_set


def test_metrics_validated():
    with pytest.raises(ValidationError):
        PulseEntry(custom_metrics={"Mood": 6})


def test_metric_lookup():
    entry = PulseEntry(custom_metrics={"Mood": 4, "Energy": 2})
    assert entry.has_valid_data
    assert entry.get_metric("Energy") == 2
    assert entry.get_metric("Sleep") is None
    assert entry.has_metric("Mood")
    assert not PulseEntry().has_valid_data


@pytest.mark.parametrize("metrics,expected", [
    ({}, "Pulse Check"),
    ({"Energy": 3}, "Energy Check"),
    ({"Mood": 4, "Energy": 3}, "Wellness Check"),
])
def test_check_in_type_name(metrics, expected):
    assert PulseEntry(custom_metrics=metrics).check_in_type_name == expected


def test_date_and_time_display(frozen_now):
    assert PulseEntry(timestamp=frozen_now).date_display == "Today"
    assert PulseEntry(timestamp=frozen_now - timedelta(days=1)).date_display == "Yesterday"
    assert PulseEntry(timestamp=datetime(2026, 2, 5, 8, 0)).date_display == "2/5/2026"
    assert PulseEntry(timestamp=datetime(2026, 2, 5, 14, 7)).time_display == "2:07 PM"


def test_json(frozen_now):
    entry = PulseEntry(custom_metrics={"Mood": 4}, notes="good walk", journal_entry_id="j1")
    data = entry.to_dict()
    assert data["customMetrics"] == {"Mood": 4}
    assert PulseEntry.from_dict(data) == entry


def test_legacy_mood_and_energy(frozen_now):
    entry = PulseEntry.from_dict({
        "id": "p1",
        "timestamp": "2026-03-18T08:00:00",
        "mood": "MoodRating.good",
        "energyLevel": 3,
    })
    assert entry.custom_metrics == {"Mood": 4, "Energy": 3}


def test_legacy_unset_values_skipped(frozen_now):
    entry = PulseEntry.from_dict({"mood": "MoodRating.notSet", "energyLevel": 0})
    assert entry.custom_metrics == {}
    assert not entry.has_valid_data


def test_custom_metrics_win_over_legacy_fields(frozen_now):
    entry = PulseEntry.from_dict({"customMetrics": {"Focus": 5}, "mood": "MoodRating.bad"})
    assert entry.custom_metrics == {"Focus": 5}


class TestPulseType:

    def test_defaults(self):
        defaults = PulseType.get_defaults()
        assert [t.name for t in defaults] == ["Mood", "Energy", "Wellness"]
        assert [t.order for t in defaults] == [1, 2, 3]
        assert defaults[1].icon_name == "bolt"
        assert defaults[0].color_hex == "FFE91E63"
        assert all(t.is_active for t in defaults)

    def test_color_validated(self):
        with pytest.raises(ValidationError):
            PulseType(name="Sleep", icon_name="bed", color_hex="#123456")

    def test_copy_with_refreshes_updated_at(self, frozen_now):
        pulse_type = PulseType(name="Sleep", icon_name="bed", color_hex="FF3F51B5")
        assert pulse_type.updated_at is None
        renamed = pulse_type.copy_with(name="Rest")
        assert renamed.updated_at == frozen_now
        assert renamed.id == pulse_type.id

    def test_legacy_icon_code_point(self, frozen_now):
        pulse_type = PulseType.from_dict({"name": "Mood", "iconCodePoint": 58387, "colorHex": "FFE91E63"})
        assert pulse_type.icon_name == "mood"

    def test_null_icon_name_uses_code_point(self, frozen_now):
        pulse_type = PulseType.from_dict(
            {"name": "Mood", "iconName": None, "iconCodePoint": 58387, "colorHex": "FFE91E63"}
        )
        assert pulse_type.icon_name == "mood"

    def test_null_icon_without_code_point_fails(self):
        with pytest.raises(ValidationError):
            PulseType.from_dict({"name": "Mood", "iconName": None, "colorHex": "FFE91E63"})

    def test_missing_icon_fails(self):
        with pytest.raises(ValidationError):
            PulseType.from_dict({"name": "Mood", "colorHex": "FFE91E63"})

    def test_json(self, frozen_now):
        pulse_type = PulseType(name="Sleep", icon_name="bed", color_hex="FF3F51B5", order=4, is_active=False)
        data = pulse_type.to_dict()
        assert data["iconName"] == "bed"
        assert PulseType.from_dict(data) == pulse_type
