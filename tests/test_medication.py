from datetime import date, timedelta

import pytest

from mentorme.models.base import ValidationError
from mentorme.models.medication import (
    DosageConstraint,
    DosageConstraintType,
    Medication,
    MedicationAdherenceSummary,
    MedicationCategory,
    MedicationFrequency,
    MedicationLog,
    MedicationLogStatus,
)


def test_enum_tables():
    assert MedicationFrequency.TWICE_DAILY.short_name == "BID"
    assert MedicationFrequency.AS_NEEDED.display_name == "As needed"
    assert MedicationCategory.HERBAL.emoji == "🌿"
    assert MedicationLogStatus.SKIPPED.display_name == "Skipped"


def test_display_helpers():
    med = Medication(name="Metformin", dosage="500mg", frequency=MedicationFrequency.TWICE_DAILY)
    assert med.display_string == "Metformin 500mg"
    assert med.summary == "500mg · Twice daily"
    assert Medication(name="Vitamin D").summary == "Once daily"


def test_reminder_times_validated():
    Medication(name="Iron", reminder_times=["08:00", "20:30"])
    with pytest.raises(ValidationError):
        Medication(name="Iron", reminder_times=["8am"])


def test_json_round_trip(frozen_now):
    med = Medication(
        name="Ibuprofen",
        dosage="200mg",
        frequency=MedicationFrequency.AS_NEEDED,
        category=MedicationCategory.OVER_THE_COUNTER,
        dosage_constraints=[
            DosageConstraint(type=DosageConstraintType.MIN_TIME_BETWEEN, description="4h between doses",
                             duration_minutes=240),
            DosageConstraint(type=DosageConstraintType.MAX_CUMULATIVE_AMOUNT, description="1200mg per day",
                             max_amount=1200.0, unit="mg", period_hours=24),
        ],
    )
    data = med.to_dict()
    assert data["frequency"] == "asNeeded"
    assert data["category"] == "overTheCounter"
    assert data["dosageConstraints"][0]["type"] == "minTimeBetween"
    assert Medication.from_dict(data) == med


def test_from_dict_missing_and_unknown_enums():
    missing = Medication.from_dict({"name": "A"})
    assert missing.frequency == MedicationFrequency.ONCE_DAILY
    assert missing.category == MedicationCategory.PRESCRIPTION

    unknown = Medication.from_dict({"name": "A", "frequency": "hourly", "category": "homeopathic"})
    assert unknown.frequency == MedicationFrequency.OTHER
    assert unknown.category == MedicationCategory.OTHER


def test_unknown_constraint_type():
    constraint = DosageConstraint.from_dict({"type": "lunarCycle", "description": "?"})
    assert constraint.type == DosageConstraintType.CUSTOM


def test_log_json(frozen_now):
    log = MedicationLog(medication_id="m1", medication_name="Iron", status=MedicationLogStatus.SKIPPED,
                        skip_reason="ran out")
    assert log.date == frozen_now.date()
    assert MedicationLog.from_dict(log.to_dict()) == log


def test_adherence_summary(frozen_now):
    start = date(2026, 3, 16)
    end = date(2026, 3, 18)
    logs = [
        MedicationLog(medication_id="m1", medication_name="Iron", timestamp=frozen_now),
        MedicationLog(medication_id="m1", medication_name="Iron", timestamp=frozen_now - timedelta(days=1)),
        MedicationLog(medication_id="m1", medication_name="Iron", timestamp=frozen_now - timedelta(days=2),
                      status=MedicationLogStatus.SKIPPED),
        MedicationLog(medication_id="m1", medication_name="Iron", timestamp=frozen_now - timedelta(days=5)),
    ]
    summary = MedicationAdherenceSummary.from_logs(logs, start, end, expected_per_day=2)
    assert summary.total_expected == 6
    assert summary.total_taken == 2
    assert summary.total_skipped == 1
    assert summary.total_missed == 3
    assert summary.adherence_rate == pytest.approx(100 * 2 / 6)


def test_adherence_with_nothing_expected():
    summary = MedicationAdherenceSummary.from_logs([], date(2026, 3, 16), date(2026, 3, 18), expected_per_day=0)
    assert summary.adherence_rate == 100.0
    assert summary.total_missed == 0
