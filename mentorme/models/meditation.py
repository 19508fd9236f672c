#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Meditation
Meditation techniques, completed sessions and practice statistics

Version: 3.0.0
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List, Optional

from mentorme.utils import datetime_utils
from mentorme.models.base import Record, ValidationError, decoding, new_id, optional_int, parse_enum, validate_scale

# Sessions within 10% of the planned length count as complete
COMPLETION_THRESHOLD = 0.9


class MeditationType(Enum):
    BREATH_AWARENESS = "breathAwareness"
    BODY_SCANS = "bodyScans"
    MINDFUL_AWARENESS = "mindfulAwareness"
    LOVING_KINDNESS = "lovingKindness"  # metta
    GUIDED_RELAXATION = "guidedRelaxation"
    BOX_BREATHING = "boxBreathing"      # 4-4-4-4
    FOUR_SEVEN_EIGHT = "fourSevenEight"  # 4-7-8

    @property
    def display_name(self) -> str:
        return _TYPE_INFO[self]["name"]

    @property
    def description(self) -> str:
        return _TYPE_INFO[self]["description"]

    @property
    def emoji(self) -> str:
        return _TYPE_INFO[self]["emoji"]

    @property
    def default_duration_seconds(self) -> int:
        return _TYPE_INFO[self]["seconds"]

    @property
    def instructions(self) -> List[str]:
        return list(_TYPE_INFO[self]["steps"])


_TYPE_INFO = {
    MeditationType.BREATH_AWARENESS: {
        "name": "Breath Awareness",
        "description": "Focus attention on the natural rhythm of your breath",
        "emoji": "🌬️",
        "seconds": 300,
        "steps": (
            "Find a comfortable seated position",
            "Close your eyes or soften your gaze",
            "Bring attention to your natural breath",
            "Notice the sensation of air entering and leaving",
            "When your mind wanders, gently return to the breath",
            "There's no need to control the breath - just observe",
        ),
    },
    MeditationType.BODY_SCANS: {
        "name": "Body Scan",
        "description": "Systematically notice sensations throughout your body",
        "emoji": "🧘",
        "seconds": 600,
        "steps": (
            "Lie down or sit comfortably",
            "Close your eyes and take a few deep breaths",
            "Bring attention to the top of your head",
            "Slowly move awareness down through your body",
            "Notice any sensations without judgment",
            "Release tension as you become aware of each area",
        ),
    },
    MeditationType.MINDFUL_AWARENESS: {
        "name": "Mindful Awareness",
        "description": "Open awareness of thoughts, feelings, and sensations",
        "emoji": "🧠",
        "seconds": 300,
        "steps": (
            "Sit comfortably with an alert but relaxed posture",
            "Let your awareness be open and receptive",
            "Notice whatever arises - thoughts, feelings, sounds",
            "Observe without getting caught up in any experience",
            "Let experiences come and go like clouds in the sky",
            "Return to open awareness when you notice you've drifted",
        ),
    },
    MeditationType.LOVING_KINDNESS: {
        "name": "Loving-Kindness",
        "description": "Cultivate warmth and compassion for yourself and others",
        "emoji": "💗",
        "seconds": 420,
        "steps": (
            "Sit comfortably and close your eyes",
            "Begin by directing kindness toward yourself",
            'Silently repeat: "May I be happy, may I be healthy"',
            "Extend these wishes to loved ones, then acquaintances",
            "Finally, extend to all beings everywhere",
            "Let warmth and compassion fill your awareness",
        ),
    },
    MeditationType.GUIDED_RELAXATION: {
        "name": "Guided Relaxation",
        "description": "Follow along with calming imagery and relaxation cues",
        "emoji": "🌿",
        "seconds": 600,
        "steps": (
            "Find a comfortable position",
            "Close your eyes and take several deep breaths",
            "Imagine a peaceful, safe place",
            "Notice the details - sights, sounds, sensations",
            "Allow yourself to feel completely at ease",
            "Breathe slowly and let tension melt away",
        ),
    },
    MeditationType.BOX_BREATHING: {
        "name": "Box Breathing",
        "description": "Inhale 4s, hold 4s, exhale 4s, hold 4s - reduces stress",
        "emoji": "⬜",
        "seconds": 180,
        "steps": (
            "Sit upright in a comfortable position",
            "Breathe in slowly for 4 seconds",
            "Hold your breath for 4 seconds",
            "Exhale slowly for 4 seconds",
            "Hold your breath for 4 seconds",
            "Repeat the cycle, maintaining steady rhythm",
        ),
    },
    MeditationType.FOUR_SEVEN_EIGHT: {
        "name": "4-7-8 Breathing",
        "description": "Inhale 4s, hold 7s, exhale 8s - promotes calm and sleep",
        "emoji": "🌙",
        "seconds": 180,
        "steps": (
            "Sit comfortably or lie down",
            "Place tongue tip behind upper front teeth",
            "Exhale completely through your mouth",
            "Inhale quietly through nose for 4 seconds",
            "Hold your breath for 7 seconds",
            "Exhale completely through mouth for 8 seconds",
        ),
    },
}


@dataclass(frozen=True)
class MeditationSession(Record):
    type: MeditationType
    duration_seconds: int  # actually completed
    id: str = field(default_factory=new_id)
    completed_at: datetime = field(default_factory=lambda: datetime_utils.now())
    planned_duration_seconds: Optional[int] = None
    notes: Optional[str] = None
    mood_before: Optional[int] = None  # 1-5
    mood_after: Optional[int] = None   # 1-5
    was_interrupted: bool = False

    def __post_init__(self):
        if self.duration_seconds < 0:
            raise ValidationError("duration_seconds cannot be negative")
        validate_scale(self.mood_before, "mood_before")
        validate_scale(self.mood_after, "mood_after")

    @property
    def duration_minutes(self) -> int:
        """Rounded to the nearest minute, halves up"""
        return int(self.duration_seconds / 60 + 0.5)

    @property
    def mood_change(self) -> Optional[int]:
        if self.mood_before is None or self.mood_after is None:
            return None
        return self.mood_after - self.mood_before

    @property
    def is_complete(self) -> bool:
        if self.planned_duration_seconds is None:
            return True
        return self.duration_seconds >= self.planned_duration_seconds * COMPLETION_THRESHOLD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "completedAt": datetime_utils.to_iso(self.completed_at),
            "durationSeconds": self.duration_seconds,
            "plannedDurationSeconds": self.planned_duration_seconds,
            "notes": self.notes,
            "moodBefore": self.mood_before,
            "moodAfter": self.mood_after,
            "wasInterrupted": self.was_interrupted,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MeditationSession":
        with decoding("MeditationSession"):
            return cls(
                id=data.get("id") or new_id(),
                type=parse_enum(MeditationType, data.get("type"), MeditationType.BREATH_AWARENESS),
                completed_at=datetime_utils.parse_optional_datetime(data.get("completedAt")) or datetime_utils.now(),
                duration_seconds=int(data["durationSeconds"]),
                planned_duration_seconds=optional_int(data.get("plannedDurationSeconds")),
                notes=data.get("notes"),
                mood_before=optional_int(data.get("moodBefore")),
                mood_after=optional_int(data.get("moodAfter")),
                was_interrupted=bool(data.get("wasInterrupted", False)),
            )


@dataclass(frozen=True)
class MeditationStats:
    total_sessions: int
    total_minutes: int
    current_streak: int  # days in a row, ending today or yesterday
    longest_streak: int
    sessions_by_type: Dict[MeditationType, int]
    last_session_date: Optional[datetime] = None

    @property
    def is_streak_active(self) -> bool:
        if self.last_session_date is None:
            return False
        return datetime_utils.days_between(self.last_session_date, datetime_utils.now()) <= 1

    @classmethod
    def from_sessions(cls, sessions: List[MeditationSession]) -> "MeditationStats":
        if not sessions:
            return cls(total_sessions=0, total_minutes=0, current_streak=0, longest_streak=0, sessions_by_type={})

        by_type: Dict[MeditationType, int] = {}
        for s in sessions:
            by_type[s.type] = by_type.get(s.type, 0) + 1

        last = max(s.completed_at for s in sessions)
        runs = datetime_utils.consecutive_day_runs(s.completed_at.date() for s in sessions)
        current = runs[-1] if datetime_utils.days_between(last, datetime_utils.now()) <= 1 else 0

        return cls(
            total_sessions=len(sessions),
            total_minutes=sum(s.duration_minutes for s in sessions),
            current_streak=current,
            longest_streak=max(runs),
            sessions_by_type=by_type,
            last_session_date=last,
        )
