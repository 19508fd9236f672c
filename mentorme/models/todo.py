import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Any, Optional

from mentorme.utils import datetime_utils
from mentorme.models.base import Record, decoding, enum_to_legacy, new_id, parse_enum, validate_text


class TodoStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class TodoPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def sort_value(self) -> int:
        """Lower sorts first"""
        return _PRIORITY_ORDER[self]


_PRIORITY_ORDER = {
    TodoPriority.HIGH: 0,
    TodoPriority.MEDIUM: 1,
    TodoPriority.LOW: 2,
}


@dataclass(frozen=True)
class Todo(Record):
    """A one-off task, optionally linked to a goal or habit"""
    title: str
    id: str = field(default_factory=new_id)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    reminder_time: Optional[datetime] = None
    has_reminder: bool = False
    priority: TodoPriority = TodoPriority.MEDIUM
    linked_goal_id: Optional[str] = None
    linked_habit_id: Optional[str] = None
    status: TodoStatus = TodoStatus.PENDING
    completed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    updated_at: Optional[datetime] = None
    sort_order: int = 0
    was_voice_captured: bool = False
    voice_transcript: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "title", validate_text(self.title, max_length=500, field_name="title"))
        if self.updated_at is None:
            object.__setattr__(self, "updated_at", self.created_at)

    def copy_with(self, **changes) -> "Todo":
        if "id" in changes:
            raise TypeError("Todo id cannot be changed")
        changes["updated_at"] = datetime_utils.now()
        return dataclasses.replace(self, **changes)

    def mark_complete(self) -> "Todo":
        return self.copy_with(status=TodoStatus.COMPLETED, completed_at=datetime_utils.now())

    def mark_pending(self) -> "Todo":
        return self.copy_with(status=TodoStatus.PENDING, completed_at=None)

    @property
    def is_overdue(self) -> bool:
        if self.due_date is None or self.status != TodoStatus.PENDING:
            return False
        return self.due_date.date() < datetime_utils.today()

    @property
    def is_due_today(self) -> bool:
        return self.due_date is not None and self.due_date.date() == datetime_utils.today()

    @property
    def is_due_this_week(self) -> bool:
        if self.due_date is None:
            return False
        week_start = datetime_utils.start_of_week(datetime_utils.today())
        return week_start <= self.due_date.date() < week_start + timedelta(days=7)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": datetime_utils.to_optional_iso(self.due_date),
            "reminderTime": datetime_utils.to_optional_iso(self.reminder_time),
            "hasReminder": self.has_reminder,
            "priority": enum_to_legacy(self.priority),
            "linkedGoalId": self.linked_goal_id,
            "linkedHabitId": self.linked_habit_id,
            "status": enum_to_legacy(self.status),
            "completedAt": datetime_utils.to_optional_iso(self.completed_at),
            "createdAt": datetime_utils.to_iso(self.created_at),
            "updatedAt": datetime_utils.to_iso(self.updated_at),
            "sortOrder": self.sort_order,
            "wasVoiceCaptured": self.was_voice_captured,
            "voiceTranscript": self.voice_transcript,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        with decoding("Todo"):
            return cls(
                id=data.get("id") or new_id(),
                title=data["title"],
                description=data.get("description"),
                due_date=datetime_utils.parse_optional_datetime(data.get("dueDate")),
                reminder_time=datetime_utils.parse_optional_datetime(data.get("reminderTime")),
                has_reminder=bool(data.get("hasReminder", False)),
                priority=parse_enum(TodoPriority, data.get("priority"), TodoPriority.MEDIUM),
                linked_goal_id=data.get("linkedGoalId"),
                linked_habit_id=data.get("linkedHabitId"),
                status=parse_enum(TodoStatus, data.get("status"), TodoStatus.PENDING),
                completed_at=datetime_utils.parse_optional_datetime(data.get("completedAt")),
                created_at=datetime_utils.parse_optional_datetime(data.get("createdAt")) or datetime_utils.now(),
                updated_at=datetime_utils.parse_optional_datetime(data.get("updatedAt")),
                sort_order=int(data.get("sortOrder") or 0),
                was_voice_captured=bool(data.get("wasVoiceCaptured", False)),
                voice_transcript=data.get("voiceTranscript"),
            )
