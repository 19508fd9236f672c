import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional

from mentorme.utils import datetime_utils
from mentorme.models.base import Record, decoding, new_id, validate_text


@dataclass(frozen=True)
class Milestone(Record):
    """A checkpoint on the way to a goal"""
    goal_id: str
    title: str
    description: str
    order: int
    id: str = field(default_factory=new_id)
    target_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    is_completed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "title", validate_text(self.title, max_length=200, field_name="title"))
        if self.updated_at is None:
            object.__setattr__(self, "updated_at", self.created_at)

    def copy_with(self, **changes) -> "Milestone":
        if "id" in changes or "goal_id" in changes:
            raise TypeError("Milestone id and goal_id cannot be changed")
        changes["updated_at"] = datetime_utils.now()
        return dataclasses.replace(self, **changes)

    def mark_complete(self) -> "Milestone":
        return self.copy_with(is_completed=True, completed_date=datetime_utils.now())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "goalId": self.goal_id,
            "title": self.title,
            "description": self.description,
            "targetDate": datetime_utils.to_optional_iso(self.target_date),
            "completedDate": datetime_utils.to_optional_iso(self.completed_date),
            "order": self.order,
            "isCompleted": self.is_completed,
            "createdAt": datetime_utils.to_iso(self.created_at),
            "updatedAt": datetime_utils.to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Milestone":
        with decoding("Milestone"):
            return cls(
                id=data.get("id") or new_id(),
                goal_id=data["goalId"],
                title=data["title"],
                description=data.get("description") or "",
                order=int(data.get("order") or 0),
                target_date=datetime_utils.parse_optional_datetime(data.get("targetDate")),
                completed_date=datetime_utils.parse_optional_datetime(data.get("completedDate")),
                is_completed=bool(data.get("isCompleted", False)),
                created_at=datetime_utils.parse_optional_datetime(data.get("createdAt")) or datetime_utils.now(),
                updated_at=datetime_utils.parse_optional_datetime(data.get("updatedAt")),
            )
