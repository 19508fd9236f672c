from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List, Optional

from mentorme.utils import datetime_utils
from mentorme.utils.text_utils import truncate
from mentorme.models.base import Record, ValidationError, decoding, new_id, parse_enum


class JournalEntryType(Enum):
    QUICK_NOTE = "quickNote"
    GUIDED_JOURNAL = "guidedJournal"
    STRUCTURED_JOURNAL = "structuredJournal"


@dataclass(frozen=True)
class QAPair:
    question: str
    answer: str

    def to_dict(self) -> Dict[str, Any]:
        return {"question": self.question, "answer": self.answer}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QAPair":
        with decoding("QAPair"):
            return cls(question=data["question"], answer=data["answer"])


@dataclass(frozen=True)
class JournalEntry(Record):
    """Quick notes carry content, guided entries carry Q&A pairs,
    structured entries reference the session they came from."""
    type: JournalEntryType
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    reflection_type: Optional[str] = None  # 'onboarding', 'checkin', 'general'
    content: Optional[str] = None
    qa_pairs: Optional[List[QAPair]] = None
    goal_ids: List[str] = field(default_factory=list)
    ai_insights: Optional[Dict[str, str]] = None
    structured_session_id: Optional[str] = None
    structured_data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.type == JournalEntryType.QUICK_NOTE and self.content is None:
            raise ValidationError("Quick notes must have content")
        if self.type == JournalEntryType.GUIDED_JOURNAL and self.qa_pairs is None:
            raise ValidationError("Guided journals must have qa_pairs")
        if self.type == JournalEntryType.STRUCTURED_JOURNAL and self.structured_session_id is None:
            raise ValidationError("Structured journals must have structured_session_id")

    def preview(self, max_len: int = 80) -> str:
        """One-line excerpt for lists"""
        if self.content:
            text = self.content
        elif self.qa_pairs:
            text = self.qa_pairs[0].answer
        else:
            text = ""
        return truncate(" ".join(text.split()), max_len)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "createdAt": datetime_utils.to_iso(self.created_at),
            "type": self.type.value,
            "reflectionType": self.reflection_type,
            "content": self.content,
            "qaPairs": [qa.to_dict() for qa in self.qa_pairs] if self.qa_pairs is not None else None,
            "goalIds": list(self.goal_ids),
            "aiInsights": dict(self.ai_insights) if self.ai_insights is not None else None,
            "structuredSessionId": self.structured_session_id,
            "structuredData": dict(self.structured_data) if self.structured_data is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JournalEntry":
        with decoding("JournalEntry"):
            qa_pairs = data.get("qaPairs")
            insights = data.get("aiInsights")
            structured = data.get("structuredData")
            return cls(
                id=data.get("id") or new_id(),
                created_at=datetime_utils.parse_optional_datetime(data.get("createdAt")) or datetime_utils.now(),
                type=parse_enum(JournalEntryType, data.get("type"), JournalEntryType.QUICK_NOTE),
                reflection_type=data.get("reflectionType"),
                content=data.get("content"),
                qa_pairs=[QAPair.from_dict(qa) for qa in qa_pairs] if qa_pairs is not None else None,
                goal_ids=[str(g) for g in data.get("goalIds") or []],
                ai_insights={str(k): str(v) for k, v in insights.items()} if insights is not None else None,
                structured_session_id=data.get("structuredSessionId"),
                structured_data=dict(structured) if structured is not None else None,
            )
