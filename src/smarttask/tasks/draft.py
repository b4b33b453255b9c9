"""
Task drafts: the record a new task would be stored as.

Runs the classifier over a new task and lets explicitly supplied category
and priority values take precedence over the automatic ones. Nothing here
is persisted; callers decide what to store.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from ..classify.rules import (
    Category,
    ClassificationResult,
    ExtractedEntities,
    Priority,
    classify,
)


TASK_STATUSES = ("pending", "in_progress", "completed")

DUE_DATE_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
]


@dataclass
class TaskDraft:
    """A classified task, ready to be handed to a store."""
    title: str
    description: Optional[str]
    assigned_to: Optional[str]
    due_date: Optional[str]
    category: Category
    priority: Priority
    auto_classification: ClassificationResult
    status: str = "pending"
    extracted_entities: ExtractedEntities = field(default_factory=ExtractedEntities)
    suggested_actions: List[str] = field(default_factory=list)

    def final_used(self) -> Dict[str, str]:
        return {"category": self.category.value, "priority": self.priority.value}

    def to_record(self) -> Dict[str, Any]:
        """Fields as a task store would insert them."""
        return {
            "title": self.title,
            "description": self.description,
            "assigned_to": self.assigned_to,
            "due_date": self.due_date,
            "category": self.category.value,
            "priority": self.priority.value,
            "status": self.status,
            "extracted_entities": {
                "people": list(self.extracted_entities.people),
                "dates": list(self.extracted_entities.dates),
            },
            "suggested_actions": list(self.suggested_actions),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task": self.to_record(),
            "auto_classification": self.auto_classification.to_dict(),
            "final_used": self.final_used(),
        }


def parse_due_date(value: Union[str, date, datetime, None]) -> Optional[str]:
    """
    Normalize a due date to an ISO-8601 string.

    Args:
        value: datetime, date, or a date string (ISO, "YYYY-MM-DD HH:MM",
            "MM/DD/YYYY"; a trailing "Z" is read as UTC)

    Returns:
        ISO-8601 string, or None if value is empty

    Raises:
        ValueError: If the string can't be parsed
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).isoformat()

    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text).isoformat()
    except ValueError:
        pass
    for fmt in DUE_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).isoformat()
        except ValueError:
            continue

    raise ValueError(f"Invalid due_date: '{value}'")


def _override(value: Optional[str], enum_cls, automatic, name: str):
    if not value:
        return automatic
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"Invalid {name}: '{value}' (expected one of: {allowed})") from None


def prepare_task(
    title: Optional[str],
    description: Optional[str] = None,
    assigned_to: Optional[str] = None,
    due_date: Union[str, date, datetime, None] = None,
    category: Optional[str] = None,
    priority: Optional[str] = None,
) -> TaskDraft:
    """
    Classify a new task and build its draft record.

    Explicit category/priority win over the automatic classification; the
    automatic result is kept on the draft either way.

    Args:
        title: Task title (required)
        description: Optional description
        assigned_to: Optional assignee
        due_date: Optional due date (see parse_due_date)
        category: Optional category override
        priority: Optional priority override

    Returns:
        TaskDraft with status "pending"

    Raises:
        ValueError: If title is missing, or due_date/category/priority is invalid
    """
    if title is None or not str(title).strip():
        raise ValueError("title is required")

    title = str(title)
    description = str(description) if description else None
    assigned_to = str(assigned_to) if assigned_to else None
    auto = classify(title, description or "")

    final_category = _override(category, Category, auto.category, "category")
    final_priority = _override(priority, Priority, auto.priority, "priority")

    return TaskDraft(
        title=title,
        description=description,
        assigned_to=assigned_to,
        due_date=parse_due_date(due_date),
        category=final_category,
        priority=final_priority,
        auto_classification=auto,
        extracted_entities=auto.extracted_entities,
        suggested_actions=list(auto.suggested_actions),
    )


def summarize_statuses(records: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    """
    Count task records per status.

    Args:
        records: Task records with a "status" key

    Returns:
        Dict of status -> count for every known status (unknown ones ignored)
    """
    counts = {status: 0 for status in TASK_STATUSES}
    for record in records:
        status = record.get("status")
        if status in counts:
            counts[status] += 1
    return counts
