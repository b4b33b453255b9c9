"""
Classification rules for SmartTask.

Defines the fixed keyword tables and the rule-based engine that turns a task
title and description into a category, a priority, extracted entities and a
canned list of suggested actions.

Matching is plain substring search over the lowercased text. Tables are
scanned in declared order and the first hit wins, so the order below is
part of the behaviour.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


logger = logging.getLogger(__name__)


class Category(str, Enum):
    SCHEDULING = "scheduling"
    FINANCE = "finance"
    TECHNICAL = "technical"
    SAFETY = "safety"
    GENERAL = "general"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ExtractedEntities:
    """People and date references pulled out of the task text."""
    people: Tuple[str, ...] = ()
    dates: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassificationResult:
    """Result of classifying a task."""
    category: Category
    priority: Priority
    extracted_entities: ExtractedEntities = field(default_factory=ExtractedEntities)
    suggested_actions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-ready mapping of the result."""
        return {
            "category": self.category.value,
            "priority": self.priority.value,
            "extracted_entities": {
                "people": list(self.extracted_entities.people),
                "dates": list(self.extracted_entities.dates),
            },
            "suggested_actions": list(self.suggested_actions),
        }


# Category keywords, checked in this order
CATEGORY_KEYWORDS: Mapping[Category, Tuple[str, ...]] = MappingProxyType({
    Category.SCHEDULING: ("meeting", "schedule", "call", "appointment", "deadline"),
    Category.FINANCE: ("payment", "invoice", "bill", "budget", "cost", "expense"),
    Category.TECHNICAL: ("bug", "fix", "error", "install", "repair", "maintain"),
    Category.SAFETY: ("safety", "hazard", "inspection", "compliance", "ppe"),
})

# Priority keywords, high before medium
PRIORITY_KEYWORDS: Mapping[Priority, Tuple[str, ...]] = MappingProxyType({
    Priority.HIGH: ("urgent", "asap", "immediately", "today", "critical", "emergency"),
    Priority.MEDIUM: ("soon", "this week", "important"),
})

SUGGESTED_ACTIONS: Mapping[Category, Tuple[str, ...]] = MappingProxyType({
    Category.SCHEDULING: ("Block calendar", "Send invite", "Prepare agenda", "Set reminder"),
    Category.FINANCE: ("Check budget", "Get approval", "Generate invoice", "Update records"),
    Category.TECHNICAL: ("Diagnose issue", "Check resources", "Assign technician", "Document fix"),
    Category.SAFETY: ("Conduct inspection", "File report", "Notify supervisor", "Update checklist"),
})

DEFAULT_ACTIONS: Tuple[str, ...] = ("Review task",)

# Only the first word after the trigger is kept as the name
PEOPLE_PATTERN = re.compile(r"(with|by|assign to|for)\s+([a-zA-Z\s]+)", re.IGNORECASE)

DATE_PATTERN = re.compile(
    r"\b(today|tomorrow|this week|\d{1,2}/\d{1,2}|\d{1,2}-\d{1,2})",
    re.IGNORECASE | re.ASCII,
)


def normalize_text(title: Optional[str], description: Optional[str] = "") -> str:
    """
    Join title and description into the lowercase text all rules run on.

    Args:
        title: Task title (None treated as empty)
        description: Task description (None treated as empty)

    Returns:
        "<title> <description>" in lowercase
    """
    return f"{title or ''} {description or ''}".lower()


def _first_match(text: str, table: Mapping[Any, Tuple[str, ...]]) -> Tuple[Any, Optional[str]]:
    for label, keywords in table.items():
        for keyword in keywords:
            if keyword in text:
                return label, keyword
    return None, None


def detect_category(text: str) -> Tuple[Category, Optional[str]]:
    """
    Find the category of normalized text.

    Categories are tried in table order and keywords in list order; the
    first keyword found anywhere in the text decides. No scoring is done.

    Args:
        text: Normalized (lowercase) task text

    Returns:
        (category, triggering keyword), or (GENERAL, None) if nothing matched
    """
    category, keyword = _first_match(text, CATEGORY_KEYWORDS)
    if category is None:
        return Category.GENERAL, None
    return category, keyword


def detect_priority(text: str) -> Tuple[Priority, Optional[str]]:
    """
    Find the priority of normalized text, same algorithm as detect_category().

    Returns:
        (priority, triggering keyword), or (LOW, None) if nothing matched
    """
    priority, keyword = _first_match(text, PRIORITY_KEYWORDS)
    if priority is None:
        return Priority.LOW, None
    return priority, keyword


def extract_people(text: str) -> List[str]:
    """
    Extract candidate person names following "with", "by", "assign to" or "for".

    The captured phrase runs to the next non-letter character, but only its
    first word is kept, so "with John Smith" yields "john". Duplicates are
    kept in match order.

    Args:
        text: Normalized task text

    Returns:
        List of names in match order
    """
    people = []
    for match in PEOPLE_PATTERN.finditer(text):
        tokens = match.group(2).split()
        if tokens:
            people.append(tokens[0].strip())
    return people


def extract_dates(text: str) -> List[str]:
    """
    Extract date references: today, tomorrow, this week, D/D or D-D.

    Args:
        text: Normalized task text

    Returns:
        Matched substrings as found, in order, duplicates kept
    """
    return [match.group(0) for match in DATE_PATTERN.finditer(text)]


def extract_entities(text: str) -> ExtractedEntities:
    return ExtractedEntities(
        people=tuple(extract_people(text)),
        dates=tuple(extract_dates(text)),
    )


def suggested_actions_for(category: Category) -> Tuple[str, ...]:
    return SUGGESTED_ACTIONS.get(category, DEFAULT_ACTIONS)


def classify(title: Optional[str], description: Optional[str] = "") -> ClassificationResult:
    """
    Classify a task from its title and description.

    Never raises for string or None input: when nothing matches the result
    is general / low / no entities / ["Review task"].

    Args:
        title: Task title
        description: Optional task description

    Returns:
        ClassificationResult with category, priority, extracted_entities,
        suggested_actions
    """
    text = normalize_text(title, description)

    category, category_keyword = detect_category(text)
    priority, priority_keyword = detect_priority(text)

    logger.debug(
        "category=%s (keyword=%r) priority=%s (keyword=%r)",
        category.value, category_keyword, priority.value, priority_keyword,
    )

    return ClassificationResult(
        category=category,
        priority=priority,
        extracted_entities=extract_entities(text),
        suggested_actions=suggested_actions_for(category),
    )


def get_keyword_tables() -> Dict[str, Dict[str, List[str]]]:
    """
    Get copies of all keyword and action tables for display.

    Returns:
        Dict with "categories", "priorities" and "actions" tables keyed by
        plain string names, in match order
    """
    actions = {c.value: list(a) for c, a in SUGGESTED_ACTIONS.items()}
    actions[Category.GENERAL.value] = list(DEFAULT_ACTIONS)
    return {
        "categories": {c.value: list(k) for c, k in CATEGORY_KEYWORDS.items()},
        "priorities": {p.value: list(k) for p, k in PRIORITY_KEYWORDS.items()},
        "actions": actions,
    }
